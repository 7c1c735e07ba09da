"""Tests for fixture runner on the V8 host."""

from pathlib import Path

from conformance_harness.fixture_loader import load_fixture
from conformance_harness.hosts.v8 import V8Config, V8Host
from conformance_harness.runner import FixtureRunner

from .conftest import WriteFixtureFn


def test_throwing_entry_point_is_error_and_runner_stays_usable(
    runner: FixtureRunner, write_fixture: WriteFixtureFn, escape_fixture_path: Path
) -> None:
    """A throwing fixture yields error and the next fixture still passes."""
    throwing = write_fixture(
        "throwing.js",
        "function testcase() { throw new RangeError('nope'); }\n"
        "runTestCase(testcase);\n",
    )

    fixtures = [load_fixture(throwing), load_fixture(escape_fixture_path)]

    reports = runner.run_all(fixtures)

    assert reports[0].result.status == "error"
    assert reports[0].result.fault == "runtime"
    assert reports[0].result.message is not None
    assert reports[0].result.message.startswith("RangeError: nope")
    assert reports[1].result.status == "pass"


def test_syntax_error_fixture(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """A fixture that fails to parse yields error/syntax."""
    path = write_fixture("broken.js", "function testcase() { return true;\n")

    result = runner.run(load_fixture(path))

    assert result.status == "error"
    assert result.fault == "syntax"


def test_top_level_return_is_syntax_error(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """Fixture source is a Script, so return outside a function can't parse."""
    path = write_fixture("return.js", "return;\n")

    result = runner.run(load_fixture(path))

    assert result.status == "error"
    assert result.fault == "syntax"


def test_global_var_is_not_configurable(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """Top-level var declarations create non-deletable global properties."""
    path = write_fixture(
        "global-var.js",
        "var x = 1;\n"
        "runTestCase(function () {\n"
        '  var desc = Object.getOwnPropertyDescriptor(fnGlobalObject(), "x");\n'
        "  return desc.configurable === false && delete fnGlobalObject().x === false;\n"
        "});\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_strict_global_var_lands_on_global_object(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """Strict fixtures still declare their top-level vars on the global object."""
    path = write_fixture(
        "strict-global-var.js",
        "/**\n * @onlyStrict\n */\n"
        "var y = 1;\n"
        "runTestCase(function () { return fnGlobalObject().y === 1; });\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_harness_bookkeeping_is_not_enumerable(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """for-in over the global object doesn't see the harness's own bindings."""
    path = write_fixture(
        "enumerate-global.js",
        "runTestCase(function () {\n"
        "  for (var key in fnGlobalObject()) {\n"
        '    if (key.indexOf("__harness") === 0) {\n'
        "      return false;\n"
        "    }\n"
        "  }\n"
        "  return true;\n"
        "});\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_infinite_loop_fixture_times_out(write_fixture: WriteFixtureFn) -> None:
    """A fixture that never terminates yields error/timeout."""
    runner = FixtureRunner(host=V8Host(config=V8Config(timeout=0.5)))
    path = write_fixture("loop.js", "while (true) {}\n")

    result = runner.run(load_fixture(path))

    assert result.status == "error"
    assert result.fault == "timeout"


def test_negative_parse_fixture_passes(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """A parse-negative fixture passes on SyntaxError."""
    path = write_fixture(
        "negative.js",
        "/*---\ndescription: invalid\nnegative:\n  phase: parse\n"
        "  type: SyntaxError\n---*/\n$DONOTEVALUATE();\nvar = 1;\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_legacy_strict_negative_fixture_passes(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """with is a SyntaxError in strict mode code."""
    path = write_fixture(
        "with.js",
        "/**\n * @onlyStrict\n * @negative ^((?!NotEarlyError).)*$\n */\n"
        "with ({}) {}\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_negative_runtime_fixture_fails_when_nothing_is_thrown(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """A runtime-negative fixture fails when evaluation completes."""
    path = write_fixture(
        "completes.js",
        "/*---\nnegative:\n  phase: runtime\n  type: Test262Error\n---*/\nvar x = 1;\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "fail"


def test_assert_helpers(runner: FixtureRunner, write_fixture: WriteFixtureFn) -> None:
    """The prelude's assertion helpers pass for conforming behavior."""
    path = write_fixture(
        "helpers.js",
        "/*---\ndescription: helpers\nincludes: [propertyHelper.js]\n---*/\n"
        "assert(true);\n"
        "assert.sameValue(NaN, NaN);\n"
        "assert.notSameValue(0, -0);\n"
        "assert.throws(TypeError, function () { null.x; });\n"
        "assert.compareArray([1, 2], [1, 2]);\n"
        "assert(fnExists(escape, unescape));\n"
        'verifyProperty(this, "escape", '
        "{writable: true, enumerable: false, configurable: true});\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_failed_assertion_is_runtime_error(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """A failing assert throws Test262Error."""
    path = write_fixture("failing.js", "assert.sameValue(1, 2, 'numbers');\n")

    result = runner.run(load_fixture(path))

    assert result.status == "error"
    assert result.fault == "runtime"
    assert result.message is not None
    assert result.message.startswith(
        "Test262Error: numbers Expected SameValue(1, 2) to be true"
    )


def test_print_output_is_captured(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """$PRINT output is kept on the result."""
    path = write_fixture("print.js", "$PRINT('hello'); $PRINT(42);\n")

    result = runner.run(load_fixture(path))

    assert result.status == "pass"
    assert result.output == ("hello", "42")


def test_raw_fixture_runs_without_prelude(
    runner: FixtureRunner, write_fixture: WriteFixtureFn
) -> None:
    """Raw fixtures have no harness bindings."""
    path = write_fixture(
        "raw.js",
        "/*---\nflags: [raw]\n---*/\n"
        "if (typeof runTestCase !== 'undefined') { throw new Error('prelude'); }\n",
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"


def test_include_directory(write_fixture: WriteFixtureFn, tmp_path: Path) -> None:
    """Includes are evaluated from the include directory."""
    include_dir = tmp_path / "harness"
    include_dir.mkdir()
    (include_dir / "answer.js").write_text("function answer() { return 42; }\n")
    path = write_fixture(
        "include.js",
        "/*---\nincludes: [answer.js]\n---*/\nassert.sameValue(answer(), 42);\n",
    )
    runner = FixtureRunner(
        host=V8Host(config=V8Config(timeout=5)), include_dir=include_dir
    )

    result = runner.run(load_fixture(path))

    assert result.status == "pass"
