"""Tests for fixture models."""

from pathlib import Path

import pytest

from conformance_harness.models.fixture import (
    Fixture,
    FixtureMetadata,
    NegativeExpectation,
)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("function testcase() { return true; }", True),
        ("function  testcase  () {}", True),
        ("function testcases() {}", False),
        ("var testcase = function () {};", False),
    ],
)
def test_declares_entry_point(source: str, expected: bool) -> None:
    """Detects a testcase function declaration."""
    fixture = Fixture(path=Path("a.js"), source=source)

    assert fixture.declares_entry_point is expected


def test_flags_properties() -> None:
    """Derives strict, raw and unsupported flags from metadata."""
    fixture = Fixture(
        path=Path("a.js"),
        source="",
        metadata=FixtureMetadata(flags=["onlyStrict", "raw", "module", "async"]),
    )

    assert fixture.strict
    assert fixture.raw
    assert fixture.unsupported_flags == ["async", "module"]


def test_default_fixture_has_no_flags() -> None:
    """A fixture without flags runs sloppy with the prelude."""
    fixture = Fixture(path=Path("a.js"), source="")

    assert not fixture.strict
    assert not fixture.raw
    assert fixture.unsupported_flags == []


def test_fixture_is_immutable() -> None:
    """Fixtures can't be mutated once loaded."""
    fixture = Fixture(path=Path("a.js"), source="")

    with pytest.raises(ValueError):
        fixture.source = "changed"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("expectation", "name", "message", "expected"),
    [
        (NegativeExpectation(), "TypeError", "x", True),
        (NegativeExpectation(type="TypeError"), "TypeError", "x", True),
        (NegativeExpectation(type="TypeError"), "RangeError", "x", False),
        (NegativeExpectation(pattern="NotEarlyError"), "Test262Error", "x", False),
        (NegativeExpectation(pattern="bad value$"), "Error", "a bad value", True),
        (NegativeExpectation(pattern="^Thrown"), None, "1", False),
    ],
)
def test_negative_matches(
    expectation: NegativeExpectation,
    name: str | None,
    message: str,
    expected: bool,
) -> None:
    """Matches error names and messages."""
    assert expectation.matches(name, message) is expected
