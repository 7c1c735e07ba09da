"""Fixture runner executing conformance fixtures on a host."""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from conformance_harness.errors import (
    AssertionFail,
    EvaluationFault,
    HarnessError,
    SyntaxFault,
    TimeoutFault,
)
from conformance_harness.harness import HARNESS_SOURCE, OUTCOMES_BINDING, OUTPUT_BINDING
from conformance_harness.hosts.base import Host, Realm
from conformance_harness.models.fixture import ENTRY_POINT, Fixture, NegativeExpectation
from conformance_harness.models.result import (
    ExecutionResult,
    FaultKind,
    FixtureReport,
    Status,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class FixtureRunner:
    """Runs fixtures one at a time, each in a fresh realm of the host."""

    host: Host
    include_dir: Path | None = None

    def run(self, fixture: Fixture) -> ExecutionResult:
        """Run a fixture and return its outcome.

        Faults raised while the fixture executes are reported in the result
        and never propagated to the caller.

        Args:
            fixture: The loaded fixture

        Returns:
            Exactly one result: pass, fail or error

        """
        start = time.monotonic()

        if unsupported := fixture.unsupported_flags:
            return ExecutionResult(
                status="error",
                duration=0.0,
                fault="unsupported",
                message=f"Unsupported fixture flags: {', '.join(unsupported)}",
            )

        output: Sequence[str] = ()
        status: Status
        fault: FaultKind | None
        message: str | None
        try:
            with self.host.open_realm() as realm:
                try:
                    status, fault, message = self._execute(realm, fixture)
                finally:
                    if not fixture.raw:
                        output = self._read_output(realm)
        except HarnessError as e:
            log.error("Harness failure running %s: %s", fixture.path, e)
            status, fault, message = "error", "harness", str(e)
        except Exception as e:
            log.error("Host failure running %s: %s", fixture.path, e, exc_info=e)
            status, fault, message = "error", "harness", str(e)

        for line in output:
            log.info("%s: %s", fixture.path, line)

        return ExecutionResult(
            status=status,
            duration=time.monotonic() - start,
            fault=fault,
            message=message,
            output=output,
        )

    def run_all(self, fixtures: Sequence[Fixture]) -> Sequence[FixtureReport]:
        """Run fixtures in order; a failing fixture never stops the batch."""
        log.info("Running %d fixture(s)...", len(fixtures))
        reports: list[FixtureReport] = []

        for fixture in fixtures:
            result = self.run(fixture)
            log.info(
                "Fixture completed: path=%s status=%s duration=%.3fs",
                fixture.path,
                result.status,
                result.duration,
            )
            reports.append(
                FixtureReport(
                    fixture_path=str(fixture.path),
                    description=fixture.description,
                    result=result,
                )
            )

        return reports

    def _execute(
        self, realm: Realm, fixture: Fixture
    ) -> tuple[Status, FaultKind | None, str | None]:
        """Evaluate the fixture in the realm and decide status, fault and message."""
        if not fixture.raw:
            realm.evaluate(HARNESS_SOURCE)
            for name, source in self._read_includes(fixture):
                log.debug("Evaluating include %s", name)
                try:
                    realm.evaluate(source)
                except EvaluationFault as e:
                    raise HarnessError(f"Include {name} failed: {e}") from e

        negative = fixture.metadata.negative
        try:
            realm.evaluate(fixture.source, strict=fixture.strict and not fixture.raw)
        except TimeoutFault as e:
            return "error", "timeout", str(e)
        except EvaluationFault as e:
            if negative is None:
                return "error", e.kind, str(e)
            if expects_fault(negative, e):
                return "pass", None, None
            return "fail", e.kind, f"Expected {describe_negative(negative)}, got {e}"

        if negative is not None:
            return (
                "fail",
                "assertion",
                f"Expected {describe_negative(negative)}, but evaluation completed",
            )

        if fixture.raw:
            return "pass", None, None

        try:
            self._check_outcomes(realm, fixture)
        except AssertionFail as e:
            return "fail", "assertion", str(e)

        return "pass", None, None

    def _check_outcomes(self, realm: Realm, fixture: Fixture) -> None:
        outcomes: Sequence[bool] = realm.evaluate_json(OUTCOMES_BINDING) or []

        if not all(outcome is True for outcome in outcomes):
            raise AssertionFail("Test case returned non-true value!")

        if not outcomes and fixture.declares_entry_point:
            raise AssertionFail(
                f"Entry point '{ENTRY_POINT}' was never passed to runTestCase"
            )

    def _read_output(self, realm: Realm) -> Sequence[str]:
        try:
            return tuple(realm.evaluate_json(OUTPUT_BINDING) or ())
        except EvaluationFault as e:
            log.warning("Could not read fixture output: %s", e)
            return ()

    def _read_includes(self, fixture: Fixture) -> Sequence[tuple[str, str]]:
        includes = fixture.extra_includes
        if not includes:
            return []

        if self.include_dir is None:
            raise HarnessError(
                f"Fixture requires includes {list(includes)} "
                "but no include directory is configured"
            )

        sources: list[tuple[str, str]] = []
        for name in includes:
            include_path = self.include_dir / name
            if not include_path.is_file():
                raise HarnessError(f"Include not found: {include_path}")
            sources.append((name, include_path.read_text(encoding="utf-8")))
        return sources


def expects_fault(negative: NegativeExpectation, fault: EvaluationFault) -> bool:
    """Check whether a fault is the error a negative fixture expects."""
    if negative.phase == "any":
        phase_matches = True
    elif isinstance(fault, SyntaxFault):
        phase_matches = negative.at_parse_time
    else:
        phase_matches = negative.phase == "runtime"

    return phase_matches and negative.matches(fault.error_name, fault.message)


def describe_negative(negative: NegativeExpectation) -> str:
    """Human-readable form of a negative expectation."""
    expected = negative.type or "an error"
    if negative.pattern:
        expected = f"{expected} matching /{negative.pattern}/"
    if negative.phase != "any":
        expected = f"{expected} during {negative.phase} phase"
    return expected
