"""Models for fixture execution results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Status = Literal["pass", "fail", "error"]
FaultKind = Literal[
    "syntax",
    "runtime",
    "timeout",
    "assertion",
    "harness",
    "unsupported",
    "load",
]


@dataclass(frozen=True, kw_only=True)
class ExecutionResult:
    """Result of a single fixture execution.

    Contains only the execution outcome - the caller knows which fixture ran.
    """

    status: Status
    duration: float
    fault: FaultKind | None = None
    message: str | None = None
    output: Sequence[str] = ()

    @property
    def passed(self) -> bool:
        """Whether the fixture passed."""
        return self.status == "pass"


@dataclass(frozen=True, kw_only=True)
class FixtureReport:
    """Result container for one fixture of a batch."""

    fixture_path: str
    description: str
    result: ExecutionResult
