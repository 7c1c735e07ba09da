"""Error taxonomy of the conformance harness."""

from typing import ClassVar, Literal


class HarnessError(Exception):
    """Base class for all harness errors."""


class FixtureNotFoundError(HarnessError, FileNotFoundError):
    """Raised when a fixture file does not exist."""


class InvalidFixtureError(HarnessError, ValueError):
    """Raised when a fixture cannot be read or its metadata is malformed."""


class HostNotFoundError(HarnessError):
    """Raised when a host is not found."""


class EvaluationFault(HarnessError):
    """Raised by a realm when evaluating source does not complete normally."""

    kind: ClassVar[Literal["syntax", "runtime", "timeout"]]

    def __init__(self, message: str, *, error_name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_name = error_name

    def __str__(self) -> str:
        if self.error_name:
            return f"{self.error_name}: {self.message}"
        return self.message


class SyntaxFault(EvaluationFault):
    """Source failed to parse."""

    kind = "syntax"


class RuntimeFault(EvaluationFault):
    """Uncaught throw during evaluation."""

    kind = "runtime"


class TimeoutFault(EvaluationFault):
    """Evaluation exceeded the host's time limit."""

    kind = "timeout"


class AssertionFail(HarnessError):
    """Entry point returned a value other than true."""
