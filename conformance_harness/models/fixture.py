"""Models for conformance fixtures and their metadata."""

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import Field

from conformance_harness.models.base import Model

ENTRY_POINT = "testcase"

ENTRY_POINT_PATTERN = re.compile(rf"\bfunction\s+{ENTRY_POINT}\s*\(")

# Built into the harness prelude, never read from the include directory.
BUILTIN_INCLUDES = frozenset({"assert.js", "sta.js", "propertyHelper.js"})

UNSUPPORTED_FLAGS = frozenset({"async", "module"})


class NegativeExpectation(Model):
    """Error a negative fixture is expected to raise."""

    phase: Literal["parse", "early", "runtime", "resolution", "any"] = Field(
        default="runtime", description="Phase in which the error must occur"
    )
    type: str | None = Field(
        default=None, description="Expected error constructor name"
    )
    pattern: str | None = Field(
        default=None,
        description="Regular expression searched in 'Name: message' (legacy tag)",
    )

    @property
    def at_parse_time(self) -> bool:
        """Whether the error must be raised before evaluation starts."""
        return self.phase in {"parse", "early"}

    def matches(self, error_name: str | None, message: str) -> bool:
        """Check whether a thrown error satisfies this expectation."""
        if self.type is not None and error_name != self.type:
            return False
        if self.pattern:
            return re.search(self.pattern, f"{error_name}: {message}") is not None
        return True


class FixtureMetadata(Model):
    """Metadata parsed from a fixture's comment header."""

    description: str = Field(default="", description="Free-text description")
    path: str | None = Field(default=None, description="Path declared by @path")
    flags: Sequence[str] = Field(default=(), description="Execution flags")
    includes: Sequence[str] = Field(default=(), description="Harness includes")
    features: Sequence[str] = Field(default=(), description="Language features")
    negative: NegativeExpectation | None = Field(
        default=None, description="Expected error for negative fixtures"
    )


class Fixture(Model):
    """A single loaded conformance fixture."""

    path: Path = Field(..., description="Location the fixture was loaded from")
    source: str = Field(..., description="Executable source text")
    metadata: FixtureMetadata = Field(default_factory=FixtureMetadata)

    @property
    def description(self) -> str:
        """Description from the metadata header."""
        return self.metadata.description

    @property
    def strict(self) -> bool:
        """Whether the fixture must run as strict mode code."""
        return "onlyStrict" in self.metadata.flags

    @property
    def raw(self) -> bool:
        """Whether the fixture runs without the harness prelude."""
        return "raw" in self.metadata.flags

    @property
    def unsupported_flags(self) -> Sequence[str]:
        """Flags this harness cannot execute."""
        return sorted(UNSUPPORTED_FLAGS.intersection(self.metadata.flags))

    @property
    def declares_entry_point(self) -> bool:
        """Whether the source declares the ``testcase`` entry point."""
        return ENTRY_POINT_PATTERN.search(self.source) is not None

    @property
    def extra_includes(self) -> Sequence[str]:
        """Includes that must be read from the include directory."""
        return [name for name in self.metadata.includes if name not in BUILTIN_INCLUDES]
