"""Property descriptor record reported by hosts."""

from typing import Any

from pydantic import Field

from conformance_harness.models.base import Model


class PropertyDescriptor(Model):
    """Value and attribute flags of an own property.

    Values that cannot be represented outside the engine (functions, objects,
    symbols, undefined, bigint, non-finite numbers) are reported as a display
    string such as ``[function escape]``.
    """

    value: Any = Field(default=None, description="Property value or its display")
    writable: bool | None = Field(
        default=None, description="Writable flag (None for accessor properties)"
    )
    enumerable: bool = Field(..., description="Enumerable flag")
    configurable: bool = Field(..., description="Configurable flag")

    @property
    def is_accessor(self) -> bool:
        """Whether the property is an accessor rather than a data property."""
        return self.writable is None
