"""Abstract base classes for scripting hosts and their realms."""

import json
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any

from conformance_harness.models.descriptor import PropertyDescriptor

DESCRIPTOR_EXPRESSION = """(function (name) {
  var desc = Object.getOwnPropertyDescriptor(Function("return this")(), name);
  if (desc === undefined) {
    return null;
  }
  var value = null;
  if ("value" in desc) {
    value = desc.value;
    var type = typeof value;
    if (type === "function") {
      value = "[function " + value.name + "]";
    } else if (type === "number" && !isFinite(value)) {
      value = String(value);
    } else if (value !== null && type !== "string" && type !== "number" &&
               type !== "boolean") {
      value = "[" + type + "]";
    }
  }
  return {
    value: value,
    writable: "writable" in desc ? desc.writable : null,
    enumerable: desc.enumerable,
    configurable: desc.configurable
  };
})(%s)"""


class Realm(ABC):
    """One isolated global environment of a scripting host.

    Every realm starts from a pristine global object; nothing evaluated in
    one realm is visible in another.
    """

    @abstractmethod
    def evaluate(self, source: str, *, strict: bool = False) -> None:
        """Evaluate source as a script in the realm's global scope.

        Args:
            source: Script source text
            strict: Evaluate the source as strict mode code

        Raises:
            SyntaxFault: If the source fails to parse
            RuntimeFault: If evaluation throws and nothing catches it
            TimeoutFault: If evaluation exceeds the host's time limit

        """

    @abstractmethod
    def evaluate_json(self, expression: str) -> Any:
        """Evaluate an expression and return its JSON-decoded value.

        Returns None when the expression evaluates to undefined.
        """

    def get_global_property_descriptor(self, name: str) -> PropertyDescriptor | None:
        """Describe an own property of the realm's global object.

        Args:
            name: Property name (e.g., "escape")

        Returns:
            The property descriptor, or None if the property doesn't exist

        """
        data = self.evaluate_json(DESCRIPTOR_EXPRESSION % json.dumps(name))
        if data is None:
            return None
        return PropertyDescriptor.model_validate(data)


class Host(ABC):
    """Abstract base for scripting hosts that fixtures run on."""

    @abstractmethod
    def open_realm(self) -> AbstractContextManager[Realm]:
        """Create a fresh realm, released when the context exits."""

