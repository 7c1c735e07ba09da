"""V8 host implementation backed by mini-racer."""

import json
import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from py_mini_racer import (
    JSEvalException,
    JSOOMException,
    JSParseException,
    JSTimeoutException,
    MiniRacer,
)

from conformance_harness.errors import (
    EvaluationFault,
    HarnessError,
    RuntimeFault,
    SyntaxFault,
    TimeoutFault,
)
from conformance_harness.hosts.base import Host, Realm
from conformance_harness.hosts.v8.config import V8Config

log = logging.getLogger(__name__)

STRICT_DIRECTIVE = '"use strict";\n'

# V8 reports uncaught throws as "[Uncaught ]Name: message" in the first line,
# or "Uncaught <value>" for thrown primitives and plain objects.
ERROR_TEXT = re.compile(
    r"(?:^|\s)(?:Uncaught\s+)?(?P<name>[A-Za-z_$][\w$]*Error)"
    r"(?::[ \t]*(?P<message>[^\n]*))?"
)
UNCAUGHT_VALUE = re.compile(r"Uncaught\s+(?P<value>[^\n]*)")


def parse_exception_text(text: str) -> tuple[str | None, str]:
    """Split an engine exception text into error name and message.

    Args:
        text: The exception text reported by mini-racer

    Returns:
        The error constructor name (None for thrown primitives) and message

    """
    if match := ERROR_TEXT.search(text):
        return match.group("name"), (match.group("message") or "").strip()

    if match := UNCAUGHT_VALUE.search(text):
        return None, match.group("value").strip()

    first_line, _, _ = text.strip().partition("\n")
    return None, first_line


@dataclass(frozen=True, kw_only=True)
class V8Realm(Realm):
    """Realm living in its own V8 context."""

    config: V8Config
    context: MiniRacer = field(repr=False)

    def evaluate(self, source: str, *, strict: bool = False) -> None:
        """Evaluate source as a Script, raising an EvaluationFault on failure."""
        if strict:
            source = STRICT_DIRECTIVE + source

        self._eval(source)

    def evaluate_json(self, expression: str) -> Any:
        """Evaluate an expression and decode it from JSON."""
        raw = self._eval(f"JSON.stringify({expression})")
        if not isinstance(raw, str):
            return None
        return json.loads(raw)

    def _eval(self, code: str) -> Any:
        limits: dict[str, Any] = {"timeout": int(self.config.timeout * 1000)}
        if self.config.max_memory is not None:
            limits["max_memory"] = self.config.max_memory

        try:
            return self.context.eval(code, **limits)
        except JSTimeoutException as e:
            raise TimeoutFault(
                f"Evaluation did not complete within {self.config.timeout} seconds"
            ) from e
        except JSOOMException as e:
            raise RuntimeFault("Evaluation exceeded the memory limit") from e
        except JSParseException as e:
            name, message = parse_exception_text(str(e))
            raise SyntaxFault(message, error_name=name or "SyntaxError") from e
        except JSEvalException as e:
            name, message = parse_exception_text(str(e))
            raise RuntimeFault(message, error_name=name) from e


@dataclass(frozen=True, kw_only=True)
class V8Host(Host):
    """Host running each realm in a new V8 context."""

    config: V8Config

    @classmethod
    def from_config(cls, config: V8Config) -> "V8Host":
        """Create a host from its configuration."""
        return cls(config=config)

    @contextmanager
    def open_realm(self) -> Iterator[V8Realm]:
        """Create a fresh V8 context and close it when the realm is released."""
        context = MiniRacer()
        try:
            realm = V8Realm(config=self.config, context=context)
            if self.config.setup_script:
                log.debug("Running host setup script")
                try:
                    realm.evaluate(self.config.setup_script)
                except EvaluationFault as e:
                    raise HarnessError(f"Host setup script failed: {e}") from e
            yield realm
        finally:
            context.close()
