"""Error types for deserialization mismatches.

Deserialization itself never raises on bad input; it reports each mismatch
to a reporter. The types here are what reporters raise when a caller wants
strict behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Constant for error message truncation
_MAX_MISMATCHES_SHOWN = 10
_MAX_VALUE_REPR = 80


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_REPR:
        return text[: _MAX_VALUE_REPR - 3] + "..."
    return text


@dataclass(frozen=True)
class Mismatch:
    """A value that matched none of a property's accepted types.

    ``prop`` is empty when the whole input was rejected.
    """

    owner: type
    prop: str
    message: str
    value: Any

    def format(self) -> str:
        """Format the mismatch for display."""
        return (
            f"{self.owner.__name__}.from_json: json.{self.prop} {self.message}: "
            f"{_short_repr(self.value)}"
        )


class TypedJSONError(Exception):
    """Base class for typedjson errors."""


class WrongTypeError(TypedJSONError, TypeError):
    """A single mismatch, raised by RaisingReporter."""

    def __init__(self, mismatch: Mismatch) -> None:
        super().__init__(mismatch.format())
        self.mismatch = mismatch


class DeserializationError(TypedJSONError, ValueError):
    """All mismatches collected over one or more from_json passes."""

    def __init__(self, mismatches: list[Mismatch]) -> None:
        self.mismatches = list(mismatches)
        super().__init__(self._format())

    def _format(self) -> str:
        count = len(self.mismatches)
        lines = [f"Found {count} mismatch{'es' if count != 1 else ''}:"]
        lines.extend(
            f"  {m.format()}" for m in self.mismatches[:_MAX_MISMATCHES_SHOWN]
        )
        if count > _MAX_MISMATCHES_SHOWN:
            lines.append(f"  ... and {count - _MAX_MISMATCHES_SHOWN} more")
        return "\n".join(lines)
