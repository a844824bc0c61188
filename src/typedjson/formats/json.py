"""JSON format adapter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, overload

from typedjson.codecs import to_builtins

if TYPE_CHECKING:
    from typedjson.serializable import Serializable


def dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize a Serializable (or any tree containing them) to JSON text.

    Args:
        obj: The object to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    """
    return json.dumps(to_builtins(obj), indent=indent)


@overload
def loads[T: Serializable](s: str | bytes, cls: type[T]) -> T: ...


@overload
def loads(s: str | bytes, cls: None = None) -> Any: ...


def loads(s: str | bytes, cls: type[Serializable] | None = None) -> Any:
    """Parse JSON text, optionally filling a new instance of cls.

    Args:
        s: JSON text
        cls: Serializable class to fill; the parsed value is returned as is
            when omitted

    Returns:
        A filled cls instance, or the parsed JSON value

    Raises:
        json.JSONDecodeError: If the text is not valid JSON

    """
    data = json.loads(s)
    if cls is None:
        return data
    return cls.from_json(data)
