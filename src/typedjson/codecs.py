"""Conversion of serializable object graphs to JSON-compatible builtins."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from datetime import date
from typing import Any

from typedjson.dates import InvalidDate, format_date
from typedjson.types import UNDEFINED


def to_builtins(obj: Any) -> Any:
    """Convert an object tree to JSON-compatible Python builtins.

    Follows the rules of JSON stringification: objects with a ``to_json``
    method are replaced by its result, keys whose value is UNDEFINED are
    dropped, and UNDEFINED elsewhere becomes None.

    Args:
        obj: Any Python object, typically a Serializable instance

    Returns:
        JSON-compatible Python value (dict, list, str, int, float, bool, None)

    """
    # 1. Absent values and unparseable dates
    if obj is UNDEFINED or isinstance(obj, InvalidDate):
        return None

    # 2. Anything that knows how to snapshot itself (Serializable and friends)
    to_json = getattr(obj, "to_json", None)
    if callable(to_json) and not isinstance(obj, type):
        return to_builtins(to_json())

    # 3. Dates become ISO 8601 strings
    if isinstance(obj, date):
        return format_date(obj)

    # 4. Mappings, skipping UNDEFINED values
    if isinstance(obj, Mapping):
        return {
            str(k): to_builtins(v) for k, v in obj.items() if v is not UNDEFINED
        }

    # 5. Sequences and sets become JSON arrays
    if isinstance(obj, AbstractSet):
        return [to_builtins(item) for item in obj]
    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    # 6. Primitives pass through
    return obj
