"""Date parsing for DateType properties."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any


@dataclass(frozen=True)
class InvalidDate:
    """A date slot that was filled from input that could not be parsed.

    Plays the role of an invalid instant: falsy, and encoded as null.
    """

    raw: Any

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "Invalid Date"


def parse_date(value: str | date) -> datetime | InvalidDate:
    """Convert a string or date value to a datetime.

    Strings are parsed as ISO 8601 (a trailing ``Z`` means UTC). A datetime is
    returned as is, a plain date becomes midnight of that day. Anything that
    cannot be parsed yields an InvalidDate wrapping the input.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        return InvalidDate(raw=value)


def format_date(value: datetime | date) -> str:
    """Format a date as ISO 8601, using ``Z`` for UTC offsets."""
    text = value.isoformat()
    if isinstance(value, datetime) and value.utcoffset() == timedelta(0):
        return text.removesuffix("+00:00") + "Z"
    return text
