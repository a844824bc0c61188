"""Mismatch reporters: what happens when a value matches no accepted type."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from typedjson.errors import DeserializationError, Mismatch, WrongTypeError

logger = logging.getLogger(__name__)


class MismatchReporter(ABC):
    """Strategy invoked by Serializable.on_wrong_type."""

    @abstractmethod
    def report(self, mismatch: Mismatch) -> None:
        """Handle one mismatch."""
        ...

    def __call__(self, owner: type, prop: str, message: str, value: Any) -> None:
        self.report(Mismatch(owner=owner, prop=prop, message=message, value=value))


class LogReporter(MismatchReporter):
    """Log each mismatch and carry on. The default reporter."""

    def __init__(
        self,
        log: logging.Logger | None = None,
        level: int = logging.WARNING,
    ) -> None:
        self.log = log if log is not None else logger
        self.level = level

    def report(self, mismatch: Mismatch) -> None:
        self.log.log(self.level, "%s", mismatch.format())


class RaisingReporter(MismatchReporter):
    """Raise WrongTypeError on the first mismatch."""

    def report(self, mismatch: Mismatch) -> None:
        raise WrongTypeError(mismatch)


class CollectingReporter(MismatchReporter):
    """Accumulate mismatches for later inspection.

    Usage:
        reporter = CollectingReporter()

        class User(Serializable, reporter=reporter):
            name: str

        User.from_json(data)
        reporter.raise_if_any()
    """

    def __init__(self) -> None:
        self.mismatches: list[Mismatch] = []

    def report(self, mismatch: Mismatch) -> None:
        self.mismatches.append(mismatch)

    def clear(self) -> None:
        """Forget everything collected so far."""
        self.mismatches.clear()

    def raise_if_any(self) -> None:
        """Raise DeserializationError if anything was collected, then reset."""
        if self.mismatches:
            mismatches = list(self.mismatches)
            self.clear()
            raise DeserializationError(mismatches)

    def __len__(self) -> int:
        return len(self.mismatches)
