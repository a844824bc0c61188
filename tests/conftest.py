"""Shared fixtures."""

import pytest

from typedjson.reporting import CollectingReporter
from typedjson.serializable import Serializable


@pytest.fixture
def collector(monkeypatch: pytest.MonkeyPatch) -> CollectingReporter:
    """Route mismatches from every model without its own reporter here."""
    reporter = CollectingReporter()
    monkeypatch.setattr(Serializable, "json_reporter", reporter)
    return reporter
