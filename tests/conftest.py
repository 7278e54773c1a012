from __future__ import annotations

import pytest

from telemetry_wrappers.telemetry.events import reset_sink, set_sink
from telemetry_wrappers.telemetry.sinks import RecordingSink


@pytest.fixture(autouse=True)
def _fresh_sink():
    reset_sink()
    yield
    reset_sink()


@pytest.fixture
def recorder() -> RecordingSink:
    sink = RecordingSink()
    set_sink(sink)
    return sink
