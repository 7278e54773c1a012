"""Shared types for metric channels and emitted events."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


# Ordered symbolic segments naming an event, e.g. ("timing", "add").
Channel = Tuple[str, ...]

Measurements = Dict[str, int]

Metadata = Dict[str, Any]

# Marker segment prepended to the function name when no channel is given.
DEFAULT_MARKER: str = "timing"

# Key under which the call duration (microseconds) is reported.
CALL_MEASUREMENT: str = "call"


@dataclass(frozen=True)
class Event:
    channel: Channel
    measurements: Measurements
    metadata: Metadata = field(default_factory=dict)

    @property
    def duration_us(self) -> int:
        return self.measurements[CALL_MEASUREMENT]
