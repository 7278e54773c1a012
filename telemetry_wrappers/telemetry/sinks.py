"""Metric sinks: where timed calls send their events.

A sink is any callable ``(channel, measurements, metadata) -> None``. The
classes here cover the common destinations; anything else (a tracing
exporter, a message bus) can be plugged in with ``events.set_sink``.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Protocol, Sequence

from prometheus_client import REGISTRY, CollectorRegistry

from ..core.schemas import CALL_MEASUREMENT, Channel, Event, Measurements, Metadata
from .logging import get_logger
from .prom import Histogram, metric_name


class Sink(Protocol):
    """Protocol for metric event destinations."""

    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        ...


class NullSink:
    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        return None


class LoggingSink:
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self._log = logger or get_logger("telemetry_wrappers.events")
        self._level = level

    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        if not self._log.isEnabledFor(self._level):
            return
        self._log.log(
            self._level,
            "event=%s measurements=%s metadata=%s",
            ".".join(channel),
            measurements,
            metadata,
        )


class RecordingSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._lock = threading.Lock()

    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        ev = Event(tuple(channel), dict(measurements), dict(metadata))
        with self._lock:
            self._events.append(ev)

    @property
    def events(self) -> List[Event]:
        with self._lock:
            return list(self._events)

    def for_channel(self, channel: Sequence[str]) -> List[Event]:
        want = tuple(channel)
        return [e for e in self.events if e.channel == want]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class PrometheusSink:
    """Observes the ``call`` measurement into one histogram per channel.

    Metadata is not turned into labels: label names must be fixed per
    collector while metadata keys vary per call.
    """

    def __init__(
        self,
        prefix: str = "",
        buckets: Optional[Sequence[float]] = None,
        registry: CollectorRegistry = REGISTRY,
    ) -> None:
        self._prefix = prefix
        self._buckets = list(buckets) if buckets is not None else None
        self._registry = registry
        self._hists: Dict[Channel, Histogram] = {}

    def histogram_for(self, channel: Channel) -> Histogram:
        h = self._hists.get(channel)
        if h is None:
            name = metric_name(channel, prefix=self._prefix, suffix=f"{CALL_MEASUREMENT}_microseconds")
            h = Histogram(
                name,
                f"Duration of calls reported on {'.'.join(channel)} (microseconds)",
                buckets=self._buckets,
                registry=self._registry,
            )
            self._hists[channel] = h
        return h

    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        if CALL_MEASUREMENT not in measurements:
            return
        self.histogram_for(tuple(channel)).observe(float(measurements[CALL_MEASUREMENT]))


class FanoutSink:
    def __init__(self, *sinks: Sink) -> None:
        self.sinks = list(sinks)

    def __call__(self, channel: Channel, measurements: Measurements, metadata: Metadata) -> None:
        for sink in self.sinks:
            sink(channel, measurements, metadata)
