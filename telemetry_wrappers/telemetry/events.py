"""Process-wide metric emission.

``emit`` is the single seam between timed functions and whatever consumes
their events. The current sink is a module-level reference: reads are a
plain attribute load, replacements happen under a lock.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional, Sequence

from ..core.schemas import Channel
from .sinks import Sink


_SINK: Optional[Sink] = None
_LOCK = threading.Lock()


def get_sink() -> Sink:
    global _SINK
    sink = _SINK
    if sink is not None:
        return sink
    from ..config import build_default_sink

    with _LOCK:
        if _SINK is None:
            _SINK = build_default_sink()
        return _SINK


def set_sink(sink: Sink) -> Optional[Sink]:
    """Install ``sink`` for all subsequent emissions; return the previous one."""
    global _SINK
    if not callable(sink):
        raise TypeError(f"sink must be callable, got {type(sink).__name__}")
    with _LOCK:
        prev, _SINK = _SINK, sink
    return prev


def reset_sink() -> None:
    """Forget the current sink; the next emission rebuilds it from config."""
    global _SINK
    with _LOCK:
        _SINK = None


@contextmanager
def use_sink(sink: Sink) -> Iterator[Sink]:
    global _SINK
    prev = set_sink(sink)
    try:
        yield sink
    finally:
        with _LOCK:
            _SINK = prev


def emit(channel: Sequence[str], measurements: Mapping[str, int], metadata: Mapping[str, object]) -> None:
    """Hand one event to the current sink. Sink errors propagate."""
    ch: Channel = tuple(channel)
    get_sink()(ch, dict(measurements), dict(metadata))
