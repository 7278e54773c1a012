"""Telemetry subpackage (lightweight).

Exposes the timer, the emission seam and the bundled sinks.
"""

from .logging import configure_logging, get_logger
from .events import emit, get_sink, reset_sink, set_sink, use_sink
from .metrics import Timer, tc
from .sinks import FanoutSink, LoggingSink, NullSink, PrometheusSink, RecordingSink, Sink

__all__ = [
    "Timer",
    "configure_logging",
    "get_logger",
    "tc",
    "emit",
    "get_sink",
    "set_sink",
    "reset_sink",
    "use_sink",
    "Sink",
    "FanoutSink",
    "LoggingSink",
    "NullSink",
    "PrometheusSink",
    "RecordingSink",
]
