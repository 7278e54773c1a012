"""Timed function definitions that emit call durations as metric events.

Exposes the ``deftimed``/``deftimedp`` decorators, the ``wrap_timed``
higher-order form, and the sink controls from ``telemetry.events``.
"""

from .core.errors import ConfigError, DefinitionError, TelemetryWrappersError
from .core.schemas import Event
from .telemetry.events import emit, get_sink, reset_sink, set_sink, use_sink
from .wrappers import deftimed, deftimedp, wrap_timed

__version__ = "0.1.0"

__all__ = [
    "deftimed",
    "deftimedp",
    "wrap_timed",
    "emit",
    "get_sink",
    "set_sink",
    "reset_sink",
    "use_sink",
    "Event",
    "TelemetryWrappersError",
    "DefinitionError",
    "ConfigError",
]
