"""Configuration for telemetry_wrappers.

Settings come from environment variables:
- TELEMETRY_WRAPPERS_SINK: logging|prometheus|null (default logging)
- TELEMETRY_WRAPPERS_PROM_PREFIX: prefix for histogram names (default empty)
- TELEMETRY_WRAPPERS_PROM_BUCKETS: comma-separated bucket bounds in microseconds
- TELEMETRY_WRAPPERS_LOG_EVENTS_AT_INFO: log events at INFO instead of DEBUG
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .core.errors import ConfigError
from .telemetry.sinks import LoggingSink, NullSink, PrometheusSink, Sink
from .utils.env import env_bool, env_list_float, env_str


SINK_NAMES: Tuple[str, ...] = ("logging", "prometheus", "null")


@dataclass(frozen=True, slots=True)
class Settings:
    sink: str = "logging"
    prom_prefix: str = ""
    prom_buckets: Optional[Tuple[float, ...]] = None
    log_events_at_info: bool = False


def load_settings() -> Settings:
    buckets = env_list_float("TELEMETRY_WRAPPERS_PROM_BUCKETS")
    return Settings(
        sink=env_str("TELEMETRY_WRAPPERS_SINK", "logging", lower=True),
        prom_prefix=env_str("TELEMETRY_WRAPPERS_PROM_PREFIX", ""),
        prom_buckets=tuple(sorted(buckets)) if buckets else None,
        log_events_at_info=env_bool("TELEMETRY_WRAPPERS_LOG_EVENTS_AT_INFO", False),
    )


def build_default_sink(settings: Optional[Settings] = None) -> Sink:
    s = settings or load_settings()
    if s.sink == "logging":
        return LoggingSink(level=logging.INFO if s.log_events_at_info else logging.DEBUG)
    if s.sink == "prometheus":
        return PrometheusSink(prefix=s.prom_prefix, buckets=s.prom_buckets)
    if s.sink == "null":
        return NullSink()
    raise ConfigError(f"unknown sink {s.sink!r}; expected one of {', '.join(SINK_NAMES)}")
