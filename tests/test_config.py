from __future__ import annotations

import logging

import pytest

from telemetry_wrappers import ConfigError
from telemetry_wrappers.config import Settings, build_default_sink, load_settings
from telemetry_wrappers.telemetry.events import emit, get_sink
from telemetry_wrappers.telemetry.sinks import LoggingSink, NullSink, PrometheusSink


_VARS = (
    "TELEMETRY_WRAPPERS_SINK",
    "TELEMETRY_WRAPPERS_PROM_PREFIX",
    "TELEMETRY_WRAPPERS_PROM_BUCKETS",
    "TELEMETRY_WRAPPERS_LOG_EVENTS_AT_INFO",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = load_settings()
    assert s == Settings()
    assert isinstance(build_default_sink(s), LoggingSink)


def test_settings_from_env(clean_env):
    clean_env.setenv("TELEMETRY_WRAPPERS_SINK", " Prometheus ")
    clean_env.setenv("TELEMETRY_WRAPPERS_PROM_PREFIX", "svc")
    clean_env.setenv("TELEMETRY_WRAPPERS_PROM_BUCKETS", "1000, 10, 100")
    clean_env.setenv("TELEMETRY_WRAPPERS_LOG_EVENTS_AT_INFO", "yes")
    s = load_settings()
    assert s.sink == "prometheus"
    assert s.prom_prefix == "svc"
    assert s.prom_buckets == (10.0, 100.0, 1000.0)
    assert s.log_events_at_info is True


def test_bad_buckets_fall_back_to_library_defaults(clean_env):
    clean_env.setenv("TELEMETRY_WRAPPERS_PROM_BUCKETS", "fast, slow")
    assert load_settings().prom_buckets is None


def test_build_default_sink_variants():
    assert isinstance(build_default_sink(Settings(sink="null")), NullSink)
    assert isinstance(build_default_sink(Settings(sink="prometheus", prom_prefix="cfgtest")), PrometheusSink)
    info = build_default_sink(Settings(log_events_at_info=True))
    assert isinstance(info, LoggingSink)
    assert info._level == logging.INFO


def test_unknown_sink_name_raises(clean_env):
    with pytest.raises(ConfigError, match="unknown sink"):
        build_default_sink(Settings(sink="statsd"))


def test_emit_builds_default_sink_lazily(clean_env):
    clean_env.setenv("TELEMETRY_WRAPPERS_SINK", "null")
    emit(["lazy"], {"call": 1}, {})
    assert isinstance(get_sink(), NullSink)
