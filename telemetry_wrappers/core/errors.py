"""Common exceptions for telemetry_wrappers."""
from __future__ import annotations


class TelemetryWrappersError(Exception):
    pass


class DefinitionError(TelemetryWrappersError, TypeError):
    """A timed function was declared with arguments that cannot work."""


class ConfigError(TelemetryWrappersError, ValueError):
    pass
