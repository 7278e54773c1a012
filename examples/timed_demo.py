"""Timed functions demo.

Defines a couple of timed functions, sends their events to both the log and
a Prometheus registry, and prints what was recorded.
"""
from __future__ import annotations

import logging

from prometheus_client import CollectorRegistry, generate_latest

from telemetry_wrappers import deftimed, deftimedp, set_sink
from telemetry_wrappers.telemetry.logging import configure_logging
from telemetry_wrappers.telemetry.sinks import FanoutSink, LoggingSink, PrometheusSink, RecordingSink

__all__ = ["invoke_private"]


@deftimed(["demo", "add"], metadata=lambda a: {"a": a})
def add(a: int, b: int) -> int:
    return a + b


@deftimed
def greet(name: str) -> str:
    return f"hello {name}"


def invoke_private(a):  # noqa: ANN001, ANN201
    return _private_fun(a)


@deftimedp(["something"])
def _private_fun(a):  # noqa: ANN001, ANN202
    return a


if __name__ == "__main__":
    configure_logging()
    registry = CollectorRegistry()
    recorder = RecordingSink()
    set_sink(FanoutSink(LoggingSink(level=logging.INFO), PrometheusSink(registry=registry), recorder))

    print(add(1, 2), greet("world"), invoke_private(15))
    print("exported:", __all__)
    for ev in recorder.events:
        print(ev)
    print(generate_latest(registry).decode("utf-8"))
