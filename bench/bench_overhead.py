from __future__ import annotations

import argparse
import json
import time

from telemetry_wrappers import set_sink, wrap_timed
from telemetry_wrappers.telemetry.sinks import NullSink, PrometheusSink, RecordingSink


def _add(a, b):  # noqa: ANN001, ANN202
    return a + b


SINKS = {
    "null": NullSink,
    "recording": RecordingSink,
    "prometheus": PrometheusSink,
}


def run_once(calls: int, sink: str, metadata: bool) -> dict:
    set_sink(SINKS[sink]())
    timed = wrap_timed(_add, ["bench", "add"], (lambda a: {"a": a}) if metadata else None)

    t0 = time.perf_counter()
    for i in range(calls):
        _add(i, 1)
    plain = time.perf_counter() - t0

    t0 = time.perf_counter()
    for i in range(calls):
        timed(i, 1)
    wrapped = time.perf_counter() - t0
    return {
        "calls": calls,
        "plain_seconds": plain,
        "timed_seconds": wrapped,
        "overhead_ns_per_call": ((wrapped - plain) / calls) * 1e9 if calls else 0.0,
    }


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--calls", type=int, default=100_000)
    ap.add_argument("--repeat", type=int, default=3)
    ap.add_argument("--sink", choices=sorted(SINKS), default="null")
    ap.add_argument("--metadata", action="store_true")
    args = ap.parse_args()
    results = [run_once(args.calls, args.sink, args.metadata) for _ in range(args.repeat)]
    out = {
        "sink": args.sink,
        "runs": results,
        "avg_overhead_ns_per_call": sum(r["overhead_ns_per_call"] for r in results) / len(results),
    }
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
