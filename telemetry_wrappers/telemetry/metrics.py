"""Timing primitives used by the timed-call wrappers."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Tuple, TypeVar

R = TypeVar("R")


@dataclass
class Timer:
    """Monotonic stopwatch usable as a context manager.

    ``elapsed_ns`` is set on exit whether or not the block raised; callers
    decide what to do with a failed span.
    """

    name: str = ""
    start_ns: int | None = None
    elapsed_ns: int = 0

    def __enter__(self):  # noqa: ANN001
        self.start_ns = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ANN001, ANN201
        end = time.perf_counter_ns()
        self.elapsed_ns = max(0, end - (self.start_ns if self.start_ns is not None else end))
        return False

    @property
    def elapsed_us(self) -> int:
        return self.elapsed_ns // 1_000

    @property
    def elapsed(self) -> float:
        """Elapsed seconds."""
        return self.elapsed_ns / 1e9


def tc(fn: Callable[..., R], *args, **kwargs) -> Tuple[int, R]:  # noqa: ANN002, ANN003
    """Call ``fn`` and return ``(microseconds, result)``.

    Exceptions from ``fn`` propagate and no duration is returned.
    """
    with Timer() as t:
        result = fn(*args, **kwargs)
    return t.elapsed_us, result
