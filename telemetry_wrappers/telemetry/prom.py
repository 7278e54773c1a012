"""Prometheus integration.

Thin wrappers over prometheus_client that cache created collectors so a
channel observed from several sinks (or re-created in tests) is registered
only once per registry.
"""
from __future__ import annotations

import re
import threading
import weakref
from typing import Dict, Optional, Sequence

from prometheus_client import REGISTRY, CollectorRegistry
from prometheus_client import Histogram as _PHist


_INVALID = re.compile(r"[^a-zA-Z0-9_]")

# registry -> metric name -> collector; entries go away with their registry
_HISTS: "weakref.WeakKeyDictionary[CollectorRegistry, Dict[str, _PHist]]" = weakref.WeakKeyDictionary()
_LOCK = threading.Lock()


def metric_name(segments: Sequence[str], prefix: str = "", suffix: str = "") -> str:
    """Join segments into a valid Prometheus metric name."""
    parts = [p for p in (prefix, *segments, suffix) if p]
    name = _INVALID.sub("_", "_".join(parts))
    if not name or name[0].isdigit():
        name = "_" + name
    return name


class Histogram:
    def __init__(
        self,
        name: str,
        desc: str = "",
        buckets: Optional[Sequence[float]] = None,
        registry: CollectorRegistry = REGISTRY,
    ) -> None:
        self._name = name
        with _LOCK:
            per_registry = _HISTS.setdefault(registry, {})
            h = per_registry.get(name)
            if h is None:
                if buckets is not None:
                    h = _PHist(name, desc or name, buckets=list(buckets), registry=registry)
                else:
                    h = _PHist(name, desc or name, registry=registry)
                per_registry[name] = h
        self._h = h

    @property
    def name(self) -> str:
        return self._name

    def observe(self, val: float) -> None:
        self._h.observe(val)
