"""Environment parsing helpers.

Small helpers to consistently parse env vars with sane defaults.
"""
from __future__ import annotations

from typing import Iterable, List, Optional
import os


def env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return bool(default)
    return val.strip() in ("1", "true", "True", "YES", "yes", "on", "On")


def env_str(name: str, default: str, lower: bool = False) -> str:
    val = os.getenv(name)
    if val is None or not val.strip():
        val = default
    val = val.strip()
    return val.lower() if lower else val


def env_list_float(name: str, default: Optional[Iterable[float]] = None) -> Optional[List[float]]:
    s = os.getenv(name, "")
    fallback = list(default) if default is not None else None
    if not s:
        return fallback
    out: List[float] = []
    try:
        for tok in s.split(","):
            tok = tok.strip()
            if not tok:
                continue
            out.append(float(tok))
    except ValueError:
        return fallback
    return out or fallback
