from __future__ import annotations

"""Lightweight structured logging utilities.

``get_logger`` never touches the root logger, so importing the library leaves
the host application's logging setup alone. Scripts that want the package's
default format call ``configure_logging`` once.

Environment variables:
- TELEMETRY_WRAPPERS_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default INFO)
"""

import logging
import os
from typing import Optional, Dict


_CONFIGURED = False


class _ContextAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):  # type: ignore[override]
        ctx = " ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"[{ctx}] {msg}", kwargs


def configure_logging(level: Optional[str] = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    name = (level or os.getenv("TELEMETRY_WRAPPERS_LOG_LEVEL", "INFO")).upper()
    lvl = getattr(logging, name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _CONFIGURED = True


def get_logger(name: str, context: Optional[Dict[str, object]] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if context:
        return _ContextAdapter(logger, dict(context))  # type: ignore[return-value]
    return logger
