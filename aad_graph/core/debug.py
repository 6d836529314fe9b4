"""Namespaced debug logging for the graph engine.

Use `enable(True)` (or set env AAD_GRAPH_DEBUG=1) to log node creation, cache
hits and misses, invalidations and backward passes.

Helpers:
- dbg(name): namespaced logger under "aad_graph.<name>"
- enable(flag): turn logging on/off globally
- is_enabled(): check global flag

By default logging is quiet; enabling debug configures a stream handler on the
root "aad_graph" logger.
"""

from __future__ import annotations

import logging
import os

_ENABLED = bool(int(os.getenv("AAD_GRAPH_DEBUG", "0") or "0"))
_ROOT = "aad_graph"


def enable(flag: bool = True, *, level: int = logging.DEBUG) -> None:
    """Enable or disable debug logging for the graph engine."""
    global _ENABLED
    _ENABLED = bool(flag)
    lg = logging.getLogger(_ROOT)
    if _ENABLED:
        # Idempotent handler setup
        if not any(isinstance(h, logging.StreamHandler) for h in lg.handlers):
            h = logging.StreamHandler()
            fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            h.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
            lg.addHandler(h)
        lg.setLevel(level)
    else:
        lg.setLevel(logging.NOTSET)


def is_enabled() -> bool:
    return _ENABLED


def dbg(name: str) -> logging.Logger:
    """Return a child logger under the aad_graph namespace."""
    if _ENABLED and not logging.getLogger(_ROOT).handlers:
        enable(True)
    return logging.getLogger(f"{_ROOT}.{name}")


__all__ = ["enable", "is_enabled", "dbg"]
