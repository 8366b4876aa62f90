"""Injectable trace hook for layout diagnostics.

Layout functions report skips and decisions as (event, fields) pairs through
a TraceHook instead of writing to any particular destination.
"""
import logging
from typing import Callable

logger = logging.getLogger(__name__)

TraceHook = Callable[[str, dict], None]


def log_trace(event: str, fields: dict) -> None:
    """Default hook: forward events to the module logger at DEBUG level."""
    if logger.isEnabledFor(logging.DEBUG):
        detail = " ".join(f"{k}={_fmt(v)}" for k, v in fields.items())
        logger.debug("%s %s", event, detail)


def null_trace(event: str, fields: dict) -> None:
    """Discard events."""


def _fmt(v) -> str:
    return f"{v:.1f}" if isinstance(v, float) else str(v)
