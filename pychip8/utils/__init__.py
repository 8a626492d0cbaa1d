"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, parse_categories, reload_categories
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "parse_categories",
    "reload_categories",
    "TraceEntry",
    "TraceRecorder",
]
