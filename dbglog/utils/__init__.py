"""Internal helpers for the dbglog package."""

from .debug import debug_enabled, debug_log, reset_debug_categories

__all__ = [
    "debug_enabled",
    "debug_log",
    "reset_debug_categories",
]
