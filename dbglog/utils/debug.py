"""Trace records about dbglog itself.

``DBGLOG_TRACE`` names the categories to report, comma separated: ``state``
for enable/disable/mask changes, ``config`` for settings read from the
environment, or ``all``. Records go to the ``dbglog`` logger at DEBUG level;
where they end up is the host's logging setup, e.g.
``logging.basicConfig(level=logging.DEBUG)``.
"""

from __future__ import annotations

import logging
import os

from ..base import sprintf

_log = logging.getLogger("dbglog")
_active: frozenset[str] | None = None


def _categories() -> frozenset[str]:
    global _active
    if _active is None:
        raw = os.environ.get("DBGLOG_TRACE", "")
        _active = frozenset(name for name in (part.strip().lower() for part in raw.split(",")) if name)
    return _active


def reset_debug_categories() -> None:
    """Re-read ``DBGLOG_TRACE`` on the next check."""

    global _active
    _active = None


def debug_enabled(category: str | None = None) -> bool:
    active = _categories()
    if category is None or "all" in active:
        return bool(active)
    return category.lower() in active


def debug_log(category: str, message: str, *args) -> None:
    if debug_enabled(category):
        _log.debug("[%s] %s", category, sprintf(message, *args), extra={"category": category})
