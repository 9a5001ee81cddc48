"""Conditional debug logging on top of a small line logger.

``DbgLogger`` adds an enable switch and a 64-bit mask in front of the
``printf``/``print``/``println`` calls of :class:`dbglog.base.Logger`.
"""

from __future__ import annotations

from .base import (
    LDATE,
    LLONGFILE,
    LMICROSECONDS,
    LMSGPREFIX,
    LSHORTFILE,
    LSTDFLAGS,
    LTIME,
    LUTC,
    Logger,
    LogPanic,
)
from .config import ConfigError, LoggerConfig, create_logger
from .logger import MASK64, DbgLogger, new

__all__: list[str] = [
    "DbgLogger",
    "new",
    "MASK64",
    "Logger",
    "LogPanic",
    "LoggerConfig",
    "ConfigError",
    "create_logger",
    "LDATE",
    "LTIME",
    "LMICROSECONDS",
    "LLONGFILE",
    "LSHORTFILE",
    "LUTC",
    "LMSGPREFIX",
    "LSTDFLAGS",
]
