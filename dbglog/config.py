"""Configuration for :class:`~dbglog.logger.DbgLogger` instances."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, TextIO

from .base import (
    LDATE,
    LLONGFILE,
    LMICROSECONDS,
    LMSGPREFIX,
    LSHORTFILE,
    LSTDFLAGS,
    LTIME,
    LUTC,
)
from .logger import MASK64, DbgLogger
from .utils import debug_log

ENV_PREFIX = "DBGLOG_PREFIX"
ENV_FLAGS = "DBGLOG_FLAGS"
ENV_ENABLE = "DBGLOG_ENABLE"
ENV_MASK = "DBGLOG_MASK"
ENV_UNCONDITIONAL_DEBUG = "DBGLOG_UNCONDITIONAL_DEBUG"

FLAG_NAMES = {
    "date": LDATE,
    "time": LTIME,
    "microseconds": LMICROSECONDS,
    "longfile": LLONGFILE,
    "shortfile": LSHORTFILE,
    "utc": LUTC,
    "msgprefix": LMSGPREFIX,
    "std": LSTDFLAGS,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"", "0", "false", "no", "off"}


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


@dataclass
class LoggerConfig:
    """Settings applied by :func:`create_logger`."""

    prefix: str = ""
    flags: int = LSTDFLAGS
    enabled: bool = False
    mask: int = 0
    unconditional_debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoggerConfig":
        env = os.environ if environ is None else environ
        config = cls()
        if ENV_PREFIX in env:
            config.prefix = env[ENV_PREFIX]
        if ENV_FLAGS in env:
            config.flags = parse_flags(env[ENV_FLAGS])
        if ENV_ENABLE in env:
            config.enabled = parse_bool(env[ENV_ENABLE])
        if ENV_MASK in env:
            config.mask = parse_mask(env[ENV_MASK])
        if ENV_UNCONDITIONAL_DEBUG in env:
            config.unconditional_debug = parse_bool(env[ENV_UNCONDITIONAL_DEBUG])
        debug_log(
            "config",
            "prefix=%r flags=%#x enabled=%s mask=%#x unconditional_debug=%s",
            config.prefix,
            config.flags,
            config.enabled,
            config.mask,
            config.unconditional_debug,
        )
        return config


def parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"not a boolean: {text!r}")


def _parse_int(text: str) -> int:
    try:
        return int(text.strip(), 0)
    except ValueError as exc:
        raise ConfigError(f"not an integer: {text!r}") from exc


def parse_mask(text: str) -> int:
    """Parse ``all``, an integer literal, or a comma separated list of literals."""

    value = text.strip().lower()
    if value == "all":
        return MASK64
    mask = 0
    for part in value.split(","):
        if not part.strip():
            continue
        bits = _parse_int(part)
        if bits < 0 or bits > MASK64:
            raise ConfigError(f"mask out of 64-bit range: {part.strip()!r}")
        mask |= bits
    return mask


def parse_flags(text: str) -> int:
    """Parse comma separated flag names (see ``FLAG_NAMES``) or an integer."""

    value = text.strip().lower()
    if value in ("", "none"):
        return 0
    if value[0].isdigit():
        return _parse_int(value)
    flags = 0
    for part in value.split(","):
        name = part.strip()
        if not name:
            continue
        try:
            flags |= FLAG_NAMES[name]
        except KeyError:
            raise ConfigError(f"unknown log flag: {name!r}") from None
    return flags


def create_logger(out: Optional[TextIO] = None, config: Optional[LoggerConfig] = None) -> DbgLogger:
    """Build a :class:`DbgLogger` from ``config`` (environment by default)."""

    if config is None:
        config = LoggerConfig.from_env()
    logger = DbgLogger(
        sys.stderr if out is None else out,
        config.prefix,
        config.flags,
        unconditional_debug=config.unconditional_debug,
    )
    logger.set_mask(config.mask)
    if config.enabled:
        logger.enable()
    return logger
