"""Line logger used by :class:`dbglog.logger.DbgLogger`.

Each call writes one line to a text sink through a private
:class:`logging.Logger` and :class:`logging.StreamHandler`. The integer header
flags below select which fields the handler's formatter puts in front of the
message (date, time, source location) and where the prefix goes.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

LDATE = 1 << 0
LTIME = 1 << 1
LMICROSECONDS = 1 << 2
LLONGFILE = 1 << 3
LSHORTFILE = 1 << 4
LUTC = 1 << 5
LMSGPREFIX = 1 << 6
LSTDFLAGS = LDATE | LTIME

_LEVEL = logging.INFO


class LogPanic(RuntimeError):
    """Raised by the ``panic*`` family after the message has been written."""


def sprintf(format: str, *values: Any) -> str:
    """Apply ``%`` formatting, tolerating a mismatch between format and values.

    ``%%`` collapses to ``%`` even without values. When formatting fails the
    format is kept as written, followed by the ``repr`` of the values if any.
    """

    try:
        return format % values
    except (TypeError, ValueError, OverflowError):
        if not values:
            return format
        return f"{format} {values!r}"


def sprint(*values: Any) -> str:
    """Concatenate values, spacing two operands only when neither is a string."""

    parts: list[str] = []
    previous_is_str = True
    for index, value in enumerate(values):
        is_str = isinstance(value, str)
        if index > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(str(value))
        previous_is_str = is_str
    return "".join(parts)


def sprintln(*values: Any) -> str:
    return " ".join(str(value) for value in values) + "\n"


class HeaderFormatter(logging.Formatter):
    """Formatter whose layout is derived from the header flags."""

    def __init__(self, prefix: str, flags: int) -> None:
        self.flags = flags
        escaped = prefix.replace("%", "%%")
        fmt = "" if flags & LMSGPREFIX else escaped
        stamp: list[str] = []
        if flags & LDATE:
            stamp.append("%Y/%m/%d")
        if flags & LMICROSECONDS:
            stamp.append("%H:%M:%S.%f")
        elif flags & LTIME:
            stamp.append("%H:%M:%S")
        if stamp:
            fmt += "%(asctime)s "
        if flags & LSHORTFILE:
            fmt += "%(filename)s:%(lineno)d: "
        elif flags & LLONGFILE:
            fmt += "%(pathname)s:%(lineno)d: "
        if flags & LMSGPREFIX:
            fmt += escaped
        fmt += "%(message)s"
        super().__init__(fmt, datefmt=" ".join(stamp) or None)

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        if self.flags & LUTC:
            stamp = datetime.fromtimestamp(record.created, timezone.utc)
        else:
            stamp = datetime.fromtimestamp(record.created)
        return stamp.strftime(datefmt or "%Y/%m/%d %H:%M:%S")


class SinkHandler(logging.StreamHandler):
    """Stream handler that lets write errors reach the caller."""

    def handleError(self, record: logging.LogRecord) -> None:
        raise


class Logger:
    """Writes prefixed, optionally timestamped lines to ``out``.

    The handler's lock serializes writes, so a logger may be shared between
    threads.
    """

    def __init__(self, out: TextIO, prefix: str = "", flags: int = LSTDFLAGS) -> None:
        self._prefix = prefix
        self._flags = flags
        self._handler = SinkHandler(out)
        self._handler.setFormatter(HeaderFormatter(prefix, flags))
        # Not registered with logging.getLogger: each instance owns its own.
        self._log = logging.Logger(f"dbglog.{id(self):x}", _LEVEL)
        self._log.propagate = False
        self._log.addHandler(self._handler)

    @property
    def prefix(self) -> str:
        return self._prefix

    def set_prefix(self, prefix: str) -> None:
        self._prefix = prefix
        self._handler.setFormatter(HeaderFormatter(prefix, self._flags))

    @property
    def flags(self) -> int:
        return self._flags

    def set_flags(self, flags: int) -> None:
        self._flags = flags
        self._handler.setFormatter(HeaderFormatter(self._prefix, flags))

    @property
    def writer(self) -> TextIO:
        return self._handler.stream

    def set_output(self, out: TextIO) -> None:
        self._handler.setStream(out)

    @property
    def handler(self) -> logging.StreamHandler:
        return self._handler

    def output(self, calldepth: int, text: str) -> None:
        """Write ``text`` as one line.

        ``calldepth`` counts frames up from this method for the source
        location; ``1`` names the direct caller of ``output``.
        """

        if text.endswith("\n"):
            text = text[:-1]
        self._log.log(_LEVEL, text, stacklevel=calldepth + 1)

    def printf(self, format: str, *values: Any) -> None:
        self.output(2, sprintf(format, *values))

    def print(self, *values: Any) -> None:
        self.output(2, sprint(*values))

    def println(self, *values: Any) -> None:
        self.output(2, sprintln(*values))

    def fatalf(self, format: str, *values: Any) -> None:
        self.output(2, sprintf(format, *values))
        sys.exit(1)

    def fatal(self, *values: Any) -> None:
        self.output(2, sprint(*values))
        sys.exit(1)

    def fatalln(self, *values: Any) -> None:
        self.output(2, sprintln(*values))
        sys.exit(1)

    def panicf(self, format: str, *values: Any) -> None:
        text = sprintf(format, *values)
        self.output(2, text)
        raise LogPanic(text)

    def panic(self, *values: Any) -> None:
        text = sprint(*values)
        self.output(2, text)
        raise LogPanic(text)

    def panicln(self, *values: Any) -> None:
        text = sprintln(*values)
        self.output(2, text)
        raise LogPanic(text)
