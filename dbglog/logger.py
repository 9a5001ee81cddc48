"""Debug logger that gates output on an enable switch and a bit mask.

There are two kinds of debug calls. ``debugf``/``debug``/``debugln`` print
whenever the logger is enabled. ``debugf_m``/``debug_m``/``debugln_m`` take a
bit (or a combination of bits) and print only when the logger is enabled and
every one of those bits is also set in the mask::

    TRACE_NET = 1 << 0
    TRACE_DISK = 1 << 1

    d = new(sys.stderr, "myapp ", LSTDFLAGS)
    d.printf("printme!")
    d.enable()
    d.set_mask(TRACE_NET)
    d.debugf_m(TRACE_NET, "debug")   # prints
    d.debugf_m(TRACE_DISK, "debug")  # does not print

Both switches can be flipped at any time. They are plain attributes without
locking; a concurrent change is seen by the next call at the latest.
"""

from __future__ import annotations

from typing import Any, TextIO

from .base import LSTDFLAGS, Logger, sprint, sprintf, sprintln
from .utils import debug_log

MASK64 = (1 << 64) - 1


class DbgLogger:
    """Owns a :class:`~dbglog.base.Logger` and puts the debug gates in front of it.

    ``unconditional_debug`` selects how :meth:`debug` behaves. Left at
    ``False`` it is gated like :meth:`debugf` and :meth:`debugln`. Set to
    ``True`` it prints even while the logger is disabled, matching the
    historical behaviour of this API.
    """

    def __init__(
        self,
        out: TextIO,
        prefix: str = "",
        flags: int = LSTDFLAGS,
        *,
        unconditional_debug: bool = False,
    ) -> None:
        self._logger = Logger(out, prefix, flags)
        self._enabled = False
        self._mask = 0
        self._unconditional_debug = unconditional_debug

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def unconditional_debug(self) -> bool:
        return self._unconditional_debug

    def enable(self) -> None:
        self._enabled = True
        debug_log("state", "enabled prefix=%r", self._logger.prefix)

    def disable(self) -> None:
        self._enabled = False
        debug_log("state", "disabled prefix=%r", self._logger.prefix)

    def set_mask(self, mask: int) -> None:
        """Replace the mask used by the ``*_m`` calls; only the low 64 bits are kept."""

        self._mask = mask & MASK64
        debug_log("state", "mask=%#x prefix=%r", self._mask, self._logger.prefix)

    def _masked(self, bit: int) -> bool:
        bit &= MASK64
        return self._enabled and bit != 0 and bit & self._mask == bit

    # Unconditional pass-through to the owned logger.

    def printf(self, format: str, *values: Any) -> None:
        self._logger.output(2, sprintf(format, *values))

    def print(self, *values: Any) -> None:
        self._logger.output(2, sprint(*values))

    def println(self, *values: Any) -> None:
        self._logger.output(2, sprintln(*values))

    # Gated on the enable switch.

    def debugf(self, format: str, *values: Any) -> None:
        if self._enabled:
            self._logger.output(2, sprintf(format, *values))

    def debug(self, *values: Any) -> None:
        if self._enabled or self._unconditional_debug:
            self._logger.output(2, sprint(*values))

    def debugln(self, *values: Any) -> None:
        if self._enabled:
            self._logger.output(2, sprintln(*values))

    # Gated on the enable switch and the mask.

    def debugf_m(self, bit: int, format: str, *values: Any) -> None:
        if self._masked(bit):
            self._logger.output(2, sprintf(format, *values))

    def debug_m(self, bit: int, *values: Any) -> None:
        if self._masked(bit):
            self._logger.output(2, sprint(*values))

    def debugln_m(self, bit: int, *values: Any) -> None:
        if self._masked(bit):
            self._logger.output(2, sprintln(*values))


def new(out: TextIO, prefix: str, flags: int) -> DbgLogger:
    """Create a disabled :class:`DbgLogger` with an empty mask.

    ``out`` is any text stream, e.g. ``sys.stderr``. ``prefix`` starts every
    line, which helps when grepping. ``flags`` are the header flags from
    :mod:`dbglog.base`.
    """

    return DbgLogger(out, prefix, flags)
