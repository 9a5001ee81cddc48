"""Tests for the enable switch and mask gates of ``DbgLogger``."""

from __future__ import annotations

import io
import sys

import pytest

from dbglog import LSHORTFILE, MASK64, DbgLogger, Logger, new

DEBUG_ONE = 1 << 0
DEBUG_TWO = 1 << 1


@pytest.fixture()
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def dbg(sink: io.StringIO) -> DbgLogger:
    return DbgLogger(sink, "", 0)


def test_new_starts_disabled_with_empty_mask(sink: io.StringIO) -> None:
    d = new(sink, "myapp ", 0)

    assert d.enabled is False
    assert d.mask == 0
    assert d.unconditional_debug is False
    assert isinstance(d.logger, Logger)
    assert d.logger.prefix == "myapp "


def test_disabled_debugf_writes_nothing(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.debugf("x")
    dbg.debugln("x")

    assert sink.getvalue() == ""


def test_enabled_debugf_writes_prefixed_line(sink: io.StringIO) -> None:
    d = DbgLogger(sink, "myapp ", 0)
    d.enable()

    d.debugf("x=%d", 5)

    assert sink.getvalue() == "myapp x=5\n"


def test_enable_disable_last_call_wins(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.enable()
    dbg.disable()
    dbg.debugf("off")
    dbg.debugln("off")
    assert sink.getvalue() == ""

    dbg.disable()
    dbg.enable()
    dbg.debugf("on")
    dbg.debugln("on", 1)
    assert sink.getvalue() == "on\non 1\n"


def test_debug_is_gated_by_default(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.debug("y")
    assert sink.getvalue() == ""

    dbg.enable()
    dbg.debug("y", 1, 2)
    assert sink.getvalue() == "y1 2\n"


def test_unconditional_debug_prints_while_disabled(sink: io.StringIO) -> None:
    d = DbgLogger(sink, "", 0, unconditional_debug=True)

    d.debug("y")

    assert d.enabled is False
    assert sink.getvalue() == "y\n"

    d.debugf("gated")
    d.debugln("gated")
    d.debug_m(DEBUG_ONE, "gated")
    assert sink.getvalue() == "y\n"


def test_mask_scenario(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.set_mask(0b01)

    dbg.debugf_m(0b01, "a")
    dbg.debugf_m(0b10, "b")
    dbg.debugf_m(0b11, "c")

    assert sink.getvalue() == "a\n"


@pytest.mark.parametrize(
    ("bit", "mask", "emits"),
    [
        (0b001, 0b001, True),
        (0b011, 0b111, True),
        (0b100, 0b011, False),
        (0b110, 0b100, False),
        (1 << 63, 1 << 63, True),
        (1 << 63, MASK64 >> 1, False),
        (MASK64, MASK64, True),
    ],
)
def test_masked_gate_requires_every_bit(
    dbg: DbgLogger, sink: io.StringIO, bit: int, mask: int, emits: bool
) -> None:
    dbg.enable()
    dbg.set_mask(mask)

    dbg.debugf_m(bit, "f")
    dbg.debug_m(bit, "p")
    dbg.debugln_m(bit, "l")

    assert sink.getvalue() == ("f\np\nl\n" if emits else "")


def test_zero_bit_never_emits(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.set_mask(MASK64)

    dbg.debugf_m(0, "zero")
    dbg.debug_m(0, "zero")
    dbg.debugln_m(0, "zero")

    assert sink.getvalue() == ""


def test_masked_calls_require_enable(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.set_mask(DEBUG_ONE)

    dbg.debugf_m(DEBUG_ONE, "a")
    dbg.debug_m(DEBUG_ONE, "a")
    dbg.debugln_m(DEBUG_ONE, "a")

    assert sink.getvalue() == ""


def test_set_mask_applies_to_next_call(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.set_mask(DEBUG_ONE)
    dbg.debugln_m(DEBUG_TWO, "before")

    dbg.set_mask(DEBUG_TWO)
    dbg.debugln_m(DEBUG_TWO, "after")
    dbg.debugln_m(DEBUG_ONE, "stale")

    assert sink.getvalue() == "after\n"


def test_set_mask_keeps_low_64_bits(dbg: DbgLogger) -> None:
    dbg.set_mask(-1)
    assert dbg.mask == MASK64

    dbg.set_mask((1 << 64) | DEBUG_TWO)
    assert dbg.mask == DEBUG_TWO


def test_bit_beyond_64_bits_is_reduced(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.set_mask(MASK64)

    dbg.debugln_m(1 << 64, "dropped")
    dbg.debugln_m((1 << 64) | DEBUG_ONE, "kept")

    assert sink.getvalue() == "kept\n"


def test_disable_silences_every_gated_call(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()
    dbg.set_mask(MASK64)
    dbg.disable()

    dbg.debugf("a")
    dbg.debug("a")
    dbg.debugln("a")
    dbg.debugf_m(DEBUG_ONE, "a")
    dbg.debug_m(DEBUG_ONE, "a")
    dbg.debugln_m(DEBUG_ONE, "a")

    assert sink.getvalue() == ""


def test_passthrough_ignores_gates(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.printf("printme!\n")
    dbg.print("a", 1)
    dbg.println("b", 2)

    assert sink.getvalue() == "printme!\na1\nb 2\n"


def test_reported_location_is_the_callers(sink: io.StringIO) -> None:
    d = DbgLogger(sink, "", LSHORTFILE)
    d.enable()
    d.set_mask(DEBUG_ONE)

    first = sys._getframe().f_lineno + 1
    d.debugf("one")
    second = sys._getframe().f_lineno + 1
    d.debugln_m(DEBUG_ONE, "two")
    third = sys._getframe().f_lineno + 1
    d.printf("three")

    assert sink.getvalue().splitlines() == [
        f"test_dbg_logger.py:{first}: one",
        f"test_dbg_logger.py:{second}: two",
        f"test_dbg_logger.py:{third}: three",
    ]


def test_sink_errors_are_not_swallowed() -> None:
    class BrokenSink:
        def write(self, text: str) -> int:
            raise OSError("gone")

    d = DbgLogger(BrokenSink(), "", 0)
    d.debugf("dropped while disabled")
    d.enable()

    with pytest.raises(OSError):
        d.debugf("boom")


def test_debugf_formats_escaped_percent_and_bad_values(dbg: DbgLogger, sink: io.StringIO) -> None:
    dbg.enable()

    dbg.debugf("100%% done")
    dbg.debugf("%d%% done", 5)
    dbg.debugf("%c", 1 << 40)

    assert sink.getvalue().splitlines() == ["100% done", "5% done", f"%c ({1 << 40},)"]
