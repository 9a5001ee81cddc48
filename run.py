"""Command-line entry point that writes one line through a ``DbgLogger``.

Settings come from the ``DBGLOG_*`` environment variables and can be
overridden by options, which makes the script handy for checking what a given
prefix/flags/mask combination prints from a shell.
"""

from __future__ import annotations

import argparse
import sys

from dbglog.config import ConfigError, LoggerConfig, create_logger, parse_flags, parse_mask


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="Emit a debug line through dbglog",
    )
    parser.add_argument(
        "words",
        nargs="+",
        help="Values to log; with --style printf the first word is the format and numeric values are passed as numbers",
    )
    parser.add_argument(
        "--prefix",
        help="Line prefix (default: $DBGLOG_PREFIX or empty)",
    )
    parser.add_argument(
        "--flags",
        help="Header flags, e.g. 'date,time,shortfile' (default: $DBGLOG_FLAGS or 'std')",
    )
    parser.add_argument(
        "--enable",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument(
        "--mask",
        help="Debug mask, e.g. '0x5' or 'all' (default: $DBGLOG_MASK or 0)",
    )
    parser.add_argument(
        "--bit",
        help="Use the masked debug call with this bit",
    )
    parser.add_argument(
        "--style",
        choices=("printf", "print", "println"),
        default="println",
        help="Which debug call to use (default: println)",
    )
    parser.add_argument(
        "--unconditional-debug",
        action="store_true",
        help="Let the 'print' style write even while debug output is disabled",
    )
    return parser


def coerce_value(word: str) -> int | float | str:
    """Turn a word into an int or float when it reads back unchanged, so that
    ``%d``/``%x``/``%f`` work while ``%s`` still prints the word as typed."""

    for kind in (int, float):
        try:
            value = kind(word)
        except ValueError:
            continue
        if str(value) == word:
            return value
    return word


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = LoggerConfig.from_env()
        if args.prefix is not None:
            config.prefix = args.prefix
        if args.flags is not None:
            config.flags = parse_flags(args.flags)
        if args.mask is not None:
            config.mask = parse_mask(args.mask)
        bit = parse_mask(args.bit) if args.bit is not None else None
    except ConfigError as exc:
        parser.error(str(exc))
    if args.enable:
        config.enabled = True
    if args.unconditional_debug:
        config.unconditional_debug = True

    logger = create_logger(sys.stderr, config)
    if args.style == "printf":
        format, *words = args.words
        values = [coerce_value(word) for word in words]
        if bit is None:
            logger.debugf(format, *values)
        else:
            logger.debugf_m(bit, format, *values)
    elif args.style == "print":
        if bit is None:
            logger.debug(*args.words)
        else:
            logger.debug_m(bit, *args.words)
    else:
        if bit is None:
            logger.debugln(*args.words)
        else:
            logger.debugln_m(bit, *args.words)
    return 0


if __name__ == "__main__":
    sys.exit(main())
