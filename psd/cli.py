"""CLI entry point for psd."""

from __future__ import annotations

import argparse
import math
import os
import sys

import numpy as np

from psd import __version__
from psd.divergence import individual_divergence, weighted_divergence
from psd.exceptions import ArgumentError, PsdError
from psd.io import read_paf, write_rows
from psd.log import get_logger, level_from_verbosity, setup_logging

logger = get_logger("cli")

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_SIGINT = 130  # 128 + SIGINT(2)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgumentError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="psd",
        allow_abbrev=False,
        description="psd - Calculate the per-sequence divergence from a PAF file",
    )
    parser.add_argument("paf", metavar="PAF", help="Path to PAF file (plain or .gz)")
    parser.add_argument(
        "-i", "--individual",
        action="store_true",
        help="Print individual sequence divergence values, sorted by query "
             "name and query start. Overlapping alignments are skipped.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress to stderr (-vv for per-record detail)",
    )
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    try:
        args, remaining = parser.parse_known_args(argv)
    except ArgumentError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}.", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    setup_logging(level_from_verbosity(args.verbose, args.quiet))

    if remaining:
        logger.warning("unused arguments left: %s.", remaining)

    try:
        if args.individual:
            _cmd_individual(args)
        else:
            _cmd_aggregate(args)
    except PsdError as e:
        logger.error("%s", e)
        sys.exit(EXIT_ERROR)
    except BrokenPipeError:
        # Reader went away (e.g. `psd -i x.paf | head`); stop writing quietly.
        _silence_stdout()
    except KeyboardInterrupt:
        sys.exit(EXIT_SIGINT)

    sys.exit(EXIT_SUCCESS)


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush cannot fail."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def _format_float(value: float) -> str:
    """Shortest positional form: ``1`` not ``1.0``, no exponent, ``NaN``."""
    if math.isnan(value):
        return "NaN"
    return np.format_float_positional(value, trim="-")


def _cmd_aggregate(args) -> None:
    records = list(read_paf(args.paf))
    psd = weighted_divergence(records)
    if math.isnan(psd):
        logger.warning("Total alignment block length is zero; divergence is undefined")
    print(_format_float(psd), flush=True)


def _cmd_individual(args) -> None:
    records = list(read_paf(args.paf))
    rows = (
        (qname, qstart, qend, _format_float(de))
        for qname, qstart, qend, de in individual_divergence(records)
    )
    n = write_rows(rows, sys.stdout)
    logger.info("Wrote %d of %d records", n, len(records))
