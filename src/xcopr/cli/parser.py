"""Argument parser construction for xcopr CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("xcopr")
    except PackageNotFoundError:
        return "unknown"


def _stream_count(value: str) -> int:
    """Parse --stream as an unsigned byte."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid stream count: {value!r}") from None
    if not 0 <= count <= 255:
        raise argparse.ArgumentTypeError(f"stream count must be 0-255, got {count}")
    return count


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="xcopr",
        description="Run commands as coprocesses chained stdout-to-stdin",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    parser.add_argument(
        "--coproc",
        "-c",
        action="append",
        default=[],
        metavar="COMMAND",
        help="A command to run in a coprocess (repeat to chain, first to last)",
    )
    parser.add_argument(
        "--stream",
        "-s",
        type=_stream_count,
        default=1,
        help="Number of streams (reserved, currently has no effect; default: 1)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print a per-stage report to stderr when the pipeline finishes",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
