"""CLI orchestration: parse args, run the pipeline, map failures to exit codes."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from xcopr.cli.parser import parse_args
from xcopr.cli.report import StageReport
from xcopr.runtime import XcoprError, get_pipeline_runner

logger = logging.getLogger(__name__)


def execute(args: argparse.Namespace) -> int:
    """Run the pipeline described by parsed args and return the exit code."""
    # Reserved option.
    logger.debug("Stream count %d accepted; it has no effect", args.stream)

    report = StageReport() if args.verbose else None
    on_event = report.record if report is not None else None

    try:
        result = get_pipeline_runner().run(commands=args.coproc, on_event=on_event)
    except XcoprError as e:
        logger.error("Pipeline failed: %s", e)
        print(f"xcopr: {e}", file=sys.stderr)
        return 1
    finally:
        if report is not None and report.rows:
            report.render()

    logger.info("Pipeline finished: %d stage(s) succeeded", len(result.stages))
    return 0


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute the pipeline."""
    args = parse_args(argv)

    if configure_logging is not None:
        configure_logging()

    logger.info("Running %d coprocess(es)", len(args.coproc))
    return execute(args)
