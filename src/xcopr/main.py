"""Main module for xcopr."""

import logging
import os
import sys

from xcopr.cli import run
from xcopr.config.paths import get_paths


def setup_logging() -> None:
    """Configure logging to file for debugging."""
    paths = get_paths()
    paths.global_state_dir.mkdir(parents=True, exist_ok=True)
    log_file = paths.debug_log

    # Set level from env var, default to INFO
    level = os.environ.get("XCOPR_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="w"),
        ],
    )
    logging.info("xcopr starting, logging to %s", log_file)


def main() -> None:
    """Main entry point."""
    sys.exit(run(configure_logging=setup_logging))


if __name__ == "__main__":
    main()
