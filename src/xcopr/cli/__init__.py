"""xcopr CLI package."""

from .app import execute, run
from .parser import build_parser, parse_args

__all__ = ["build_parser", "execute", "parse_args", "run"]
