"""Command-line interface for wrkt.

This package provides the CLI entry point and argument parsing.
"""

from .commands import main
from .args import parse_args

__all__ = ["main", "parse_args"]
