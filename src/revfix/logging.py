"""Logging configuration for revfix."""

import logging
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "revfix"


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False, debug: bool = False) -> int:
    """Pick a log level from CLI flags.

    Flag precedence: quiet > debug > verbosity. Reconciliation corrections
    and applied fixes log at INFO; state transitions and misses at DEBUG.
    """
    if quiet:
        return LogLevel.QUIET
    if debug or verbosity >= 1:
        return LogLevel.VERBOSE
    return LogLevel.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
    debug: bool = False,
) -> Console:
    """Configure logging based on CLI options.

    Log records go to a Rich handler on stream; the returned console is the
    one user-facing output should be printed with.

    Args:
        verbosity: Number of -v flags (0=normal, 1+=debug)
        quiet: Only warnings and errors
        no_color: Disable colored output
        stream: Output stream for logs (stderr if not given)
        debug: Enable debug logging with timestamps and source paths

    Returns:
        Configured Rich console for output
    """
    level = resolve_level(verbosity, quiet, debug)
    detailed = debug or verbosity >= 2

    log_console = Console(file=stream, stderr=True, force_terminal=not no_color, no_color=no_color)
    handler = RichHandler(console=log_console, show_time=detailed, show_path=detailed)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return Console(no_color=no_color)
