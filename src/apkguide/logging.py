"""Logging configuration for the apkguide CLI."""

import logging
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that are chatty at INFO level
_NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "urllib3")


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False, debug: bool = False) -> int:
    """Pick the log level from CLI flags.

    Flag precedence: quiet > debug > verbosity. Normal runs log warnings
    only, so the wizard screen is not interleaved with progress logs.
    """
    if quiet:
        return LogLevel.QUIET
    if debug or verbosity >= 2:
        return LogLevel.VERBOSE
    if verbosity >= 1:
        return LogLevel.NORMAL
    return LogLevel.QUIET


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    debug: bool = False,
) -> Console:
    """Configure logging based on CLI options.

    Args:
        verbosity: Number of -v flags (0=warnings, 1=info, 2+=debug)
        quiet: Suppress non-error output (takes precedence over debug/verbosity)
        no_color: Disable colored output
        debug: Enable debug logging (equivalent to -vv, ignored if quiet is set)

    Returns:
        Configured Rich console for output
    """
    level = resolve_level(verbosity, quiet=quiet, debug=debug)
    show_detail = level <= logging.DEBUG

    console = Console(no_color=no_color, highlight=not no_color)
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_time=show_detail,
        show_path=show_detail,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return console
