"""Opt-in console logging for UNDERBAR diagnostics.

UNDERBAR logs through the standard `logging` module under the ``underbar``
logger hierarchy and installs only a `logging.NullHandler`, so a host program
sees nothing unless it configures logging itself. This module offers a
shortcut for watching the library's DEBUG output (memoize hits and misses,
throttled drops, timer submissions and cancellations) on the console with
Rich.
"""

from __future__ import annotations

import logging
from typing import Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "underbar"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler for console output.

    The handler writes to stderr. In debug mode it includes timestamps, the
    logger name and the source file/line of each record.

    Args:
        level: Minimum level for console output.
        debug_mode: When True, enable verbose formatting (show_path, timestamps).
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler, not yet attached to any logger.
    """

    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    fmt = "%(message)s" if not debug_mode else "%(asctime)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt))
    return handler


def enable_console_logging(
    level: int = logging.DEBUG, *, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Attach a Rich console handler to the ``underbar`` logger.

    The logger's own level is lowered to ``level`` if needed. The root logger
    is left alone, so the host's logging configuration is not disturbed.

    Args:
        level: Minimum level to show.
        debug_mode: Passed to `config_console_handler`.
        color: Passed to `config_console_handler`.

    Returns:
        RichHandler: The attached handler; pass it to `disable_console_logging`
        to detach it again.
    """
    handler = config_console_handler(level=level, debug_mode=debug_mode, color=color)
    logger = logging.getLogger(PROJECT_PREFIX)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


def disable_console_logging(handler: logging.Handler) -> None:
    """Detach and close a handler returned by `enable_console_logging`."""
    logging.getLogger(PROJECT_PREFIX).removeHandler(handler)
    handler.close()
