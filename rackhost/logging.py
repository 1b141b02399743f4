"""Console logging setup for the rack host runtime.

Console output goes through a Rich handler on stderr. Records from loggers
outside the project are annotated with a short bracketed prefix.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "rackhost"


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix such as `[uvicorn]`."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Attach a prefix to the record and allow it through.

        Args:
            record: The LogRecord being processed.

        Returns:
            bool: Always True.
        """

        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def logging_create_console_handler(level: int = logging.INFO, debug_mode: bool = False) -> RichHandler:
    """Create a Rich console handler writing to stderr.

    Args:
        level: Minimum level for console output (DEBUG in debug mode).
        debug_mode: When True, include timestamps, logger names and source paths.

    Returns:
        RichHandler: Configured console handler.
    """

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=debug_mode,
        show_path=debug_mode,
    )
    fmt = "%(prefix)s %(message)s" if not debug_mode else "%(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt))
    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def logging_configure(level_name: str = "INFO", debug_mode: bool = False) -> logging.Handler:
    """Install the console handler on the root logger.

    Args:
        level_name: Logging level name such as `INFO`.
        debug_mode: Enable verbose debug formatting.

    Returns:
        logging.Handler: Installed console handler.
    """

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root_logger = logging.getLogger()
    for existing_handler in list(root_logger.handlers):
        if isinstance(existing_handler, RichHandler):
            root_logger.removeHandler(existing_handler)

    handler = logging_create_console_handler(level=level, debug_mode=debug_mode)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug_mode else level)
    return handler
