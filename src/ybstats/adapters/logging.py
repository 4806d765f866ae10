"""Log output for the ybstats command line.

Library modules only create loggers (``logging.getLogger(__name__)``). This
adapter attaches a single rich handler, writing to stderr, to the ``ybstats``
logger so that report tables on stdout stay clean.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "ybstats"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(
    level: str | int = logging.WARNING, console: Console | None = None
) -> logging.Logger:
    """Send ybstats log records to a ``RichHandler``.

    Calling this again replaces the handler instead of adding a second one.

    Args:
        level: Level name (e.g. "INFO") or number.
        console: Console to log to. Defaults to a stderr console.

    Returns:
        The configured ``ybstats`` logger.

    Raises:
        ValueError: If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        name = level.upper()
        if name not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {level}")
        level = logging.getLevelName(name)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=console or Console(stderr=True), show_path=False)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
