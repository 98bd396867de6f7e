"""
Logging setup.

Library modules log through ``logging.getLogger(__name__)``; this installs a
rich handler on the package logger so output matches the CLI console.
"""

import logging

from rich.logging import RichHandler

from egdb.config import settings

LOGGER_NAME = "egdb"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a RichHandler to the ``egdb`` logger.

    Args:
        level: Logging level name; defaults to settings.log_level

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or settings.log_level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
