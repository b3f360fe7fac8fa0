"""Process-wide logging configuration."""

import logging
import os

from rich.logging import RichHandler

LOG_LEVEL_ENV = "MUCKBRIDGE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def setup_logging(level: str = DEFAULT_LOG_LEVEL, *, show_time: bool = False) -> None:
    """Send log records to a rich handler on stderr.

    Does nothing if the root logger already has handlers.
    """
    handler = RichHandler(
        show_time=show_time,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[handler],
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_logging_from_env() -> None:
    """Configure logging from ``MUCKBRIDGE_LOG_LEVEL``."""
    level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if level not in logging.getLevelNamesMapping():
        level = DEFAULT_LOG_LEVEL
    setup_logging(level)
