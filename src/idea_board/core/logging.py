"""Process-wide logging setup."""

from __future__ import annotations

import logging
from logging.config import dictConfig

from idea_board.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the application process.

    Args:
        level: Optional level name overriding ``settings.log_level``.
    """
    resolved = (level or settings.log_level).upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "idea_board": {"level": resolved, "handlers": ["console"], "propagate": False},
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.sql_debug else "WARNING",
                },
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", resolved)
