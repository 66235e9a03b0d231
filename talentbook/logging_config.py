"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

from talentbook.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install the default stream handler on the root logger.

    Components log through ``logging.getLogger(__name__)`` unless a logger is
    injected explicitly, so configuring the root logger once at startup is
    enough for the API process and the maintenance scripts alike.
    """

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_logging"]
