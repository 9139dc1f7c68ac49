"""Logging setup for processes embedding the breeding core."""

import logging
from typing import Optional

from kennel.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT
    )
    # SQL echo is controlled by debug; keep the engine logger quiet otherwise
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
