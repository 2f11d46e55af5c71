"""
Logging setup for the Accounts backend.

Modules log through ``logging.getLogger(__name__)``; the embedding
application calls configure_logging() once at startup.
"""

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to settings.log_level,
            or DEBUG when settings.debug is set.
    """
    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug else settings.log_level

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)

    # Keep HTTP client chatter out of application logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
