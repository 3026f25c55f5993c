"""
Logging configuration for scripts and examples.

The library itself only creates module loggers; applications decide how
records are emitted.
"""

import logging
from typing import Optional

from url_fields.config import get_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to config.log_level.
    """
    level_name = (level or get_config().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
