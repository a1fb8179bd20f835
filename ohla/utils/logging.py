"""Logging setup."""

import logging

from ohla.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None):
    """Configure the root logger once from settings.log_level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # requests/urllib3 log every connection at DEBUG/INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
