# stockledger/core/logger.py

import logging

from stockledger.core.config import settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format=LOG_FORMAT,
    )
