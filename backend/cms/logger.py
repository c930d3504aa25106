"""Logging configuration for the content management service."""

import logging
import sys

from cms.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Every service logger is a child of this one
ROOT_LOGGER_NAME = "cms"

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)


def resolve_level(log_level: str | None, debug: bool, is_production: bool) -> int:
    """
    Pick the level for the service loggers.

    An explicit LOG_LEVEL wins; otherwise debug mode logs everything,
    production logs INFO and other environments log DEBUG.
    """
    if log_level:
        return getattr(logging, log_level)
    if debug:
        return logging.DEBUG
    return logging.INFO if is_production else logging.DEBUG


logging.getLogger(ROOT_LOGGER_NAME).setLevel(
    resolve_level(settings.log_level, settings.debug, settings.is_production)
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the service namespace, e.g. "cache" -> "cms.cache"."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


lifecycle_logger = get_logger("lifecycle")
db_logger = get_logger("database")
cache_logger = get_logger("cache")
api_logger = get_logger("api")
