import logging
import sys

from pythonjsonlogger import jsonlogger

from config import Settings, get_settings


def setup_logging(settings: Settings = None):
    """Configures structured JSON logging on the root logger."""
    settings = settings or get_settings()
    logger = logging.getLogger()

    # Clear existing handlers to avoid duplication under reloaders
    if logger.hasHandlers():
        logger.handlers.clear()

    if settings.DEBUG:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
