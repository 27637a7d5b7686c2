"""
Logging Configuration

One console handler shared by uvicorn and the adapter. The stream translator
logger can run at its own level so dropped frames can be inspected without
turning on DEBUG for the whole application.
"""

import logging.config
from typing import Any, Optional

from responses_adapter.config import Settings, get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
STREAM_LOGGER = "responses_adapter.transformers.stream"


def _logger(level: str) -> dict[str, Any]:
    return {"handlers": ["console"], "level": level, "propagate": False}


def build_logging_config(settings: Optional[Settings] = None) -> dict[str, Any]:
    """
    Build the dictConfig mapping for the given settings.

    Args:
        settings: Application settings, defaults to the cached instance

    Returns:
        dict: logging.config.dictConfig payload
    """
    settings = settings or get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

    loggers = {
        "root": {"handlers": ["console"], "level": log_level},
        "uvicorn": _logger("INFO"),
        "uvicorn.error": _logger("INFO"),
        "uvicorn.access": _logger("INFO"),
        "responses_adapter": _logger(log_level),
    }
    if settings.STREAM_LOG_LEVEL:
        # Child of responses_adapter: propagates to its console handler
        loggers[STREAM_LOGGER] = {"level": settings.STREAM_LOG_LEVEL.upper()}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": loggers,
    }


def setup_logging() -> None:
    """Apply the logging configuration for the current settings"""
    logging.config.dictConfig(build_logging_config())
