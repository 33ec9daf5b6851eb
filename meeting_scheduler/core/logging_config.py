# meeting_scheduler/core/logging_config.py
import logging.config

from meeting_scheduler.core.config import get_settings


def configure_logging(level: str | None = None) -> None:
    """
    Configure process-wide logging for the service.

    Every module logs through `logging.getLogger(__name__)`; this only wires
    the handler and format once, from the application factory.
    """
    settings = get_settings()
    log_level = (level or settings.LOG_LEVEL or "INFO").upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["console"],
                "level": log_level,
            },
        }
    )
