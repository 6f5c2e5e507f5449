import logging
from logging.config import dictConfig
from typing import Optional

from app.core import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
JSON_LOG_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'

FORMATTERS = {
    "default": {"format": LOG_FORMAT},
    "json": {"format": JSON_LOG_FORMAT},  # structured logs for prod
}


def build_logging_config(level: Optional[str] = None, fmt: Optional[str] = None) -> dict:
    formatter = (fmt or config.LOG_FORMAT).lower()
    if formatter not in FORMATTERS:
        raise ValueError(
            f"Unknown LOG_FORMAT {formatter!r}, expected one of {sorted(FORMATTERS)}."
        )

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {formatter: FORMATTERS[formatter]},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
            },
        },
        "loggers": {
            # request lines come from our middleware
            "uvicorn.access": {"level": "WARNING"},
        },
        "root": {
            "level": (level or config.LOG_LEVEL).upper(),
            "handlers": ["console"],
        },
    }


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None):
    dictConfig(build_logging_config(level, fmt))
