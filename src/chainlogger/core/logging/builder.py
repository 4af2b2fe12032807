"""
Logging builder: create and apply the dictConfig that backs the default sink.

This module:
 - builds a dictConfig-compatible mapping from Settings
 - routes the sink logger (LOGGER_NAME) to stdout, or to a rotating file when
   LOG_TO_STDOUT is false and LOG_DIR is set
 - gives every other logger a "standard" console format that includes the
   request correlation id

Configuration knobs (on your Settings object):
 - LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_COLOR, LOG_DIR, LOG_MAX_BYTES,
   LOG_BACKUP_COUNT, LOGGER_NAME

Call setup_logging(get_settings()) once at application start-up, before the
first request is served. Without it, the default ChainLogger falls back to
ensure_sink_logger(), which only gives the sink logger its own handler.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config
import sys
from logging.handlers import RotatingFileHandler

from .formatters import ColorFormatter
from .filters import CorrelationIdFilter
from .handlers import (
    get_console_handler,
    get_sink_console_handler,
    get_sink_file_handler,
    sink_formatter_name,
)

from chainlogger.config.settings import Settings  # type: ignore

def _writes_to_file(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)

def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "passthrough", "color" and "standard"
      - filters: "correlation_id"
      - handlers: "console" plus "sink_console" OR "sink_file"
      - loggers: the sink logger (not propagating) and root
    """
    formatters = {
        "passthrough": {"format": "%(message)s"},
        "color": {"()": ColorFormatter},
        "standard": {
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s",
        },
    }

    filters = {
        "correlation_id": {"()": CorrelationIdFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if _writes_to_file(settings):
        sink_handlers = ["sink_file"]
        handlers["sink_file"] = get_sink_file_handler(settings)
    else:
        sink_handlers = ["sink_console"]
        handlers["sink_console"] = get_sink_console_handler(settings)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            settings.LOGGER_NAME: {
                "handlers": sink_handlers,
                "level": settings.LOG_LEVEL,
                "propagate": False,
            },
        },
    }

    return config

def setup_logging(settings: Settings) -> None:
    """
    Initialize logging using settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register a CorrelationIdFilter on the root logger as a safety net for
         handlers added later by other libraries.
    """
    if _writes_to_file(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(CorrelationIdFilter())

def ensure_sink_logger(settings: Settings) -> logging.Logger:
    """
    Return the sink logger, giving it a handler from settings if it has none.

    setup_logging() is the full configuration. Without it the sink logger has
    no handler and inherits the root level (WARNING), so info entries and the
    access log would be dropped. A logger that already has handlers is left
    alone.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)
    if logger.handlers:
        return logger

    if _writes_to_file(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            Path(settings.LOG_DIR) / "chain.log",
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        if sink_formatter_name(settings) == "color":
            handler.setFormatter(ColorFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(message)s"))

    handler.setLevel(settings.LOG_LEVEL)
    logger.addHandler(handler)
    logger.setLevel(settings.LOG_LEVEL)
    logger.propagate = False
    return logger
