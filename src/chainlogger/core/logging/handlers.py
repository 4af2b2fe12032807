"""
Handler factories for logging.dictConfig.

Each helper returns a handler configuration dict for the "handlers" section
of the mapping built in builder.py. Keeping them here keeps the builder short
and lets tests assert on plain dicts for different settings.

Handlers for the sink logger use the "passthrough" or "color" formatter:
transformers already produced the final text. The "console" handler serves
every other logger with the "standard" format and the correlation id filter.
"""

from chainlogger.config.settings import Settings
from pathlib import Path

def sink_formatter_name(settings: Settings) -> str:
    # colour only makes sense for human-readable text on a terminal
    if settings.LOG_COLOR and settings.LOG_FORMAT == "text":
        return "color"
    return "passthrough"

def get_sink_console_handler(settings: Settings) -> dict:
    """
    Stream handler on stdout for transformed entries.

    stdout rather than the StreamHandler default of stderr, so container log
    collectors pick entries up together with the access log.
    """
    return {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
        "formatter": sink_formatter_name(settings),
        "level": settings.LOG_LEVEL,
    }

def get_sink_file_handler(settings: Settings) -> dict:
    file_path = str(Path(settings.LOG_DIR) / "chain.log")
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "passthrough",
        "level": settings.LOG_LEVEL,
        "filename": file_path,
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
    }

def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "standard",
        "level": settings.LOG_LEVEL,
        "filters": ["correlation_id"],
    }
