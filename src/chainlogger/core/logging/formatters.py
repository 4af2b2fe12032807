"""
Formatters for the sink logger.

Entries reach the sink logger already rendered by a transformer, so the sink
handler normally uses a bare `%(message)s` formatter ("passthrough" in
builder.py). For local development consoles `ColorFormatter` wraps that same
line in an ANSI colour picked by level, leaving the text itself untouched.

Do not use ColorFormatter with the JSON transformer when logs are collected:
the escape codes end up inside the collected lines.
"""

import logging
from logging import LogRecord


class ColorFormatter(logging.Formatter):
    """
    Colours the whole transformed line by record level.

    Only the level decides the colour; everything else (timestamp, correlation
    id, duration, stack) was already placed in the message by the transformer.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",       # cyan
        "INFO": "\033[32m",        # green
        "WARNING": "\033[33m",     # yellow
        "ERROR": "\033[31m",       # red
        "CRITICAL": "\033[1;41m",  # bold, red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt or "%(message)s", datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"] if color else ""
        return f"{color}{super().format(record)}{reset}"
