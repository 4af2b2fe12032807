"""
Module-level logging functions backed by a process-wide default ChainLogger.

The default instance is built lazily from settings: its sink is the stdlib
logger named LOGGER_NAME and its transformer follows LOG_FORMAT. If that
logger has no handler yet (setup_logging() was not called), one is attached
from settings so info entries are not dropped. Replace it
with `set_chain_logger()` (tests do, and pass None afterwards to rebuild it
from settings on next use).

Each function forwards `stacklevel + 1` so source anchors keep pointing at
the code that called the module-level function.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from chainlogger.config.settings import get_settings

from .builder import ensure_sink_logger
from .dispatcher import ChainLogger, LogSink
from .entry import LogEntry, LogLevel
from .transformers import Transformer, transformer_for

_CHAIN_LOGGER: ChainLogger | None = None


def get_chain_logger() -> ChainLogger:
    global _CHAIN_LOGGER
    if _CHAIN_LOGGER is None:
        settings = get_settings()
        _CHAIN_LOGGER = ChainLogger(
            sink=LogSink.from_logger(ensure_sink_logger(settings)),
            transformer=transformer_for(settings.LOG_FORMAT),
        )
    return _CHAIN_LOGGER


def set_chain_logger(chain_logger: ChainLogger | None) -> None:
    global _CHAIN_LOGGER
    _CHAIN_LOGGER = chain_logger


def get_transformer() -> Transformer:
    return get_chain_logger().transformer


def set_transformer(transformer: Transformer) -> None:
    get_chain_logger().transformer = transformer


@contextmanager
def use_transformer(transformer: Transformer) -> Iterator[Transformer]:
    with get_chain_logger().use_transformer(transformer) as previous:
        yield previous


def apply_log_function(level: LogLevel, entry: LogEntry) -> None:
    get_chain_logger().apply_log_function(level, entry)


def debug(*messages: Any, req: Any = None, stacklevel: int = 1) -> None:
    get_chain_logger().debug(*messages, req=req, stacklevel=stacklevel + 1)


def info(*messages: Any, req: Any = None, stacklevel: int = 1) -> None:
    get_chain_logger().info(*messages, req=req, stacklevel=stacklevel + 1)


def warn(*messages: Any, req: Any = None, stacklevel: int = 1) -> None:
    get_chain_logger().warn(*messages, req=req, stacklevel=stacklevel + 1)


def error(*messages: Any, req: Any = None, stacklevel: int = 1) -> None:
    get_chain_logger().error(*messages, req=req, stacklevel=stacklevel + 1)


def info_source(*messages: Any, req: Any = None, stacklevel: int = 1) -> None:
    """Info entry anchored at the caller's file, line and column."""
    get_chain_logger().info_source(*messages, req=req, stacklevel=stacklevel + 1)
