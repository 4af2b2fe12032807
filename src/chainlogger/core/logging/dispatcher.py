"""
ChainLogger: entry building, transformer binding and dispatch to a sink.

A `ChainLogger` owns its active transformer instead of keeping it in module
state. Swapping it is a plain assignment to `chain_logger.transformer`,
guarded by a lock so the swap is atomic; each dispatch reads the binding
exactly once. Ordering of swaps relative to in-flight requests is the
caller's business.

    chain_logger = ChainLogger(LogSink.from_logger(logging.getLogger("svc")))
    chain_logger.info("listening on %s", port)
    chain_logger.error(exc, req=request)

    with chain_logger.use_transformer(json_transformer):
        chain_logger.warn("emitted as JSON")
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from .entry import LogEntry, LogLevel, make_entry
from .source import source_anchor
from .transformers import Transformer, text_transformer


@dataclass(frozen=True)
class LogSink:
    """
    The three output functions entries end up in.

    Each takes a single already-formatted string. DEBUG entries go to `info`.
    """

    info: Callable[[str], Any]
    warn: Callable[[str], Any]
    error: Callable[[str], Any]

    @classmethod
    def from_logger(cls, logger: logging.Logger) -> "LogSink":
        return cls(info=logger.info, warn=logger.warning, error=logger.error)

    def for_level(self, level: LogLevel) -> Callable[[str], Any]:
        if level is LogLevel.ERROR:
            return self.error
        if level is LogLevel.WARN:
            return self.warn
        return self.info


class ChainLogger:
    def __init__(self, sink: LogSink, transformer: Transformer = text_transformer) -> None:
        self.sink = sink
        self._transformer = transformer
        self._lock = threading.Lock()

    @property
    def transformer(self) -> Transformer:
        return self._transformer

    @transformer.setter
    def transformer(self, transformer: Transformer) -> None:
        with self._lock:
            self._transformer = transformer

    @contextmanager
    def use_transformer(self, transformer: Transformer) -> Iterator[Transformer]:
        """
        Install `transformer` for the duration of the block, then restore the
        previous one. Yields the previous transformer so the new one can wrap it.
        """
        with self._lock:
            previous = self._transformer
            self._transformer = transformer
        try:
            yield previous
        finally:
            self.transformer = previous

    def apply_log_function(self, level: LogLevel, entry: LogEntry) -> None:
        """
        Transform `entry` and hand the result to the sink for `level`.

        The sink is called exactly once, or not at all when the transformer
        returns None.
        """
        transformed = self._transformer(level, entry)
        if transformed is None:
            return
        self.sink.for_level(level)(transformed)

    def _log(self, level: LogLevel, messages: tuple, req: Any, stacklevel: int) -> None:
        # _log and the public method sit between the user's call and make_entry
        entry = make_entry(*messages, req=req, stacklevel=stacklevel + 2)
        self.apply_log_function(level, entry)

    def debug(self, *messages: Any, req: Any = None, stacklevel: int = 1) -> None:
        self._log(LogLevel.DEBUG, messages, req, stacklevel)

    def info(self, *messages: Any, req: Any = None, stacklevel: int = 1) -> None:
        self._log(LogLevel.INFO, messages, req, stacklevel)

    def warn(self, *messages: Any, req: Any = None, stacklevel: int = 1) -> None:
        self._log(LogLevel.WARN, messages, req, stacklevel)

    def error(self, *messages: Any, req: Any = None, stacklevel: int = 1) -> None:
        self._log(LogLevel.ERROR, messages, req, stacklevel)

    def info_source(self, *messages: Any, req: Any = None, stacklevel: int = 1) -> None:
        """
        Emit an info entry anchored at the caller's file, line and column.

        Pass a larger `stacklevel` from wrappers so the anchor skips them.
        """
        entry = make_entry(*messages, req=req, stacklevel=stacklevel + 1)
        entry.set_anchor(source_anchor(stacklevel))
        self.apply_log_function(LogLevel.INFO, entry)
