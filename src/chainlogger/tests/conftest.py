"""
Core pytest configuration for the test suite.

Provides a recording sink and a fresh ChainLogger per test, installed as the
process-wide default so the module-level functions (chainlogger.info, ...)
and AccessLogMiddleware without an explicit logger write into it. Nothing in
the suite writes to the real console unless a test asks for it via capsys.
"""

from __future__ import annotations

import logging

# Set the level for noisy third-party loggers before the app modules import them.
NOISY_LOGGERS = (
    "asyncio",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest

from chainlogger.config.settings import get_settings
from chainlogger.core.logging.dispatcher import ChainLogger, LogSink
from chainlogger.core.logging.facade import set_chain_logger
from chainlogger.core.logging.transformers import text_transformer


class RecordingSink:
    """
    Collects what the dispatcher hands to each sink function.

    `calls` keeps (sink_name, text) pairs in call order; sink_name is one of
    "info", "warn", "error".
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def _recorder(self, name: str):
        def record(text: str) -> None:
            self.calls.append((name, text))
        return record

    def as_log_sink(self) -> LogSink:
        return LogSink(
            info=self._recorder("info"),
            warn=self._recorder("warn"),
            error=self._recorder("error"),
        )

    def texts(self, name: str) -> list[str]:
        return [text for sink_name, text in self.calls if sink_name == name]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    for var in ("LOG_FORMAT", "LOG_LEVEL", "LOG_TO_STDOUT", "LOG_COLOR", "LOG_DIR", "LOGGER_NAME"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def chain_logger(sink: RecordingSink) -> ChainLogger:
    return ChainLogger(sink.as_log_sink(), transformer=text_transformer)


@pytest.fixture(autouse=True)
def default_chain_logger(chain_logger: ChainLogger):
    set_chain_logger(chain_logger)
    yield chain_logger
    set_chain_logger(None)


@pytest.fixture
def unconfigured_sink_logger(monkeypatch: pytest.MonkeyPatch, request: pytest.FixtureRequest):
    """
    Point LOGGER_NAME at a logger nobody configured and drop the default
    ChainLogger, so the next module-level call builds one from settings.
    """
    name = f"chainlogger.unconfigured.{request.node.name}"
    monkeypatch.setenv("LOGGER_NAME", name)
    set_chain_logger(None)
    logger = logging.getLogger(name)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
