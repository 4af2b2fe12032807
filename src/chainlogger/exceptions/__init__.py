from .base import (
    ChainLoggerError,
    InvalidRequestError,
    InvalidOptionsError,
    MalformedStackTraceError,
)

__all__ = [
    "ChainLoggerError",
    "InvalidRequestError",
    "InvalidOptionsError",
    "MalformedStackTraceError",
]
