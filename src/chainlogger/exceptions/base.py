"""
Exceptions raised by the correlation and entry-building helpers.

All of them fail fast: they are raised synchronously to the direct caller and
nothing in this package catches them.
"""


class ChainLoggerError(Exception):
    """
    Base exception for logger errors.

    - message: human-friendly message
    - error_code: canonical short code (e.g., 'invalid_request') for callers that
      want to branch on the failure without matching on message text
    """

    def __init__(self, message: str, *, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.message} (code: {self.error_code})"
        return self.message


class InvalidRequestError(ChainLoggerError):
    """Raised when a request object is missing or carries no header mapping."""

    def __init__(self, message: str = "request headers missing"):
        super().__init__(message, error_code="invalid_request")


class InvalidOptionsError(ChainLoggerError):
    """Raised when outgoing request options are given but are not a mapping."""

    def __init__(self, message: str = "outgoing request options must be a mapping"):
        super().__init__(message, error_code="invalid_options")


class MalformedStackTraceError(ChainLoggerError):
    def __init__(self, message: str):
        super().__init__(message, error_code="malformed_stack")
