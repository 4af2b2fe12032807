"""
Logging filters

Correlation id context and the filter that stamps it on stdlib LogRecords.

The correlation id of the request being served is kept in a
`contextvars.ContextVar`, so it follows the request across `await` points and
into tasks created while handling it. `CorrelationIdMiddleware` sets it at
the start of a request and resets it when the request is done.

Two consumers read it:
  - the entry builder, when an entry is made without an explicit request;
  - `CorrelationIdFilter`, so formatters of ordinary `logging` loggers can
    reference `%(correlation_id)s` without KeyErrors.

Installing the filter (dictConfig snippet, see builder.py):

    "filters": {"correlation_id": {"()": CorrelationIdFilter}},
    "handlers": {"console": {..., "filters": ["correlation_id"]}}
"""

import logging
from logging import LogRecord
import contextvars

_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

def set_correlation_id(correlation_id: str | None):
    """
    Set the correlation id in the current context and return the token to allow reset.

    Returns:
        token: contextvar.Token which can be passed to reset_correlation_id(token)
    """
    return _correlation_id_ctx.set(correlation_id)

def reset_correlation_id(token):
    _correlation_id_ctx.reset(token)

def current_correlation_id() -> str | None:
    """
    Correlation id bound to the current context, or None outside a request.
    """
    return _correlation_id_ctx.get()

class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `correlation_id` attribute.

    Precedence:
      - record.correlation_id, when passed explicitly via `extra`
      - the contextvar value set by the middleware
      - the sentinel "-"

    Always returns True; it annotates records and never drops them.
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or current_correlation_id() or "-"
        )
        return True
