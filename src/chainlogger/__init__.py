"""
Request-scoped structured logging for Starlette / FastAPI services.

    import chainlogger
    from chainlogger.config.settings import get_settings

    # optional: without it entries still go to stdout at LOG_LEVEL
    chainlogger.setup_logging(get_settings())

    app.add_middleware(chainlogger.CorrelationIdMiddleware)
    app.add_middleware(chainlogger.AccessLogMiddleware)

    @app.get("/orders/{order_id}")
    async def read_order(order_id: int, request: Request):
        chainlogger.info("loading order %d", order_id, req=request)
        ...
"""

from chainlogger.core.logging import *  # noqa: F401,F403
from chainlogger.core.logging import __all__ as _logging_all
from chainlogger.exceptions import (
    ChainLoggerError,
    InvalidOptionsError,
    InvalidRequestError,
    MalformedStackTraceError,
)

__all__ = [
    *_logging_all,
    "ChainLoggerError",
    "InvalidOptionsError",
    "InvalidRequestError",
    "MalformedStackTraceError",
]
