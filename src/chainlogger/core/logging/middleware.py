"""
Correlation id and access log middleware for FastAPI / Starlette.

CorrelationIdMiddleware
-----------------------
Makes sure every request carries a correlation id before the application sees
it:
1. Reads `x-correlation-id` from the incoming request, or generates a UUID4
   and stores it on the request headers (see correlation.py).
2. Binds the id to a contextvar (filters.py) for the duration of the request,
   so entries logged without passing `req=` still carry it and stdlib log
   records get `%(correlation_id)s`.
3. Echoes the id back in the `X-Correlation-ID` response header.

AccessLogMiddleware
-------------------
Emits exactly one access-log entry per HTTP request once the wrapped app has
finished, whether it returned normally, failed or the client went away.
Message: `<user> <status> <method> <path>`, where `<user>` is the basic-auth
username or `-`. The entry is marked `is_access_log` and carries `duration`
in milliseconds.

Registration order matters: Starlette runs the middleware added last first.
Add the access log last so it wraps everything else and its entry picks up
the correlation id assigned further in:

    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(AccessLogMiddleware, use_json_transformer=True)

Note: `use_json_transformer=True` (or `use_text_transformer=False`) installs
the JSON transformer on the middleware's ChainLogger when the middleware is
constructed. With the default ChainLogger that changes the output format of
every entry in the process, not only access logs. Starlette builds its
middleware stack lazily, on the first request, so entries logged between
`add_middleware` and that request are still text. To switch at start-up,
call `chainlogger.set_transformer(json_transformer)` before logging anything.
"""

from __future__ import annotations

from time import perf_counter
from typing import Any, Callable

from fastapi.security import HTTPBasic
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .correlation import OUTGOING_CORRELATION_ID_HEADER, get_correlation_id
from .dispatcher import ChainLogger
from .entry import LogLevel, make_entry
from .facade import get_chain_logger
from .filters import reset_correlation_id, set_correlation_id
from .transformers import json_transformer

ANONYMOUS_USER = "-"

_basic_auth = HTTPBasic(auto_error=False)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        correlation_id = get_correlation_id(request)
        token = set_correlation_id(correlation_id)

        try:
            response = await call_next(request)
            response.headers[OUTGOING_CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            reset_correlation_id(token)


async def basic_auth_username(request: Request) -> str:
    """
    Username from a basic `Authorization` header, or "-" when there is none
    or it cannot be decoded.
    """
    try:
        credentials = await _basic_auth(request)
    except HTTPException:
        return ANONYMOUS_USER
    if credentials is None or not credentials.username:
        return ANONYMOUS_USER
    return credentials.username


class AccessLogMiddleware:
    """
    Pure ASGI middleware; one access-log entry per completed HTTP request.

    Args:
        app: the wrapped ASGI app.
        chain_logger: where entries go; the process-wide default when None.
        use_text_transformer: passing False is the same as
            use_json_transformer=True.
        use_json_transformer: install the JSON transformer on chain_logger.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        *,
        chain_logger: ChainLogger | None = None,
        use_text_transformer: bool | None = None,
        use_json_transformer: bool = False,
    ) -> None:
        self.app = app
        self.chain_logger = chain_logger or get_chain_logger()

        if use_text_transformer is not None and not use_text_transformer:
            use_json_transformer = True
        if use_json_transformer:
            self.chain_logger.transformer = json_transformer

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = int((perf_counter() - start) * 1000)
            await self._emit(Request(scope), status_code, duration)

    async def _emit(self, request: Request, status_code: int, duration: int) -> None:
        username = await basic_auth_username(request)
        entry = make_entry(
            "%s %s %s %s",
            username,
            status_code,
            request.method,
            request.url.path,
            req=request,
        )
        entry.is_access_log = True
        entry.duration = duration
        self.chain_logger.apply_log_function(LogLevel.INFO, entry)
