"""
Correlation ids: read or create the id of an incoming request and copy it
onto outgoing requests.

The id lives on the incoming request's own header mapping under
`x-correlation-id`, so every component that holds the request sees the same
value for the rest of the request. Outgoing requests carry it under
`X-Correlation-ID`.

A "request" is anything with a `headers` attribute:
  - a Starlette / FastAPI `Request` (or any HTTPConnection); the id is written
    through `MutableHeaders(scope=...)`, which binds `scope["headers"]` to the
    list it mutates, and that view replaces the request's cached headers. So
    `request.headers`, downstream middleware and endpoints that build their
    own `Request` from the same scope all see it;
  - any object whose `headers` is a plain mutable mapping (dicts in tests,
    other frameworks' request objects).
"""

from __future__ import annotations

import uuid
from collections.abc import MutableMapping
from typing import Any

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection

from chainlogger.exceptions.base import InvalidOptionsError, InvalidRequestError

CORRELATION_ID_HEADER = "x-correlation-id"
OUTGOING_CORRELATION_ID_HEADER = "X-Correlation-ID"

_ABSENT: Any = object()


def _request_headers(req: Any) -> MutableMapping[str, str] | None:
    if isinstance(req, HTTPConnection):
        headers = req.headers
        if not isinstance(headers, MutableHeaders):
            # Headers.raw is a copy; only a scope-bound view writes through
            headers = MutableHeaders(scope=req.scope)
            req._headers = headers
        return headers
    headers = getattr(req, "headers", None)
    if isinstance(headers, (MutableHeaders, MutableMapping)):
        return headers
    return None


def read_correlation_id(req: Any) -> str | None:
    """
    Correlation id already present on `req`, without creating one.
    """
    if req is None:
        return None
    headers = getattr(req, "headers", None)
    if headers is None:
        return None
    return headers.get(CORRELATION_ID_HEADER) or None


def get_correlation_id(req: Any) -> str:
    """
    Return the correlation id of `req`, generating and storing a UUID4 if absent.

    Raises:
        InvalidRequestError: `req` is None or has no header mapping.
    """
    headers = _request_headers(req) if req is not None else None
    if headers is None:
        raise InvalidRequestError("request headers missing while reading correlation id")

    correlation_id = headers.get(CORRELATION_ID_HEADER)
    if not correlation_id:
        correlation_id = str(uuid.uuid4())
        headers[CORRELATION_ID_HEADER] = correlation_id
    return correlation_id


def assign_correlation_id(req: Any, opts: Any = _ABSENT) -> MutableMapping[str, Any] | None:
    """
    Copy the correlation id of `req` onto outgoing request options.

    Args:
        req: the incoming request.
        opts: options for the outgoing request. A bare string is taken as the
            target URI and becomes `{"uri": opts}`. When omitted, the request's
            id is still created if needed but nothing is assigned.

    Returns:
        The mutated options mapping, or None when `opts` was omitted.

    Raises:
        InvalidRequestError: `req` is None or has no header mapping.
        InvalidOptionsError: `opts` was given but is not a mutable mapping.
    """
    if isinstance(opts, str):
        opts = {"uri": opts}

    if req is None or _request_headers(req) is None:
        raise InvalidRequestError(
            "request headers missing; assign_correlation_id needs an incoming request"
        )

    correlation_id = get_correlation_id(req)

    if opts is _ABSENT:
        return None
    if not isinstance(opts, MutableMapping):
        raise InvalidOptionsError("trying to assign correlation id to empty options")

    if opts.get("headers") is None:
        opts["headers"] = {}
    opts["headers"][OUTGOING_CORRELATION_ID_HEADER] = correlation_id
    return opts


def correlation_headers(req: Any) -> dict[str, str]:
    """
    Headers to pass to an HTTP client call made on behalf of `req`.

    Example:
        httpx.get(url, headers=correlation_headers(request))
    """
    return {OUTGOING_CORRELATION_ID_HEADER: get_correlation_id(req)}
