"""
Error taxonomy for the dialect proxy.

Every error carries a machine-readable ``code`` and the HTTP ``status_code``
the FastAPI exception handler renders it with.
"""

from __future__ import annotations

from typing import Iterator, Optional

# Transport error codes
CONNECTION_RESET = "ECONNRESET"
CONNECTION_REFUSED = "ECONNREFUSED"
TIMED_OUT = "ETIMEDOUT"
FETCH_FAILED = "EFETCH"
UPSTREAM_HTTP_ERROR = "UPSTREAM_HTTP_ERROR"
INVALID_JSON = "INVALID_JSON"


class DialectProxyError(Exception):
    """Base exception for all dialect proxy errors."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(DialectProxyError):
    """Missing or invalid credentials, host, or gateway path."""

    code = "CONFIGURATION_ERROR"
    status_code = 400


class InvalidRequestError(DialectProxyError):
    """Caller input violates a cross-field constraint."""

    code = "BAD_REQUEST"
    status_code = 400


class UpstreamProtocolError(DialectProxyError):
    """The provider response does not have the expected structure."""

    code = "UPSTREAM_PROTOCOL_ERROR"
    status_code = 502


class TransportError(DialectProxyError):
    """
    Network, HTTP status or body decoding failure while talking to a provider.
    ``code`` is one of the transport codes above; ``upstream_status`` is set
    when the provider answered with a non-2xx status.
    """

    code = FETCH_FAILED
    status_code = 400

    def __init__(self, message: str, *, code: str = FETCH_FAILED, upstream_status: Optional[int] = None) -> None:
        super().__init__(message, code=code)
        self.upstream_status = upstream_status


class ClientClosedRequestError(DialectProxyError):
    """The connection was reset while the request was in flight."""

    code = "CLIENT_CLOSED_REQUEST"
    status_code = 499


class BadRequestError(DialectProxyError):
    """Generic client-facing failure carrying the upstream message."""

    code = "BAD_REQUEST"
    status_code = 400


def walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur
        if cur.__cause__ is not None:
            stack.append(cur.__cause__)
        if cur.__context__ is not None:
            stack.append(cur.__context__)
