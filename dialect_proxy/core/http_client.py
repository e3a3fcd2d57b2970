"""
HTTP transport for upstream providers.

- create_http_client: the shared httpx.AsyncClient owned by the app lifespan
- fetch_json: one request, JSON decoded with orjson, failures raised as TransportError
"""
import logging
from typing import Any, Dict, Optional

import httpx
import orjson

from .config import API_TIMEOUT, READ_TIMEOUT, MAX_CONNECTIONS
from .exceptions import (
    CONNECTION_REFUSED,
    CONNECTION_RESET,
    FETCH_FAILED,
    INVALID_JSON,
    TIMED_OUT,
    UPSTREAM_HTTP_ERROR,
    TransportError,
    walk_exception_chain,
)

logger = logging.getLogger("DialectProxy.Core.HTTPClient")

ERROR_BODY_PREVIEW_CHARS = 1000


def create_http_client() -> httpx.AsyncClient:
    """
    Build the application-wide HTTP client.

    - limits: total connections and keep-alive pool
    - timeout: connect timeout from API_TIMEOUT, read timeout from READ_TIMEOUT
    - http2: enabled when the upstream supports it
    """
    logger.info(f"Initializing HTTP client. Timeout Connect: {API_TIMEOUT}s, Read Timeout: {READ_TIMEOUT}s, Max Connections: {MAX_CONNECTIONS}")
    return httpx.AsyncClient(
        timeout=httpx.Timeout(API_TIMEOUT, read=READ_TIMEOUT),
        limits=httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=50,
            keepalive_expiry=120.0
        ),
        http2=True,
        follow_redirects=True,
        trust_env=True
    )


def transport_error_code(error: BaseException) -> str:
    """Map an httpx failure (and its cause chain) to a transport error code. Unknown failures are EFETCH."""
    for exc in walk_exception_chain(error):
        if isinstance(exc, ConnectionResetError):
            return CONNECTION_RESET
    if isinstance(error, httpx.TimeoutException):
        return TIMED_OUT
    if isinstance(error, httpx.ConnectError):
        return CONNECTION_REFUSED
    return FETCH_FAILED


async def fetch_json(
    http_client: httpx.AsyncClient,
    url: str,
    method: str,
    headers: Dict[str, str],
    body: Optional[Dict[str, Any]] = None,
    module_name: str = "Upstream",
) -> Any:
    try:
        if body is not None:
            response = await http_client.request(method, url, headers=headers, content=orjson.dumps(body))
        else:
            response = await http_client.request(method, url, headers=headers)
    # InvalidURL is not an HTTPError: an unparseable caller host fails here
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        code = transport_error_code(e)
        logger.error(f"[{module_name}] {method} {url} failed ({code}): {e}")
        raise TransportError(f"[{module_name} Network Issue] {str(e) or type(e).__name__}", code=code) from e

    if response.status_code < 200 or response.status_code >= 300:
        text_preview = response.text[:ERROR_BODY_PREVIEW_CHARS] if response.text else ""
        logger.error(f"[{module_name}] Upstream non-2xx {response.status_code}. Body preview: {text_preview}")
        message = f"[{module_name} Issue] {response.reason_phrase or 'Error'} ({response.status_code})"
        if text_preview:
            message += f" - {text_preview}"
        raise TransportError(message, code=UPSTREAM_HTTP_ERROR, upstream_status=response.status_code)

    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        logger.error(f"[{module_name}] Upstream returned a non-JSON body: {e}")
        raise TransportError(f"[{module_name} Issue] Invalid JSON response: {e}", code=INVALID_JSON) from e
