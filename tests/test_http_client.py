import httpx
import orjson
import pytest

from dialect_proxy.core.exceptions import (
    CONNECTION_REFUSED,
    FETCH_FAILED,
    INVALID_JSON,
    TIMED_OUT,
    UPSTREAM_HTTP_ERROR,
    TransportError,
)
from dialect_proxy.core.http_client import create_http_client, fetch_json, transport_error_code


@pytest.mark.asyncio
async def test_fetch_json_posts_orjson_body(json_upstream):
    upstream, client = json_upstream({"ok": True})

    result = await fetch_json(client, "https://up.example/v1/x", "POST", {"X-Test": "1"}, {"a": [1, 2]})

    assert result == {"ok": True}
    assert upstream.last_request.headers["X-Test"] == "1"
    assert orjson.loads(upstream.last_request.content) == {"a": [1, 2]}


@pytest.mark.asyncio
async def test_fetch_json_get_sends_no_body(json_upstream):
    upstream, client = json_upstream([1, 2, 3])

    assert await fetch_json(client, "https://up.example/v1/models", "GET", {}) == [1, 2, 3]
    assert upstream.last_request.content == b""


@pytest.mark.asyncio
async def test_non_2xx_carries_status_and_preview(json_upstream):
    _, client = json_upstream({"error": "nope"}, status_code=429)

    with pytest.raises(TransportError) as exc_info:
        await fetch_json(client, "https://up.example/v1/x", "GET", {}, module_name="OpenAI/openai")

    error = exc_info.value
    assert error.code == UPSTREAM_HTTP_ERROR
    assert error.upstream_status == 429
    assert "[OpenAI/openai Issue]" in error.message
    assert "nope" in error.message


@pytest.mark.asyncio
async def test_invalid_json_body(make_upstream):
    _, client = make_upstream(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(TransportError) as exc_info:
        await fetch_json(client, "https://up.example/v1/x", "GET", {})
    assert exc_info.value.code == INVALID_JSON


@pytest.mark.asyncio
async def test_network_failure_is_mapped(make_upstream):
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    _, client = make_upstream(refuse)

    with pytest.raises(TransportError) as exc_info:
        await fetch_json(client, "https://up.example/v1/x", "GET", {})
    assert exc_info.value.code == CONNECTION_REFUSED
    assert exc_info.value.status_code == 400


def test_transport_error_codes():
    request = httpx.Request("GET", "https://up.example")
    assert transport_error_code(httpx.ReadTimeout("slow", request=request)) == TIMED_OUT
    assert transport_error_code(httpx.RemoteProtocolError("bad", request=request)) == FETCH_FAILED


@pytest.mark.asyncio
async def test_create_http_client_configuration():
    client = create_http_client()
    try:
        assert client.follow_redirects is True
        assert client.timeout.read == 60.0
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_invalid_url_is_a_transport_error(json_upstream):
    upstream, client = json_upstream({"ok": True})

    with pytest.raises(TransportError) as exc_info:
        await fetch_json(client, "https://[::1/v1/models", "GET", {})
    assert exc_info.value.code == FETCH_FAILED
    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
    assert upstream.requests == []
