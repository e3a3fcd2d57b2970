import orjson
import pytest

from dialect_proxy.api.openai import create_images
from dialect_proxy.core.exceptions import InvalidRequestError, UpstreamProtocolError
from dialect_proxy.models.api_models import AccessConfig, Dialect, ImageRequest

ACCESS = AccessConfig(dialect=Dialect.OPENAI, api_key="sk-1")


def image_request(**overrides) -> ImageRequest:
    fields = {
        "prompt": "a lighthouse at dusk",
        "count": 1,
        "model": "dall-e-3",
        "quality": "hd",
        "asUrl": True,
        "size": "1024x1024",
        "style": "vivid",
    }
    fields.update(overrides)
    return ImageRequest.model_validate(fields)


@pytest.mark.asyncio
async def test_dalle3_multiple_images_rejected_without_network(json_upstream):
    upstream, client = json_upstream({"created": 1, "data": []})

    with pytest.raises(InvalidRequestError):
        await create_images(ACCESS, image_request(count=2), client)

    assert upstream.requests == []


@pytest.mark.asyncio
async def test_revised_prompt_becomes_alt_text(json_upstream):
    upstream, client = json_upstream({
        "created": 1700000000,
        "data": [{"url": "https://img.example/1.png", "revised_prompt": "A tall lighthouse at dusk"}],
    })

    images = await create_images(ACCESS, image_request(), client)

    assert [(i.image_url, i.alt_text) for i in images] == [("https://img.example/1.png", "A tall lighthouse at dusk")]

    body = orjson.loads(upstream.last_request.content)
    assert body == {
        "prompt": "a lighthouse at dusk",
        "model": "dall-e-3",
        "n": 1,
        "quality": "hd",
        "response_format": "url",
        "size": "1024x1024",
        "style": "vivid",
        "user": "dialect-proxy",
    }
    assert upstream.last_request.url.path == "/v1/images/generations"


@pytest.mark.asyncio
async def test_prompt_is_alt_text_fallback(json_upstream):
    _, client = json_upstream({
        "created": 1,
        "data": [{"url": "https://img.example/1.png"}, {"url": "https://img.example/2.png"}],
    })

    images = await create_images(ACCESS, image_request(model="dall-e-2", count=2, size="512x512"), client)

    assert [i.alt_text for i in images] == ["a lighthouse at dusk", "a lighthouse at dusk"]


@pytest.mark.asyncio
async def test_base64_images_are_rejected(json_upstream):
    upstream, client = json_upstream({"created": 1, "data": [{"b64_json": "aGVsbG8="}]})

    with pytest.raises(UpstreamProtocolError, match="base64"):
        await create_images(ACCESS, image_request(asUrl=False), client)

    assert orjson.loads(upstream.last_request.content)["response_format"] == "b64_json"
