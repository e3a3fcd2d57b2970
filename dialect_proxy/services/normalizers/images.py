from typing import Any, List

from ...core.exceptions import UpstreamProtocolError
from ...models.api_models import CreateImageOutput, ImageRequest
from ...models.wire_models import WireCreateImageOutput, WireImageB64
from ...utils.validation import validate_wire


def normalize_image_generations(request: ImageRequest, wire: Any) -> List[CreateImageOutput]:
    response = validate_wire(WireCreateImageOutput, wire, "image generation")

    outputs: List[CreateImageOutput] = []
    for image in response.data:
        # base64 payloads are not relayed
        if isinstance(image, WireImageB64):
            raise UpstreamProtocolError("[OpenAI Issue] Expected a URL image, got base64 data")
        outputs.append(CreateImageOutput(
            image_url=image.url,
            alt_text=image.revised_prompt or request.prompt,
        ))
    return outputs
