"""
Requests building package.

Exports the payload builders and the per-dialect header builders.
"""

from .builders import (
    openai_chat_completion_payload,
    openai_create_image_payload,
    openai_moderation_payload,
)
from .headers import (
    build_azure_headers,
    build_bearer_json_headers,
    build_openai_headers,
    build_openrouter_headers,
)

__all__ = [
    "openai_chat_completion_payload",
    "openai_create_image_payload",
    "openai_moderation_payload",
    "build_azure_headers",
    "build_bearer_json_headers",
    "build_openai_headers",
    "build_openrouter_headers",
]
