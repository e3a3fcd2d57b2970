"""
Request builders package.

Provider-shaped request bodies built from the internal schema.
"""

from .openai_builder import (
    openai_chat_completion_payload,
    openai_create_image_payload,
    openai_moderation_payload,
)

__all__ = [
    "openai_chat_completion_payload",
    "openai_create_image_payload",
    "openai_moderation_payload",
]
