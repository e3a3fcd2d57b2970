"""
Response normalizers package.

Validate provider responses against their wire shapes and turn them into the
proxy's response models.
"""

from .chat import apply_localai_finish_reason_shim, normalize_chat_response
from .images import normalize_image_generations
from .models_list import (
    dedupe_models_by_id,
    normalize_azure_deployments,
    normalize_models_list,
    openai_models_sort,
)

__all__ = [
    "apply_localai_finish_reason_shim",
    "normalize_chat_response",
    "normalize_image_generations",
    "dedupe_models_by_id",
    "normalize_azure_deployments",
    "normalize_models_list",
    "openai_models_sort",
]
