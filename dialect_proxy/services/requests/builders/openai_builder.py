# -*- coding: utf-8 -*-
"""
OpenAI-wire request bodies (thin, focused).

- chat completions with optional legacy function calling
- image generations
- moderations
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ....core.config import IMAGE_CLIENT_USER, MODERATION_MODEL
from ....models.api_models import FunctionSpec, HistoryMessage, ImageRequest, ModelConfig


def openai_chat_completion_payload(
    model: ModelConfig,
    history: List[HistoryMessage],
    functions: Optional[List[FunctionSpec]],
    force_function_name: Optional[str],
    n: int = 1,
    stream: bool = False,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": model.id,
        "messages": [message.model_dump() for message in history],
    }
    if functions:
        payload["functions"] = [function.model_dump(exclude_none=True) for function in functions]
        payload["function_call"] = {"name": force_function_name} if force_function_name else "auto"
    if model.temperature is not None:
        payload["temperature"] = model.temperature
    if model.max_tokens is not None:
        payload["max_tokens"] = model.max_tokens
    if n > 1:
        payload["n"] = n
    payload["stream"] = stream
    return payload


def openai_create_image_payload(request: ImageRequest) -> Dict[str, Any]:
    return {
        "prompt": request.prompt,
        "model": request.model,
        "n": request.count,
        "quality": request.quality,
        "response_format": "url" if request.as_url else "b64_json",
        "size": request.size,
        "style": request.style,
        "user": IMAGE_CLIENT_USER,
    }


def openai_moderation_payload(text: str) -> Dict[str, Any]:
    return {
        "input": text,
        "model": MODERATION_MODEL,
    }
