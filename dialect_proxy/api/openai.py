import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import AZURE_DEPLOYMENTS_API_VERSION
from ..core.exceptions import (
    CONNECTION_RESET,
    BadRequestError,
    ClientClosedRequestError,
    ConfigurationError,
    DialectProxyError,
    InvalidRequestError,
    TransportError,
)
from ..core.http_client import fetch_json
from ..models.api_models import (
    AccessConfig,
    ChatGenerateOutput,
    CreateImageOutput,
    Dialect,
    FunctionSpec,
    HistoryMessage,
    ImageRequest,
    ModelConfig,
    ModelDescription,
)
from ..services.normalizers import (
    normalize_azure_deployments,
    normalize_chat_response,
    normalize_image_generations,
    normalize_models_list,
)
from ..services.openai_access import openai_access
from ..services.requests import (
    openai_chat_completion_payload,
    openai_create_image_payload,
    openai_moderation_payload,
)
from ..utils.helpers import mask_api_key_for_log

logger = logging.getLogger("DialectProxy.Handlers.OpenAI")


async def openai_get(
    access: AccessConfig,
    model_ref: Optional[str],
    api_path: str,
    http_client: httpx.AsyncClient,
) -> Any:
    resolved = openai_access(access, model_ref, api_path)
    return await fetch_json(http_client, resolved.url, "GET", resolved.headers, module_name=f"OpenAI/{access.dialect.value}")


async def openai_post(
    access: AccessConfig,
    model_ref: Optional[str],
    body: Dict[str, Any],
    api_path: str,
    http_client: httpx.AsyncClient,
) -> Any:
    resolved = openai_access(access, model_ref, api_path)
    return await fetch_json(http_client, resolved.url, "POST", resolved.headers, body, module_name=f"OpenAI/{access.dialect.value}")


async def list_models(access: AccessConfig, http_client: httpx.AsyncClient) -> List[ModelDescription]:
    logger.info(f"listModels: dialect={access.dialect.value}, key={mask_api_key_for_log(access.api_key)}, host={access.host or '(default)'}")

    # Azure lists deployments, not models
    if access.dialect == Dialect.AZURE:
        wire = await openai_get(access, None, f"/openai/deployments?api-version={AZURE_DEPLOYMENTS_API_VERSION}", http_client)
        models = normalize_azure_deployments(wire)
    elif access.dialect in (
        Dialect.LMSTUDIO,
        Dialect.LOCALAI,
        Dialect.MISTRAL,
        Dialect.OOBABOOGA,
        Dialect.OPENAI,
        Dialect.OPENROUTER,
        Dialect.TOGETHERAI,
    ):
        wire = await openai_get(access, None, "/v1/models", http_client)
        models = normalize_models_list(access.dialect, wire)
    else:
        raise ConfigurationError(f"Unsupported OpenAI dialect: {access.dialect}")

    logger.info(f"listModels: {len(models)} models for dialect={access.dialect.value}")
    return models


async def chat_generate(
    access: AccessConfig,
    model: ModelConfig,
    history: List[HistoryMessage],
    functions: Optional[List[FunctionSpec]],
    force_function_name: Optional[str],
    http_client: httpx.AsyncClient,
) -> ChatGenerateOutput:
    functions_requested = bool(functions)
    logger.info(
        f"chatGenerate: dialect={access.dialect.value}, model={model.id}, messages={len(history)}, "
        f"functions={len(functions) if functions else 0}, forced={force_function_name or '-'}"
    )

    body = openai_chat_completion_payload(model, history, functions if functions_requested else None, force_function_name)
    wire = await openai_post(access, model.id, body, "/v1/chat/completions", http_client)
    return normalize_chat_response(access.dialect, wire, functions_requested)


async def create_images(
    access: AccessConfig,
    request: ImageRequest,
    http_client: httpx.AsyncClient,
) -> List[CreateImageOutput]:
    if request.model == "dall-e-3" and request.count > 1:
        raise InvalidRequestError(f"[OpenAI Issue] dall-e-3 can only generate 1 image per request, {request.count} requested")

    logger.info(f"createImages: dialect={access.dialect.value}, model={request.model}, count={request.count}, size={request.size}")
    body = openai_create_image_payload(request)
    wire = await openai_post(access, None, body, "/v1/images/generations", http_client)
    return normalize_image_generations(request, wire)


async def moderate(access: AccessConfig, text: str, http_client: httpx.AsyncClient) -> Dict[str, Any]:
    body = openai_moderation_payload(text)
    try:
        return await openai_post(access, None, body, "/v1/moderations", http_client)
    except TransportError as e:
        if e.code == CONNECTION_RESET:
            logger.warning(f"moderation: connection reset by the client ({e.message})")
            raise ClientClosedRequestError("Connection reset by the client.") from e
        logger.error(f"moderation: {e.message}")
        raise BadRequestError(f"Error: {e.message}") from e
    except DialectProxyError as e:
        logger.error(f"moderation: {e.message}")
        raise BadRequestError(f"Error: {e.message}") from e
