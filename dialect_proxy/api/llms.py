import logging
from typing import Any, Dict, List

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from ..models.api_models import (
    ChatGenerateInput,
    ChatGenerateOutput,
    CreateImageOutput,
    CreateImagesInput,
    ListModelsInput,
    ListModelsResponse,
    ModerationInput,
)
from . import openai

logger = logging.getLogger("DialectProxy.Routers.LLMs")
router = APIRouter(prefix="/llms/openai", tags=["LLMs"])


async def get_http_client(request: Request) -> httpx.AsyncClient:
    client = getattr(request.app.state, "http_client", None)
    if client is None or (hasattr(client, 'is_closed') and client.is_closed):
        logger.error("HTTP client not available or closed in app.state.")
        raise HTTPException(status_code=503, detail="Service unavailable: HTTP client not initialized or closed.")
    return client


@router.post("/listModels", response_model=ListModelsResponse)
async def list_models_endpoint(
    payload: ListModelsInput,
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    models = await openai.list_models(payload.access, http_client)
    return ListModelsResponse(models=models)


@router.post("/chatGenerateWithFunctions", response_model=ChatGenerateOutput)
async def chat_generate_endpoint(
    payload: ChatGenerateInput,
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    return await openai.chat_generate(
        payload.access,
        payload.model,
        payload.history,
        payload.functions,
        payload.force_function_name,
        http_client,
    )


@router.post("/createImages", response_model=List[CreateImageOutput])
async def create_images_endpoint(
    payload: CreateImagesInput,
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    return await openai.create_images(payload.access, payload.request, http_client)


@router.post("/moderation")
async def moderation_endpoint(
    payload: ModerationInput,
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> Dict[str, Any]:
    return await openai.moderate(payload.access, payload.text, http_client)
