"""
Provider wire shapes.

Only the fields this proxy reads are declared; everything else an upstream
sends is tolerated (extra="allow") unless the shape is pinned on purpose.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class WireBaseModel(BaseModel):
    model_config = {"extra": "allow"}


# --- /v1/models ---

class WireModelDescription(WireBaseModel):
    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    owned_by: Optional[str] = None


class WireModelsResponse(WireBaseModel):
    object: Optional[str] = None
    data: Optional[List[WireModelDescription]] = None


# --- Azure /openai/deployments ---

class WireAzureDeployment(WireBaseModel):
    model: str  # the OpenAI model id
    owner: Literal["organization-owner"]
    id: str  # the deployment name
    status: Literal["succeeded"]
    created_at: int
    updated_at: int
    object: Literal["deployment"]


class WireAzureListDeployments(WireBaseModel):
    data: List[WireAzureDeployment]
    object: Literal["list"]


# --- OpenRouter /v1/models entries ---

class WireOpenRouterPricing(WireBaseModel):
    prompt: str = "0"
    completion: str = "0"


class WireOpenRouterTopProvider(WireBaseModel):
    max_completion_tokens: Optional[int] = None


class WireOpenRouterModel(WireBaseModel):
    id: str
    name: str
    description: Optional[str] = None
    pricing: Optional[WireOpenRouterPricing] = None
    context_length: Optional[int] = None
    top_provider: Optional[WireOpenRouterTopProvider] = None


# --- TogetherAI /v1/models (bare list) ---

class WireTogetherAIModel(WireBaseModel):
    id: str
    object: Optional[str] = None
    created: Optional[int] = None
    type: Optional[str] = None
    display_name: Optional[str] = None
    organization: Optional[str] = None
    context_length: Optional[int] = None


# --- /v1/chat/completions ---

class WireFunctionCall(WireBaseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class WireChatMessage(WireBaseModel):
    role: str = "assistant"
    content: Optional[str] = None
    function_call: Optional[WireFunctionCall] = None


class WireChatChoice(WireBaseModel):
    index: Optional[int] = None
    message: WireChatMessage
    finish_reason: Optional[str] = None


class WireChatCompletionResponse(WireBaseModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: Optional[List[WireChatChoice]] = None
    usage: Optional[Dict[str, Any]] = None


# --- /v1/images/generations ---

class WireImageUrl(BaseModel):
    url: str
    revised_prompt: Optional[str] = None


class WireImageB64(BaseModel):
    b64_json: str
    revised_prompt: Optional[str] = None


class WireCreateImageOutput(WireBaseModel):
    created: int
    data: List[Union[WireImageUrl, WireImageB64]] = Field(default_factory=list)
