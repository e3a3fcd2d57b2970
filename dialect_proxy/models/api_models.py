from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Dialect(str, Enum):
    AZURE = "azure"
    LMSTUDIO = "lmstudio"
    LOCALAI = "localai"
    MISTRAL = "mistral"
    OOBABOOGA = "oobabooga"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    TOGETHERAI = "togetherai"


# --- Inputs ---

class AccessConfig(BaseModel):
    dialect: Dialect
    api_key: str = Field("", alias="oaiKey")
    organization_id: str = Field("", alias="oaiOrg")
    host: str = Field("", alias="oaiHost")
    # Helicone key
    proxy_key: str = Field("", alias="heliKey")
    moderation_check: bool = Field(False, alias="moderationCheck")
    # use the server-side key instead of api_key
    use_default_key: bool = Field(False, alias="defaultCheck")
    model_config = {"populate_by_name": True, "frozen": True, "str_strip_whitespace": True}


class ModelConfig(BaseModel):
    id: str
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, alias="maxTokens", ge=1, le=1000000)
    model_config = {"populate_by_name": True}


class HistoryMessage(BaseModel):
    role: Literal["assistant", "system", "user"]
    content: str


class FunctionParameterProperty(BaseModel):
    type: Literal["string", "number", "integer", "boolean"]
    description: Optional[str] = None
    enum: Optional[List[str]] = None


class FunctionParameters(BaseModel):
    type: Literal["object"] = "object"
    properties: Dict[str, FunctionParameterProperty]
    required: Optional[List[str]] = None


class FunctionSpec(BaseModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[FunctionParameters] = None


class ImageRequest(BaseModel):
    prompt: str
    count: int = Field(..., ge=1)
    model: Literal["dall-e-2", "dall-e-3"]
    quality: Literal["standard", "hd"]
    # if false, the upstream is asked for base64 data
    as_url: bool = Field(..., alias="asUrl")
    size: Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"]
    style: Literal["natural", "vivid"]
    model_config = {"populate_by_name": True}


class ListModelsInput(BaseModel):
    access: AccessConfig


class ChatGenerateInput(BaseModel):
    access: AccessConfig
    model: ModelConfig
    history: List[HistoryMessage]
    functions: Optional[List[FunctionSpec]] = None
    force_function_name: Optional[str] = Field(None, alias="forceFunctionName")
    model_config = {"populate_by_name": True}


class CreateImagesInput(BaseModel):
    access: AccessConfig
    request: ImageRequest


class ModerationInput(BaseModel):
    access: AccessConfig
    text: str


# --- Outputs ---

class ModelDescription(BaseModel):
    id: str
    label: str
    created: Optional[int] = None
    updated: Optional[int] = None
    description: str = ""
    context_window: Optional[int] = Field(None, alias="contextWindow")
    max_completion_tokens: Optional[int] = Field(None, alias="maxCompletionTokens")
    training_data_cutoff: Optional[str] = Field(None, alias="trainingDataCutoff")
    interfaces: List[str] = Field(default_factory=list)
    hidden: Optional[bool] = None
    model_config = {"populate_by_name": True}


class ListModelsResponse(BaseModel):
    models: List[ModelDescription]


class ChatGenerateFunctionCallOutput(BaseModel):
    type: Literal["function_call"] = "function_call"
    function_name: str
    function_arguments: Dict[str, Any]


class ChatGenerateMessageOutput(BaseModel):
    type: Literal["message"] = "message"
    role: Literal["assistant", "system", "user"]
    content: str
    finish_reason: Optional[Literal["stop", "length"]] = None


ChatGenerateOutput = Annotated[
    Union[ChatGenerateFunctionCallOutput, ChatGenerateMessageOutput],
    Field(discriminator="type")
]


class CreateImageOutput(BaseModel):
    image_url: str = Field(..., alias="imageUrl")
    alt_text: str = Field(..., alias="altText")
    model_config = {"populate_by_name": True}
