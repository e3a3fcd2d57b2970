"""
Per-dialect model catalogs: provider model ids -> ModelDescription.

Known models carry curated labels, context windows and capabilities; anything
unknown falls back to a description derived from the id alone.
"""
import functools
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..models.api_models import ModelDescription
from ..models.wire_models import WireModelDescription, WireOpenRouterModel, WireTogetherAIModel
from ..utils.validation import validate_wire

logger = logging.getLogger("DialectProxy.Services.ModelCatalog")

LLM_IF_OAI_CHAT = "oai-chat"
LLM_IF_OAI_FN = "oai-chat-fn"
LLM_IF_OAI_VISION = "oai-chat-vision"


@dataclass(frozen=True)
class KnownModel:
    id_prefix: str
    label: str
    description: str
    context_window: Optional[int]
    interfaces: List[str] = field(default_factory=lambda: [LLM_IF_OAI_CHAT])
    max_completion_tokens: Optional[int] = None
    training_data_cutoff: Optional[str] = None
    hidden: bool = False


def from_manual_mapping(
    mappings: Sequence[KnownModel],
    model_id: str,
    created: Optional[int],
    updated: Optional[int],
    fallback: Optional[KnownModel] = None,
) -> ModelDescription:
    # exact id, then prefix, then the fallback, then the last (oldest) known model
    known = next((m for m in mappings if m.id_prefix == model_id), None) \
        or next((m for m in mappings if model_id.startswith(m.id_prefix)), None) \
        or fallback \
        or mappings[-1]

    label = known.label
    if model_id.startswith(known.id_prefix):
        # symlinks and dated snapshots keep the family label plus their suffix
        suffix = model_id[len(known.id_prefix):].replace("-", " ").strip()
        if suffix:
            label = f"{label} [{suffix}]"
    else:
        # borrowed description: the id keeps it distinguishable
        label = f"{label} [{model_id}]"

    return ModelDescription(
        id=model_id,
        label=label,
        created=created or 0,
        updated=updated or created or 0,
        description=known.description,
        context_window=known.context_window,
        max_completion_tokens=known.max_completion_tokens,
        training_data_cutoff=known.training_data_cutoff,
        interfaces=list(known.interfaces),
        hidden=True if known.hidden else None,
    )


# --- OpenAI ---

_KNOWN_OPENAI_CHAT_MODELS: List[KnownModel] = [
    KnownModel("gpt-4-1106-preview", "GPT-4 Turbo (1106)", "128k context, more capable than GPT-4 and optimized for chat. Returns a maximum of 4,096 output tokens.",
               128000, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], max_completion_tokens=4096, training_data_cutoff="Apr 2023"),
    KnownModel("gpt-4-vision-preview", "GPT-4 Turbo Vision", "GPT-4 Turbo with the ability to understand images.",
               128000, [LLM_IF_OAI_CHAT, LLM_IF_OAI_VISION], max_completion_tokens=4096, training_data_cutoff="Apr 2023"),
    KnownModel("gpt-4-32k-0613", "GPT-4 32k (0613)", "Snapshot of gpt-4-32k from June 13th 2023.",
               32768, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-4-32k-0314", "GPT-4 32k (0314)", "Snapshot of gpt-4-32k from March 14th 2023.",
               32768, [LLM_IF_OAI_CHAT], training_data_cutoff="Sep 2021", hidden=True),
    KnownModel("gpt-4-32k", "GPT-4 32k", "Same capabilities as the standard gpt-4 mode but with 4x the context length.",
               32768, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-4-0613", "GPT-4 (0613)", "Snapshot of gpt-4 from June 13th 2023 with function calling data.",
               8192, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-4-0314", "GPT-4 (0314)", "Snapshot of gpt-4 from March 14th 2023.",
               8192, [LLM_IF_OAI_CHAT], training_data_cutoff="Sep 2021", hidden=True),
    KnownModel("gpt-4", "GPT-4", "More capable than any GPT-3.5 model, able to do more complex tasks, and optimized for chat.",
               8192, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-3.5-turbo-1106", "3.5-Turbo 16k (1106)", "The latest GPT-3.5 Turbo model with improved instruction following and JSON mode.",
               16385, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], max_completion_tokens=4096, training_data_cutoff="Sep 2021"),
    KnownModel("gpt-3.5-turbo-16k-0613", "3.5-Turbo 16k (0613)", "Snapshot of gpt-3.5-turbo-16k from June 13th 2023.",
               16385, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-3.5-turbo-16k", "3.5-Turbo 16k", "Same capabilities as the standard gpt-3.5-turbo model but with 4 times the context.",
               16385, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-3.5-turbo-0613", "3.5-Turbo (0613)", "Snapshot of gpt-3.5-turbo from June 13th 2023 with function calling data.",
               4097, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
    KnownModel("gpt-3.5-turbo-0301", "3.5-Turbo (0301)", "Snapshot of gpt-3.5-turbo from March 1st 2023.",
               4097, [LLM_IF_OAI_CHAT], training_data_cutoff="Sep 2021", hidden=True),
    KnownModel("gpt-3.5-turbo", "3.5-Turbo", "Most capable GPT-3.5 model and optimized for chat.",
               4097, [LLM_IF_OAI_CHAT, LLM_IF_OAI_FN], training_data_cutoff="Sep 2021"),
]


def openai_model_to_description(model_id: str, created: Optional[int] = None, updated: Optional[int] = None) -> ModelDescription:
    return from_manual_mapping(_KNOWN_OPENAI_CHAT_MODELS, model_id, created, updated)


# --- LM Studio, LocalAI ---

def lmstudio_model_to_description(model_id: str) -> ModelDescription:
    # LM Studio model ids are the paths of the model files
    file_name = model_id.replace("\\", "/").split("/")[-1]
    label = file_name.replace(".gguf", "").replace(".bin", "")
    return from_manual_mapping([], model_id, None, None, KnownModel(
        id_prefix=model_id,
        label=label,
        description=f"Unknown LM Studio model. File: {model_id}",
        context_window=None,
    ))


def localai_model_to_description(model_id: str) -> ModelDescription:
    label = model_id.replace("ggml-", "").replace(".bin", "").replace("-", " ")
    return from_manual_mapping([], model_id, None, None, KnownModel(
        id_prefix=model_id,
        label=label,
        description="Unknown LocalAI model.",
        context_window=None,
    ))


# --- Mistral ---

_KNOWN_MISTRAL_MODELS: List[KnownModel] = [
    KnownModel("mistral-medium", "Mistral Medium", "Mistral internal prototype model.", 32768),
    KnownModel("mistral-small", "Mistral Small", "Higher reasoning capabilities and more capabilities (English, French, German, Italian, Spanish, and Code).", 32768),
    KnownModel("mistral-tiny", "Mistral Tiny", "Used for large batch processing tasks where cost is a significant factor but reasoning capabilities are not crucial.", 32768),
    KnownModel("mistral-embed", "Mistral Embed", "State-of-the-art semantic for extracting representation of text extracts.", 32768, [], hidden=True),
]

_MISTRAL_FAMILY_ORDER = ["mistral-large", "mistral-medium", "mistral-small", "mistral-tiny", "open-mixtral", "open-mistral", "mistral-embed"]


def mistral_model_to_description(model: WireModelDescription) -> ModelDescription:
    return from_manual_mapping(_KNOWN_MISTRAL_MODELS, model.id, model.created, None, KnownModel(
        id_prefix=model.id,
        label=model.id,
        description="Mistral model",
        context_window=32768,
    ))


def _family_index(model_id: str, families: Sequence[str]) -> int:
    for index, prefix in enumerate(families):
        if model_id.startswith(prefix):
            return index
    return len(families)


def mistral_models_sort(models: List[ModelDescription]) -> List[ModelDescription]:
    """Hidden models last, then by family order, then by id."""
    return sorted(models, key=lambda m: (bool(m.hidden), _family_index(m.id, _MISTRAL_FAMILY_ORDER), m.id))


# --- Oobabooga ---

# placeholder models the text-generation-webui OpenAI extension lists but cannot serve
_OOBABOOGA_VIRTUAL_MODELS = {"text-curie-001", "text-davinci-002", "all-mpnet-base-v2", "gpt-3.5-turbo", "text-embedding-ada-002", "None"}


def oobabooga_model_to_description(model_id: str, created: Optional[int] = None) -> ModelDescription:
    words = model_id.replace("_", " ").replace("-", " ").split(" ")
    label = " ".join(word[:1].upper() + word[1:] for word in words if word)
    if label.endswith(".bin"):
        label = label[:-4]
    return ModelDescription(
        id=model_id,
        label=label,
        created=created or 0,
        updated=created or 0,
        description="Oobabooga model",
        context_window=4096,
        interfaces=[LLM_IF_OAI_CHAT],
        hidden=model_id in _OOBABOOGA_VIRTUAL_MODELS or None,
    )


# --- OpenRouter ---

_OPENROUTER_FAMILY_ORDER = [
    "openrouter/auto",
    "openai/",
    "anthropic/",
    "google/",
    "mistralai/",
    "meta-llama/",
    "perplexity/",
    "nousresearch/",
    "gryphe/",
]

# old or unfit for chat, still listed upstream
_OPENROUTER_HIDDEN_PREFIXES = ["openai/gpt-3.5-turbo-0301", "openai/gpt-4-0314", "openai/text-davinci-002", "anthropic/claude-instant-v1"]


def openrouter_model_family_sort(a: Any, b: Any) -> int:
    """
    Comparator over records with an ``id``: known families first in family order,
    newest-looking ids first within a family, unknown families last by id.
    """
    a_index = _family_index(a.id, _OPENROUTER_FAMILY_ORDER)
    b_index = _family_index(b.id, _OPENROUTER_FAMILY_ORDER)
    if a_index != b_index:
        return a_index - b_index
    if a_index == len(_OPENROUTER_FAMILY_ORDER):
        return (a.id > b.id) - (a.id < b.id)
    return (b.id > a.id) - (b.id < a.id)


openrouter_model_family_sort_key = functools.cmp_to_key(openrouter_model_family_sort)


def openrouter_model_to_description(wire_model: Any) -> ModelDescription:
    model = validate_wire(WireOpenRouterModel, wire_model, "OpenRouter model")
    pricing = model.pricing
    is_free = pricing is not None and _is_zero_price(pricing.prompt) and _is_zero_price(pricing.completion)

    label = model.name
    if is_free:
        label += " · Free"

    max_completion = model.top_provider.max_completion_tokens if model.top_provider else None
    return ModelDescription(
        id=model.id,
        label=label,
        created=0,
        updated=0,
        description=model.description or "",
        context_window=model.context_length or 4096,
        max_completion_tokens=max_completion or None,
        interfaces=[LLM_IF_OAI_CHAT],
        hidden=True if any(model.id.startswith(p) for p in _OPENROUTER_HIDDEN_PREFIXES) else None,
    )


def _is_zero_price(price: str) -> bool:
    try:
        return float(price) == 0
    except ValueError:
        return False


# --- TogetherAI ---

_KNOWN_TOGETHERAI_MODELS: List[KnownModel] = [
    KnownModel("mistralai/Mixtral-8x7B-Instruct-v0.1", "Mixtral Instruct", "The Mixtral-8x7B Large Language Model (LLM) is a pretrained generative Sparse Mixture of Experts.", 32768),
    KnownModel("mistralai/Mistral-7B-Instruct-v0.2", "Mistral (7B) Instruct v0.2", "The Mistral-7B-Instruct-v0.2 Large Language Model (LLM) is an improved instruct fine-tuned version of Mistral-7B-Instruct-v0.1.", 32768),
    KnownModel("NousResearch/Nous-Hermes-2-Yi-34B", "Nous Hermes-2 Yi (34B)", "Nous Hermes 2 - Yi-34B is a state of the art Yi Fine-tune.", 4097),
]

_TOGETHERAI_CHAT_TYPES = {"chat"}


def togetherai_models_to_descriptions(wire_models: Any) -> List[ModelDescription]:
    models = validate_wire(List[WireTogetherAIModel], wire_models, "TogetherAI models")

    descriptions = [
        from_manual_mapping(_KNOWN_TOGETHERAI_MODELS, model.id, model.created, None, KnownModel(
            id_prefix=model.id,
            label=model.display_name or model.id,
            description=f"{model.organization or 'Unknown'} model",
            context_window=model.context_length,
        ))
        for model in models
        if model.type in _TOGETHERAI_CHAT_TYPES
    ]
    skipped = len(models) - len(descriptions)
    if skipped:
        logger.debug(f"TogetherAI: skipped {skipped} non-chat models")
    return sorted(descriptions, key=lambda m: m.label)
