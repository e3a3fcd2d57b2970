"""
Models list normalization: provider listings -> sorted, de-duplicated ModelDescriptions.
"""
import functools
import logging
from typing import Any, List, Sequence, Tuple, TypeVar

from ...core.exceptions import ConfigurationError
from ...models.api_models import Dialect, ModelDescription
from ...models.wire_models import WireAzureListDeployments, WireModelDescription, WireModelsResponse
from ...utils.validation import validate_wire
from ..model_catalog import (
    localai_model_to_description,
    lmstudio_model_to_description,
    mistral_model_to_description,
    mistral_models_sort,
    oobabooga_model_to_description,
    openai_model_to_description,
    openrouter_model_family_sort_key,
    openrouter_model_to_description,
    togetherai_models_to_descriptions,
)

logger = logging.getLogger("DialectProxy.Services.Normalizers.ModelsList")

T = TypeVar("T")


def normalize_azure_deployments(wire: Any) -> List[ModelDescription]:
    deployments = validate_wire(WireAzureListDeployments, wire, "Azure deployments")

    descriptions = []
    for deployment in deployments.data:
        # only chat-capable deployments
        if "gpt" not in deployment.model:
            continue
        description = openai_model_to_description(deployment.model, deployment.created_at, deployment.updated_at)
        descriptions.append(description.model_copy(update={
            "id": deployment.id,
            "label": f"{description.label} ({deployment.id})",
        }))
    return descriptions


def dedupe_models_by_id(models: Sequence[T], label: str = "models") -> Tuple[List[T], int]:
    """Keeps the first occurrence of every id; returns the unique list and how many were removed."""
    seen = set()
    unique: List[T] = []
    for model in models:
        if model.id in seen:
            continue
        seen.add(model.id)
        unique.append(model)

    removed = len(models) - len(unique)
    if removed:
        logger.warning(f"{label}: removed {removed} duplicate model ids from the upstream listing")
    return unique, removed


def _openai_models_compare(a: WireModelDescription, b: WireModelDescription) -> int:
    a_prefix, b_prefix = a.id[:5], b.id[:5]
    if a_prefix == b_prefix:
        # same family: base model first, then snapshots
        a_segments, b_segments = len(a.id.split("-")), len(b.id.split("-"))
        if a_segments != b_segments:
            return a_segments - b_segments
        return (a.id > b.id) - (a.id < b.id)
    # newer families first
    return (b_prefix > a_prefix) - (b_prefix < a_prefix)


def openai_models_sort(models: Sequence[T]) -> List[T]:
    return sorted(models, key=functools.cmp_to_key(_openai_models_compare))


def normalize_models_list(dialect: Dialect, wire: Any) -> List[ModelDescription]:
    """Normalizes a ``/v1/models`` response for every dialect except Azure."""
    if dialect == Dialect.TOGETHERAI:
        # bare list, no 'data' wrapper
        return togetherai_models_to_descriptions(wire)

    response = validate_wire(WireModelsResponse, wire, f"{dialect.value} models")
    models, _ = dedupe_models_by_id(response.data or [], f"{dialect.value} models")
    # case-insensitive, ties broken by the exact id
    models = sorted(models, key=lambda m: (m.id.casefold(), m.id))

    if dialect == Dialect.LMSTUDIO:
        return [lmstudio_model_to_description(model.id) for model in models]

    if dialect == Dialect.LOCALAI:
        return [localai_model_to_description(model.id) for model in models]

    if dialect == Dialect.MISTRAL:
        return mistral_models_sort([mistral_model_to_description(model) for model in models])

    if dialect == Dialect.OOBABOOGA:
        descriptions = [oobabooga_model_to_description(model.id, model.created) for model in models]
        return [description for description in descriptions if not description.hidden]

    if dialect == Dialect.OPENAI:
        chat_models = [model for model in models if "gpt" in model.id and "-instruct" not in model.id]
        return [
            openai_model_to_description(model.id, model.created)
            for model in openai_models_sort(chat_models)
        ]

    if dialect == Dialect.OPENROUTER:
        # entries carry more than the common shape, validate them one by one from the extras
        return [
            openrouter_model_to_description(model.model_dump())
            for model in sorted(models, key=openrouter_model_family_sort_key)
        ]

    raise ConfigurationError(f"Models listing is not supported for dialect: {dialect.value}")
