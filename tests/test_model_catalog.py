import functools

import pytest

from dialect_proxy.core.exceptions import UpstreamProtocolError
from dialect_proxy.models.wire_models import WireModelDescription
from dialect_proxy.services.model_catalog import (
    KnownModel,
    from_manual_mapping,
    mistral_model_to_description,
    openai_model_to_description,
    openrouter_model_family_sort,
    openrouter_model_to_description,
    togetherai_models_to_descriptions,
)

MAPPINGS = [
    KnownModel("alpha-2", "Alpha 2", "second", 2000),
    KnownModel("alpha", "Alpha", "first", 1000),
]


def test_manual_mapping_prefers_exact_match():
    description = from_manual_mapping(MAPPINGS, "alpha", 10, None)
    assert description.label == "Alpha"
    assert description.context_window == 1000
    assert description.created == 10
    assert description.updated == 10


def test_manual_mapping_prefix_match_appends_suffix():
    description = from_manual_mapping(MAPPINGS, "alpha-2-0613", None, None)
    assert description.label == "Alpha 2 [0613]"
    assert description.context_window == 2000


def test_manual_mapping_uses_fallback_then_last_entry():
    fallback = KnownModel("omega", "Omega", "fallback", None)
    assert from_manual_mapping(MAPPINGS, "omega", None, None, fallback).label == "Omega"
    unmatched = from_manual_mapping(MAPPINGS, "beta", None, None)
    assert unmatched.description == "first"
    assert unmatched.label == "Alpha [beta]"


def test_openai_snapshot_gets_family_description():
    description = openai_model_to_description("gpt-4-1106-preview")
    assert description.context_window == 128000
    assert description.max_completion_tokens == 4096
    assert "oai-chat-fn" in description.interfaces


def test_mistral_unknown_model_falls_back():
    description = mistral_model_to_description(WireModelDescription(id="open-mixtral-8x7b", created=5))
    assert description.label == "open-mixtral-8x7b"
    assert description.context_window == 32768
    assert description.created == 5


def test_openrouter_family_sort():
    class Entry:
        def __init__(self, id):
            self.id = id

    entries = [Entry(i) for i in ["zz/b", "anthropic/claude-2", "openai/gpt-3.5-turbo", "aa/a", "openai/gpt-4"]]
    ordered = sorted(entries, key=functools.cmp_to_key(openrouter_model_family_sort))
    assert [e.id for e in ordered] == [
        "openai/gpt-4", "openai/gpt-3.5-turbo", "anthropic/claude-2", "aa/a", "zz/b",
    ]


def test_openrouter_model_requires_name():
    with pytest.raises(UpstreamProtocolError, match="name"):
        openrouter_model_to_description({"id": "openai/gpt-4"})


def test_openrouter_paid_model_is_not_labelled_free():
    description = openrouter_model_to_description({
        "id": "openai/gpt-4", "name": "OpenAI: GPT-4",
        "pricing": {"prompt": "0.03", "completion": "0.06"}, "context_length": 8191,
    })
    assert description.label == "OpenAI: GPT-4"
    assert description.context_window == 8191


def test_togetherai_requires_a_list():
    with pytest.raises(UpstreamProtocolError):
        togetherai_models_to_descriptions({"data": []})


def test_unmatched_openai_id_keeps_its_id_in_the_label():
    description = openai_model_to_description("ft:gpt-3.5-turbo:org:x")
    assert description.label == "3.5-Turbo [ft:gpt-3.5-turbo:org:x]"
    assert description.context_window == 4097
