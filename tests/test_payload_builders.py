from dialect_proxy.models.api_models import FunctionSpec, HistoryMessage, ModelConfig
from dialect_proxy.services.requests import (
    build_azure_headers,
    build_openai_headers,
    openai_chat_completion_payload,
    openai_moderation_payload,
)

HISTORY = [HistoryMessage(role="user", content="hi")]


def test_chat_payload_minimal():
    payload = openai_chat_completion_payload(ModelConfig(id="gpt-4"), HISTORY, None, None)
    assert payload == {
        "model": "gpt-4",
        "messages": [{"role": "user", "content": "hi"}],
        "stream": False,
    }


def test_chat_payload_n_only_above_one():
    assert "n" not in openai_chat_completion_payload(ModelConfig(id="m"), HISTORY, None, None, n=1)
    assert openai_chat_completion_payload(ModelConfig(id="m"), HISTORY, None, None, n=3)["n"] == 3


def test_chat_payload_functions_drop_unset_fields():
    function = FunctionSpec(name="ping")
    payload = openai_chat_completion_payload(ModelConfig(id="m"), HISTORY, [function], None)
    assert payload["functions"] == [{"name": "ping"}]
    assert payload["function_call"] == "auto"


def test_empty_function_list_sends_no_functions():
    payload = openai_chat_completion_payload(ModelConfig(id="m"), HISTORY, [], "ping")
    assert "functions" not in payload
    assert "function_call" not in payload


def test_model_config_accepts_camel_case():
    model = ModelConfig.model_validate({"id": "m", "maxTokens": 100})
    assert openai_chat_completion_payload(model, HISTORY, None, None)["max_tokens"] == 100


def test_moderation_payload():
    assert openai_moderation_payload("text") == {"input": "text", "model": "text-moderation-latest"}


def test_openai_headers_skip_empty_values():
    assert build_openai_headers("") == {"Content-Type": "application/json"}
    headers = build_openai_headers("sk", "org", "heli")
    assert headers["OpenAI-Organization"] == "org"
    assert headers["Helicone-Auth"] == "Bearer heli"


def test_azure_headers_use_api_key_header():
    assert build_azure_headers("k") == {"Content-Type": "application/json", "api-key": "k"}
