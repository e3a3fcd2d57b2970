"""
Chat completion normalization.

Turns a single-choice ``/v1/chat/completions`` response into either a
function call or a plain assistant message, rejecting anything in between.
"""
import logging
from typing import Any

import orjson

from ...core.exceptions import UpstreamProtocolError
from ...models.api_models import (
    ChatGenerateFunctionCallOutput,
    ChatGenerateMessageOutput,
    ChatGenerateOutput,
    Dialect,
)
from ...models.wire_models import WireChatChoice, WireChatCompletionResponse
from ...utils.validation import validate_wire

logger = logging.getLogger("DialectProxy.Services.Normalizers.Chat")

_MESSAGE_FINISH_REASONS = ("stop", "length", None)
_MESSAGE_ROLES = ("assistant", "system", "user")


def apply_localai_finish_reason_shim(dialect: Dialect, choice: WireChatChoice) -> WireChatChoice:
    """LocalAI omits 'finish_reason' entirely; treat the missing key as a normal stop."""
    if dialect == Dialect.LOCALAI and "finish_reason" not in choice.model_fields_set:
        logger.debug("LocalAI: choice without finish_reason, defaulting to 'stop'")
        return choice.model_copy(update={"finish_reason": "stop"})
    return choice


def normalize_chat_response(
    dialect: Dialect,
    wire: Any,
    functions_requested: bool,
) -> ChatGenerateOutput:
    response = validate_wire(WireChatCompletionResponse, wire, "chat completion")

    choices = response.choices or []
    if len(choices) != 1:
        raise UpstreamProtocolError(f"[OpenAI Issue] Expected 1 completion, got {len(choices)}")

    choice = apply_localai_finish_reason_shim(dialect, choices[0])
    message = choice.message

    is_function_call = choice.finish_reason == "function_call" or "function_call" in message.model_fields_set
    if is_function_call:
        return _function_call_output(choice, functions_requested)
    return _message_output(choice)


def _function_call_output(choice: WireChatChoice, functions_requested: bool) -> ChatGenerateFunctionCallOutput:
    message = choice.message
    if not functions_requested:
        raise UpstreamProtocolError("[OpenAI Issue] Received a function call without a function call request")
    if message.content is not None:
        raise UpstreamProtocolError("[OpenAI Issue] Expected a function call, got a message with content")

    function_call = message.function_call
    if function_call is None or not function_call.name or not function_call.arguments:
        raise UpstreamProtocolError("[OpenAI Issue] Issue with the function call, missing name or arguments")

    try:
        function_arguments = orjson.loads(function_call.arguments)
    except orjson.JSONDecodeError as e:
        raise UpstreamProtocolError(
            f"[OpenAI Issue] Issue with the function call arguments of '{function_call.name}': {e}"
        ) from e
    if not isinstance(function_arguments, dict):
        raise UpstreamProtocolError(
            f"[OpenAI Issue] Function call arguments of '{function_call.name}' are not a JSON object"
        )

    return ChatGenerateFunctionCallOutput(
        function_name=function_call.name,
        function_arguments=function_arguments,
    )


def _message_output(choice: WireChatChoice) -> ChatGenerateMessageOutput:
    message = choice.message
    if message.content is None:
        raise UpstreamProtocolError("[OpenAI Issue] Expected a message, got a null content")
    if choice.finish_reason not in _MESSAGE_FINISH_REASONS:
        raise UpstreamProtocolError(f"[OpenAI Issue] Unexpected finish reason: {choice.finish_reason}")
    if message.role not in _MESSAGE_ROLES:
        raise UpstreamProtocolError(f"[OpenAI Issue] Unexpected message role: {message.role}")

    return ChatGenerateMessageOutput(
        role=message.role,
        content=message.content,
        finish_reason=choice.finish_reason,
    )
