"""Validation and serialization tests for the request/response DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mistral_client.dto import (
    ChatMessage,
    ChatMessageRole,
    ChatParams,
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbedModel,
    Model,
    ToolCallFunction,
)

from .helpers import CHAT_RESPONSE, tool_call_response


def test_model_enum_values():
    assert Model.OPEN_MISTRAL_7B.value == "open-mistral-7b"  # nosec B101
    assert Model.MISTRAL_LARGE_LATEST == "mistral-large-latest"  # nosec B101
    assert EmbedModel.MISTRAL_EMBED.value == "mistral-embed"  # nosec B101


def test_chat_message_constructors():
    assert ChatMessage.user("u").role is ChatMessageRole.USER  # nosec B101
    assert ChatMessage.system("s").role is ChatMessageRole.SYSTEM  # nosec B101
    assert ChatMessage.assistant("a").role is ChatMessageRole.ASSISTANT  # nosec B101
    tool_msg = ChatMessage.tool("30", name="weather", tool_call_id="call-1")
    assert tool_msg.role is ChatMessageRole.TOOL  # nosec B101
    assert tool_msg.model_dump(mode="json", exclude_none=True) == {  # nosec B101
        "role": "tool",
        "content": "30",
        "name": "weather",
        "tool_call_id": "call-1",
    }


def test_chat_params_bounds():
    with pytest.raises(ValidationError):
        ChatParams(temperature=1.5)
    with pytest.raises(ValidationError):
        ChatParams(top_p=-0.1)
    with pytest.raises(ValidationError):
        ChatParams(max_tokens=0)


def test_chat_params_json_default():
    params = ChatParams.json_default()
    assert params.response_format is not None and params.response_format.type == "json_object"  # nosec B101
    assert params.temperature == 0.7  # nosec B101


def test_chat_request_new_accepts_enum_and_string_model():
    messages = [ChatMessage.user("hi")]
    a = ChatRequest.new(Model.CODESTRAL_LATEST, messages, True)
    b = ChatRequest.new("codestral-latest", messages, True)
    assert a.model == b.model == "codestral-latest"  # nosec B101
    assert a.to_payload()["stream"] is True  # nosec B101


def test_chat_response_with_null_content_and_tool_calls():
    body = tool_call_response("f", '{"a": 1}')
    body["choices"][0]["message"]["content"] = None
    response = ChatResponse.model_validate(body)
    message = response.choices[0].message
    assert message.content == ""  # nosec B101
    assert message.tool_calls is not None and message.tool_calls[0].function.name == "f"  # nosec B101


def test_chat_response_requires_usage():
    body = dict(CHAT_RESPONSE)
    body.pop("usage")
    with pytest.raises(ValidationError):
        ChatResponse.model_validate(body)


def test_tool_call_arguments_object_is_reencoded():
    fn = ToolCallFunction.model_validate({"name": "f", "arguments": {"city": "Paris"}})
    assert fn.arguments == '{"city": "Paris"}'  # nosec B101


def test_embedding_request_payload_omits_unset_format():
    req = EmbeddingRequest.new(EmbedModel.MISTRAL_EMBED, ["x"])
    assert req.to_payload() == {"model": "mistral-embed", "input": ["x"]}  # nosec B101
