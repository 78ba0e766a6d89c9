"""
Pydantic DTOs for the chat completion endpoint.

Purpose
-------
Typed request/response structures for ``POST /chat/completions``.
``ChatParams`` carries the optional generation parameters with the API's
documented defaults; ``ChatRequest.new`` merges them with the model, the
messages and the ``stream`` flag into the request body.

Serialization
-------------
Request bodies are produced with ``model_dump(mode="json", exclude_none=True)``
so unset optional parameters are omitted from the wire payload.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..config.defaults import DEFAULT_SAFE_PROMPT, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
from .common import Model, ResponseUsage, enum_value
from .tool import Tool, ToolCall, ToolChoice


class ChatMessageRole(str, Enum):
    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"
    TOOL = "tool"


class ChatMessage(BaseModel):
    """A single chat message.

    ``content`` is normalized to ``""`` when the API sends ``null`` (assistant
    messages that only carry tool calls).
    """

    role: ChatMessageRole
    content: str = ""
    tool_calls: Optional[List[ToolCall]] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=ChatMessageRole.USER, content=content)

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=ChatMessageRole.SYSTEM, content=content)

    @classmethod
    def assistant(cls, content: str, tool_calls: Optional[List[ToolCall]] = None) -> "ChatMessage":
        return cls(role=ChatMessageRole.ASSISTANT, content=content, tool_calls=tool_calls)

    @classmethod
    def tool(cls, content: str, name: Optional[str] = None, tool_call_id: Optional[str] = None) -> "ChatMessage":
        return cls(role=ChatMessageRole.TOOL, content=content, name=name, tool_call_id=tool_call_id)


class ResponseFormat(BaseModel):
    """The format the model must output."""

    type: str

    @classmethod
    def json_object(cls) -> "ResponseFormat":
        return cls(type="json_object")


class ChatParams(BaseModel):
    """Optional chat generation parameters.

    Attributes:
        max_tokens: Maximum number of tokens to generate. Defaults to ``None``.
        random_seed: Seed for deterministic sampling. Defaults to ``None``.
        response_format: Output format constraint. Defaults to ``None``.
        safe_prompt: Inject the safety prompt. Defaults to ``False``.
        temperature: Sampling temperature in ``[0.0, 1.0]``. Defaults to ``0.7``.
        tool_choice: Whether/how functions may be called. Defaults to ``None``.
        tools: Functions offered to the model. Defaults to ``None``.
        top_p: Nucleus sampling mass. Defaults to ``1.0``.
    """

    max_tokens: Optional[int] = Field(default=None, gt=0)
    random_seed: Optional[int] = Field(default=None, ge=0)
    response_format: Optional[ResponseFormat] = None
    safe_prompt: bool = DEFAULT_SAFE_PROMPT
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    tool_choice: Optional[ToolChoice] = None
    tools: Optional[List[Tool]] = None
    top_p: float = Field(default=DEFAULT_TOP_P, ge=0.0, le=1.0)

    @classmethod
    def json_default(cls) -> "ChatParams":
        """Defaults with ``response_format`` set to ``json_object``."""
        return cls(response_format=ResponseFormat.json_object())


class ChatRequest(BaseModel):
    """Wire body for ``POST /chat/completions``."""

    messages: List[ChatMessage]
    model: str

    max_tokens: Optional[int] = None
    random_seed: Optional[int] = None
    response_format: Optional[ResponseFormat] = None
    safe_prompt: bool = DEFAULT_SAFE_PROMPT
    stream: bool = False
    temperature: float = DEFAULT_TEMPERATURE
    tool_choice: Optional[ToolChoice] = None
    tools: Optional[List[Tool]] = None
    top_p: float = DEFAULT_TOP_P

    @field_validator("model", mode="before")
    @classmethod
    def _model_id(cls, value: Any) -> Any:
        return enum_value(value)

    @classmethod
    def new(
        cls,
        model: Union[Model, str],
        messages: List[ChatMessage],
        stream: bool,
        options: Optional[ChatParams] = None,
    ) -> "ChatRequest":
        """Merge ``options`` (or the defaults) into a request body."""
        params = options or ChatParams()
        return cls(messages=messages, model=model, stream=stream, **params.model_dump())

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class ChatResponseChoiceFinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    MODEL_LENGTH = "model_length"
    ERROR = "error"
    TOOL_CALLS = "tool_calls"


class ChatResponseChoice(BaseModel):
    index: int
    message: ChatMessage
    finish_reason: Optional[ChatResponseChoiceFinishReason] = None


class ChatResponse(BaseModel):
    """Non-streaming chat completion response."""

    id: str
    object: str
    created: int
    model: str
    choices: List[ChatResponseChoice]
    usage: ResponseUsage


__all__ = [
    "ChatMessageRole",
    "ChatMessage",
    "ResponseFormat",
    "ChatParams",
    "ChatRequest",
    "ChatResponseChoiceFinishReason",
    "ChatResponseChoice",
    "ChatResponse",
]
