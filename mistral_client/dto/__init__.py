"""Typed request/response DTOs for the API."""

from .common import EmbedModel, Model, ResponseUsage
from .tool import (
    Tool,
    ToolCall,
    ToolCallFunction,
    ToolChoice,
    ToolFunction,
    ToolFunctionParameter,
    ToolFunctionParameterProperty,
    ToolFunctionParameters,
    ToolFunctionParametersType,
    ToolFunctionParameterType,
    ToolType,
)
from .chat import (
    ChatMessage,
    ChatMessageRole,
    ChatParams,
    ChatRequest,
    ChatResponse,
    ChatResponseChoice,
    ChatResponseChoiceFinishReason,
    ResponseFormat,
)
from .chat_stream import Delta, FragmentChoice, StreamFragment
from .embedding import (
    EmbeddingRequest,
    EmbeddingRequestEncodingFormat,
    EmbeddingRequestOptions,
    EmbeddingResponse,
    EmbeddingResponseDataItem,
)
from .model_list import ModelListData, ModelListDataPermission, ModelListResponse
from .tool_result import ToolResult

__all__ = [
    "Model",
    "EmbedModel",
    "ResponseUsage",
    "Tool",
    "ToolCall",
    "ToolCallFunction",
    "ToolChoice",
    "ToolFunction",
    "ToolFunctionParameter",
    "ToolFunctionParameterProperty",
    "ToolFunctionParameters",
    "ToolFunctionParametersType",
    "ToolFunctionParameterType",
    "ToolType",
    "ChatMessage",
    "ChatMessageRole",
    "ChatParams",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseChoice",
    "ChatResponseChoiceFinishReason",
    "ResponseFormat",
    "Delta",
    "FragmentChoice",
    "StreamFragment",
    "EmbeddingRequest",
    "EmbeddingRequestEncodingFormat",
    "EmbeddingRequestOptions",
    "EmbeddingResponse",
    "EmbeddingResponseDataItem",
    "ModelListData",
    "ModelListDataPermission",
    "ModelListResponse",
    "ToolResult",
]
