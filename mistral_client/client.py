"""Mistral API client.

Summary:
- Chat completion (sync, async, and streamed as an event-stream sequence)
- Embeddings and model listing (sync and async)
- Client-side tool-call dispatch to locally registered functions

Errors & Observability:
- Network failures and non-success statuses raise ``TransportError``;
  bodies that do not match the expected shape raise ``DecodeError``
- Structured start/end/error events via ``normalized_log_event``; request and
  response bodies are pretty-printed at DEBUG

Retries:
- ``max_retries`` is stored for callers that want it; no call retries.

This module orchestrates I/O only; decoding lives in ``base.streaming`` and
the DTO layer.
"""

from __future__ import annotations

import contextlib
from typing import AsyncIterator, List, Optional, Union

import httpx

from .base.constants import CHAT_COMPLETIONS_PATH, EMBEDDINGS_PATH, MODELS_PATH
from .base.errors import MissingApiKeyError
from .base.http import get_httpx_client, new_async_client
from .base.logging import LogContext, get_logger
from .base.streaming import AsyncChatStream, ChatStream
from .base.tools import FunctionHandler, FunctionRegistry
from .client_helpers import ClientRequestMixin
from .config import get_client_config
from .dto import (
    ChatMessage,
    ChatParams,
    ChatRequest,
    ChatResponse,
    EmbedModel,
    EmbeddingRequest,
    EmbeddingRequestOptions,
    EmbeddingResponse,
    Model,
    ModelListResponse,
    ToolResult,
)


class Client(ClientRequestMixin):
    """Client for the chat, embeddings and models endpoints.

    Parameters:
        api_key: Bearer token. Falls back to ``MISTRAL_API_KEY`` (environment,
            dotenv file or config file).
        endpoint: API base URL, default ``https://api.mistral.ai/v1``.
        max_retries: Stored only; default 5.
        timeout: Overall request timeout in seconds, default 120.
        http_client: Optional ``httpx.Client`` used instead of the shared pool.
        async_http_client: Optional ``httpx.AsyncClient``; when omitted each
            async call creates one and closes it afterwards. An injected
            client is never closed by this class.
        strict_framing: Reassemble event-stream lines split across network
            deliveries (default). ``False`` frames each delivery on its own.

    Raises:
        MissingApiKeyError: no API key was passed or configured.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[int] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
        strict_framing: bool = True,
    ) -> None:
        cfg = get_client_config(
            {"api_key": api_key, "endpoint": endpoint, "max_retries": max_retries, "timeout": timeout}
        )
        key = cfg.get("api_key")
        if not key:
            raise MissingApiKeyError()
        self.api_key: str = key
        self.endpoint: str = str(cfg["endpoint"]).rstrip("/")
        self.max_retries: int = cfg["max_retries"]
        self.timeout: int = cfg["timeout"]
        self.strict_framing = strict_framing
        self._http_client = http_client
        self._async_http_client = async_http_client
        self._functions = FunctionRegistry()
        self._logger = get_logger("client")

    def __repr__(self) -> str:
        return f"Client(endpoint={self.endpoint!r}, max_retries={self.max_retries}, timeout={self.timeout})"

    # ---- Chat ----
    def chat(
        self,
        model: Union[Model, str],
        messages: List[ChatMessage],
        options: Optional[ChatParams] = None,
    ) -> ChatResponse:
        """Non-streaming chat completion.

        Tool calls in the first choice are dispatched to registered functions
        and the first result is stored as the last function call result.

        Raises:
            TransportError: network failure or non-success status.
            DecodeError: the body is not a chat completion.
        """
        request = ChatRequest.new(model, messages, False, options)
        ctx = self._ctx("chat", request.model)
        response = self._send("POST", CHAT_COMPLETIONS_PATH, request.to_payload(), ctx)
        result = self._parse(response, ChatResponse, ctx)
        self._store_last_result(self.dispatch_tool_calls(result), ctx)
        return result

    async def chat_async(
        self,
        model: Union[Model, str],
        messages: List[ChatMessage],
        options: Optional[ChatParams] = None,
    ) -> ChatResponse:
        """Async counterpart of :meth:`chat`; awaitable handlers are awaited."""
        request = ChatRequest.new(model, messages, False, options)
        ctx = self._ctx("chat_async", request.model)
        response = await self._asend("POST", CHAT_COMPLETIONS_PATH, request.to_payload(), ctx)
        result = self._parse(response, ChatResponse, ctx)
        self._store_last_result(await self.dispatch_tool_calls_async(result), ctx)
        return result

    def chat_stream(
        self,
        model: Union[Model, str],
        messages: List[ChatMessage],
        options: Optional[ChatParams] = None,
    ) -> ChatStream:
        """Open a streamed chat completion.

        The connection is opened and the status checked before returning, so
        connection failures raise here rather than surfacing as items.

        Raises:
            TransportError: network failure or non-success status.
        """
        request = ChatRequest.new(model, messages, True, options)
        ctx = self._ctx("chat_stream", request.model)
        client = self._sync_client("stream")
        http_request = self._build_request(client, "POST", CHAT_COMPLETIONS_PATH, request.to_payload(), stream=True)
        self._log_call_start(ctx)
        try:
            response = client.send(http_request, stream=True)
        except httpx.HTTPError as exc:
            raise self._transport_failure(exc, ctx) from exc
        if not response.is_success:
            try:
                response.read()
            except httpx.HTTPError as exc:
                raise self._transport_failure(exc, ctx) from exc
            finally:
                response.close()
            raise self._status_failure(response, ctx)
        return ChatStream(response, strict=self.strict_framing, ctx=ctx, logger=self._logger)

    async def chat_stream_async(
        self,
        model: Union[Model, str],
        messages: List[ChatMessage],
        options: Optional[ChatParams] = None,
    ) -> AsyncChatStream:
        """Async counterpart of :meth:`chat_stream`.

        An ``httpx.AsyncClient`` created for the call is closed together with
        the returned stream.
        """
        request = ChatRequest.new(model, messages, True, options)
        ctx = self._ctx("chat_stream_async", request.model)
        owned = self._async_http_client is None
        client = self._async_http_client or new_async_client(timeout=self.timeout)
        http_request = self._build_request(client, "POST", CHAT_COMPLETIONS_PATH, request.to_payload(), stream=True)
        self._log_call_start(ctx)
        try:
            try:
                response = await client.send(http_request, stream=True)
            except httpx.HTTPError as exc:
                raise self._transport_failure(exc, ctx) from exc
            if not response.is_success:
                try:
                    await response.aread()
                except httpx.HTTPError as exc:
                    raise self._transport_failure(exc, ctx) from exc
                finally:
                    await response.aclose()
                raise self._status_failure(response, ctx)
        except BaseException:
            if owned:
                await client.aclose()
            raise
        return AsyncChatStream(
            response,
            strict=self.strict_framing,
            ctx=ctx,
            logger=self._logger,
            on_close=client.aclose if owned else None,
        )

    # ---- Embeddings ----
    def embeddings(
        self,
        model: Union[EmbedModel, str],
        input: List[str],
        options: Optional[EmbeddingRequestOptions] = None,
    ) -> EmbeddingResponse:
        request = EmbeddingRequest.new(model, input, options)
        ctx = self._ctx("embeddings", request.model)
        response = self._send("POST", EMBEDDINGS_PATH, request.to_payload(), ctx)
        return self._parse(response, EmbeddingResponse, ctx)

    async def embeddings_async(
        self,
        model: Union[EmbedModel, str],
        input: List[str],
        options: Optional[EmbeddingRequestOptions] = None,
    ) -> EmbeddingResponse:
        request = EmbeddingRequest.new(model, input, options)
        ctx = self._ctx("embeddings_async", request.model)
        response = await self._asend("POST", EMBEDDINGS_PATH, request.to_payload(), ctx)
        return self._parse(response, EmbeddingResponse, ctx)

    # ---- Models ----
    def list_models(self) -> ModelListResponse:
        ctx = self._ctx("list_models")
        response = self._send("GET", MODELS_PATH, None, ctx)
        return self._parse(response, ModelListResponse, ctx)

    async def list_models_async(self) -> ModelListResponse:
        ctx = self._ctx("list_models_async")
        response = await self._asend("GET", MODELS_PATH, None, ctx)
        return self._parse(response, ModelListResponse, ctx)

    # ---- Tool dispatch ----
    def register_function(self, name: str, function: FunctionHandler) -> None:
        """Register a handler for tool calls naming ``name``.

        ``function`` is either an object with ``execute(arguments: str)`` or a
        callable taking the raw JSON arguments string.
        """
        self._functions.register(name, function)

    def dispatch_tool_calls(self, response: ChatResponse) -> List[ToolResult]:
        """Run the first choice's tool calls against the registered functions."""
        return [
            self._functions.invoke(call.function.name, call.function.arguments)
            for call in self._first_choice_tool_calls(response)
        ]

    async def dispatch_tool_calls_async(self, response: ChatResponse) -> List[ToolResult]:
        return [
            await self._functions.ainvoke(call.function.name, call.function.arguments)
            for call in self._first_choice_tool_calls(response)
        ]

    def get_last_function_call_result(self) -> Optional[ToolResult]:
        """Result stored by the most recent ``chat``/``chat_async`` call."""
        return self._functions.last_result()

    # ---- Internal helpers ----
    def _ctx(self, operation: str, model: Optional[str] = None) -> LogContext:
        return LogContext(operation=operation, model=model, endpoint=self.endpoint)

    def _sync_client(self, purpose: str) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(None, purpose, self.timeout)

    @contextlib.asynccontextmanager
    async def _async_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._async_http_client is not None:
            yield self._async_http_client
            return
        client = new_async_client(timeout=self.timeout)
        try:
            yield client
        finally:
            await client.aclose()

    def _send(self, method: str, path: str, payload, ctx: LogContext) -> httpx.Response:
        client = self._sync_client("default")
        request = self._build_request(client, method, path, payload)
        t0 = self._log_call_start(ctx)
        try:
            response = client.send(request)
        except httpx.HTTPError as exc:
            raise self._transport_failure(exc, ctx) from exc
        if not response.is_success:
            raise self._status_failure(response, ctx)
        self._log_call_end(ctx, t0, status=response.status_code)
        return response

    async def _asend(self, method: str, path: str, payload, ctx: LogContext) -> httpx.Response:
        async with self._async_client() as client:
            request = self._build_request(client, method, path, payload)
            t0 = self._log_call_start(ctx)
            try:
                response = await client.send(request)
            except httpx.HTTPError as exc:
                raise self._transport_failure(exc, ctx) from exc
        if not response.is_success:
            raise self._status_failure(response, ctx)
        self._log_call_end(ctx, t0, status=response.status_code)
        return response

    @staticmethod
    def _first_choice_tool_calls(response: ChatResponse):
        if not response.choices:
            return []
        return response.choices[0].message.tool_calls or []

    def _store_last_result(self, results: List[ToolResult], ctx: LogContext) -> None:
        self._log_tool_dispatch(ctx, len(results))
        self._functions.set_last_result(results[0] if results else None)


__all__ = ["Client"]
