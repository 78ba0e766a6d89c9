"""Fake transport helpers shared by the client and streaming tests.

Everything runs over ``httpx.MockTransport``; no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from mistral_client import Client

TEST_API_KEY = "test_api_key"  # pragma: allowlist secret
TEST_ENDPOINT = "https://api.test.local/v1"


def fragment_payload(
    content: str = "",
    *,
    role: Optional[str] = None,
    finish_reason: Optional[str] = None,
    usage: Optional[Dict[str, int]] = None,
    fragment_id: str = "cmpl-1",
) -> Dict[str, Any]:
    delta: Dict[str, Any] = {"content": content}
    if role is not None:
        delta["role"] = role
    payload: Dict[str, Any] = {
        "id": fragment_id,
        "object": "chat.completion.chunk",
        "created": 1702256327,
        "model": "open-mistral-7b",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }
    if usage is not None:
        payload["usage"] = usage
    return payload


def data_line(content: str = "", **kwargs: Any) -> str:
    """One ``data: {...}`` line, newline included."""
    return f"data: {json.dumps(fragment_payload(content, **kwargs))}\n"


DONE_LINE = "data: [DONE]\n"


class ChunkedStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body delivered as the given chunks, optionally failing afterwards."""

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None) -> None:
        self._chunks = list(chunks)
        self._error = error
        self.closed = False

    def __iter__(self):
        yield from self._chunks
        if self._error is not None:
            raise self._error

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.closed = True


def stream_response(chunks: Iterable[bytes | str], error: Optional[Exception] = None, status: int = 200):
    """Build a streamed 200 response from text or byte chunks."""
    raw = [c.encode("utf-8") if isinstance(c, str) else c for c in chunks]
    return httpx.Response(
        status,
        headers={"Content-Type": "text/event-stream"},
        stream=ChunkedStream(raw, error),
    )


class RecordingHandler:
    """MockTransport handler recording requests and replaying a fixed response."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> Client:
    transport = httpx.MockTransport(handler)
    return Client(
        api_key=TEST_API_KEY,
        endpoint=TEST_ENDPOINT,
        http_client=httpx.Client(transport=transport),
        async_http_client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )


CHAT_RESPONSE: Dict[str, Any] = {
    "id": "cmpl-abc",
    "object": "chat.completion",
    "created": 1702256327,
    "model": "open-mistral-7b",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Guten Tag!"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 10, "completion_tokens": 4, "total_tokens": 14},
}


def tool_call_response(name: str, arguments: str) -> Dict[str, Any]:
    body = json.loads(json.dumps(CHAT_RESPONSE))
    body["choices"][0]["message"] = {
        "role": "assistant",
        "content": "",
        "tool_calls": [{"id": "call-1", "function": {"name": name, "arguments": arguments}}],
    }
    body["choices"][0]["finish_reason"] = "tool_calls"
    return body


EMBEDDING_RESPONSE: Dict[str, Any] = {
    "id": "embd-1",
    "object": "list",
    "model": "mistral-embed",
    "data": [
        {"index": 0, "embedding": [0.1, -0.2, 0.3], "object": "embedding"},
        {"index": 1, "embedding": [0.0, 0.5, -0.5], "object": "embedding"},
    ],
    "usage": {"prompt_tokens": 6, "completion_tokens": 0, "total_tokens": 6},
}


MODEL_LIST_RESPONSE: Dict[str, Any] = {
    "object": "list",
    "data": [
        {
            "id": "open-mistral-7b",
            "object": "model",
            "created": 1702256327,
            "owned_by": "mistralai",
            "root": None,
            "parent": None,
            "permission": [
                {
                    "id": "modelperm-1",
                    "object": "model_permission",
                    "created": 1702256327,
                    "allow_create_engine": False,
                    "allow_sampling": True,
                    "allow_logprobs": False,
                    "allow_search_indices": False,
                    "allow_view": True,
                    "allow_fine_tuning": False,
                    "organization": "*",
                    "group": None,
                    "is_blocking": False,
                }
            ],
        },
        {
            "id": "mistral-embed",
            "object": "model",
            "created": 1702256327,
            "owned_by": "mistralai",
            "permission": [],
        },
    ],
}
