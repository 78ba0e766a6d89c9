"""Synchronous embeddings and model listing calls."""

from __future__ import annotations

import httpx
import pytest

from mistral_client import (
    DecodeError,
    EmbeddingRequestEncodingFormat,
    EmbeddingRequestOptions,
    EmbedModel,
    TransportError,
)

from .helpers import EMBEDDING_RESPONSE, MODEL_LIST_RESPONSE, RecordingHandler, make_client


def test_embeddings():
    handler = RecordingHandler(lambda req: httpx.Response(200, json=EMBEDDING_RESPONSE))
    response = make_client(handler).embeddings(EmbedModel.MISTRAL_EMBED, ["Embed this sentence.", "As well as this one."])

    assert str(handler.last.url) == "https://api.test.local/v1/embeddings"  # nosec B101
    assert handler.last_json() == {  # nosec B101
        "model": "mistral-embed",
        "input": ["Embed this sentence.", "As well as this one."],
    }
    assert response.model == "mistral-embed"  # nosec B101
    assert [item.index for item in response.data] == [0, 1]  # nosec B101
    assert response.data[0].embedding == [0.1, -0.2, 0.3]  # nosec B101
    assert response.usage.prompt_tokens == 6  # nosec B101


def test_embeddings_with_encoding_format():
    handler = RecordingHandler(lambda req: httpx.Response(200, json=EMBEDDING_RESPONSE))
    options = EmbeddingRequestOptions(encoding_format=EmbeddingRequestEncodingFormat.FLOAT)
    make_client(handler).embeddings("mistral-embed", ["x"], options)
    assert handler.last_json()["encoding_format"] == "float"  # nosec B101


def test_list_models():
    handler = RecordingHandler(lambda req: httpx.Response(200, json=MODEL_LIST_RESPONSE))
    response = make_client(handler).list_models()

    assert handler.last.method == "GET"  # nosec B101
    assert str(handler.last.url) == "https://api.test.local/v1/models"  # nosec B101
    assert handler.last.content == b""  # nosec B101
    assert response.object == "list"  # nosec B101
    first = response.data[0]
    assert first.owned_by == "mistralai"  # nosec B101
    assert first.permission[0].allow_sampling is True  # nosec B101
    assert response.data[1].permission == []  # nosec B101


def test_list_models_error_status():
    handler = RecordingHandler(lambda req: httpx.Response(401, text="Unauthorized"))
    with pytest.raises(TransportError) as exc_info:
        make_client(handler).list_models()
    assert exc_info.value.message == "401: Unauthorized"  # nosec B101


def test_list_models_bad_shape():
    handler = RecordingHandler(lambda req: httpx.Response(200, json={"object": "list"}))
    with pytest.raises(DecodeError):
        make_client(handler).list_models()
