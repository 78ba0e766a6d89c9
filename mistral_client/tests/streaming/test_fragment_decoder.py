"""Unit tests for fragment decoding of single lines and whole deliveries."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from mistral_client.base.errors import DecodeError, ErrorCode
from mistral_client.base.streaming import decode_fragment, decode_line, decode_lines
from mistral_client.dto import ChatMessageRole, StreamFragment

from ..helpers import data_line, fragment_payload


def test_decode_fragment_reads_all_fields():
    payload = fragment_payload(
        "Hello",
        role="assistant",
        finish_reason="stop",
        usage={"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    )
    fragment = decode_fragment(json.dumps(payload))
    assert fragment.id == "cmpl-1"  # nosec B101
    assert fragment.created == 1702256327  # nosec B101
    assert fragment.model == "open-mistral-7b"  # nosec B101
    choice = fragment.choices[0]
    assert choice.index == 0  # nosec B101
    assert choice.delta.role is ChatMessageRole.ASSISTANT  # nosec B101
    assert choice.delta.content == "Hello"  # nosec B101
    assert choice.finish_reason == "stop"  # nosec B101
    assert fragment.usage is not None and fragment.usage.total_tokens == 4  # nosec B101


def test_decoded_fragment_reserializes_to_equivalent_json():
    payload = fragment_payload("Hi", role="assistant")
    fragment = decode_fragment(json.dumps(payload))
    again = StreamFragment.model_validate_json(fragment.model_dump_json())
    assert again == fragment  # nosec B101


def test_missing_content_and_null_content_decode_as_empty():
    payload = fragment_payload()
    del payload["choices"][0]["delta"]["content"]
    assert decode_fragment(json.dumps(payload)).content == ""  # nosec B101
    payload["choices"][0]["delta"]["content"] = None
    assert decode_fragment(json.dumps(payload)).content == ""  # nosec B101


def test_fragments_are_immutable():
    fragment = decode_fragment(json.dumps(fragment_payload("x")))
    with pytest.raises(ValidationError):
        fragment.id = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        '{"id": "x"}',
        "[1, 2]",
        '{"id": "x", "object": "chat.completion.chunk", "created": 1, "model": "m", "choices": []}',
    ],
)
def test_malformed_payload_raises_decode_error(payload):
    with pytest.raises(DecodeError) as exc_info:
        decode_fragment(payload)
    err = exc_info.value
    assert err.code is ErrorCode.DECODE  # nosec B101
    assert err.line == payload  # nosec B101
    assert err.message  # nosec B101


def test_decode_line_variants():
    assert decode_line("data: [DONE]") is None  # nosec B101
    assert decode_line("") == []  # nosec B101
    fragments = decode_line(data_line("A"))
    assert fragments is not None and [f.content for f in fragments] == ["A"]  # nosec B101


def test_decode_lines_collects_errors_and_keeps_going():
    batch = decode_lines([data_line("A"), "data: {broken", "", data_line("B")])
    assert [f.content for f in batch.fragments] == ["A", "B"]  # nosec B101
    assert len(batch.errors) == 1  # nosec B101
    assert batch.terminated is False  # nosec B101


def test_decode_lines_stops_at_sentinel_and_keeps_earlier_fragments():
    batch = decode_lines([data_line("A"), "data: [DONE]", data_line("B"), "data: {broken"])
    assert [f.content for f in batch.fragments] == ["A"]  # nosec B101
    assert batch.errors == []  # nosec B101
    assert batch.terminated is True  # nosec B101
