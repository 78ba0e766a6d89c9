from __future__ import annotations

import asyncio
import types

import httpx

from mistral_client.base.errors import (
    ApiError,
    DecodeError,
    ErrorCode,
    TransportError,
    classify_exception,
    code_for_status,
)


def test_classify_api_error_passthrough():
    e = TransportError(code=ErrorCode.AUTH, message="nope", status_code=401)
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_timeouts():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101


def test_classify_httpx_network_errors():
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.CONNECTION  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("peer closed")) is ErrorCode.CONNECTION  # nosec B101


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101


def test_code_for_status():
    assert code_for_status(401) is ErrorCode.AUTH  # nosec B101
    assert code_for_status(429) is ErrorCode.RATE_LIMIT  # nosec B101
    assert code_for_status(599) is ErrorCode.SERVER_ERROR  # nosec B101
    assert code_for_status(418) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("connection reset")) is ErrorCode.CONNECTION  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_error_hierarchy_and_rendering():
    err = DecodeError(message="bad json", line="data: {")
    assert isinstance(err, ApiError)  # nosec B101
    assert err.code is ErrorCode.DECODE  # nosec B101
    assert str(err) == "DecodeError: bad json"  # nosec B101
    assert str(TransportError(code=ErrorCode.AUTH, message="401: no")) == "TransportError: 401: no"  # nosec B101
