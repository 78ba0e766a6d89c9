"""Request/response helpers shared by the sync, async and streaming calls.

Purpose:
    Keep ``client.py`` focused on the public call surface. These helpers build
    URLs and headers, translate httpx failures and non-success statuses into
    :class:`TransportError`, and validate bodies into DTOs (raising
    :class:`DecodeError` on mismatch).

Notes:
    Consumers must define ``api_key``, ``endpoint`` and ``_logger``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .base.constants import (
    CLIENT_VERSION,
    EVENT_STREAM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    USER_AGENT_PREFIX,
)
from .base.errors import DecodeError, TransportError, code_for_status
from .base.logging import LogContext, log_event, normalized_log_event
from .base.streaming import transport_error_from
from .base.utils import debug_pretty_json_from_string, debug_pretty_json_from_struct

M = TypeVar("M", bound=BaseModel)


def status_error(status: int, body: str) -> TransportError:
    """Build the error raised for a non-success HTTP status."""
    return TransportError(
        code=code_for_status(status),
        message=f"{status}: {body}",
        status_code=status,
    )


class ClientRequestMixin:
    """Mixin offering shared request builders and response checks."""

    api_key: str
    endpoint: str
    _logger: logging.Logger

    def _url(self, path: str) -> str:
        return f"{self.endpoint}{path}"

    def _build_headers(self, *, stream: bool = False) -> Dict[str, str]:
        """Headers sent with every call; ``stream`` switches ``Accept`` to the event stream."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": EVENT_STREAM_CONTENT_TYPE if stream else JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
            "User-Agent": f"{USER_AGENT_PREFIX}/{CLIENT_VERSION}",
        }

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        *,
        stream: bool = False,
    ) -> httpx.Request:
        if payload is not None:
            debug_pretty_json_from_struct("request body", payload, self._logger)
        return client.build_request(
            method,
            self._url(path),
            headers=self._build_headers(stream=stream),
            json=payload,
        )

    def _log_call_start(self, ctx: LogContext) -> float:
        normalized_log_event(self._logger, "client.call.start", ctx, phase="start", level=logging.DEBUG)
        return time.perf_counter()

    def _log_call_end(self, ctx: LogContext, t0: float, *, status: int, tokens: Any = None) -> None:
        normalized_log_event(
            self._logger,
            "client.call.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=tokens,
            level=logging.DEBUG,
            status=status,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )

    def _transport_failure(self, exc: Exception, ctx: LogContext) -> TransportError:
        err = transport_error_from(exc)
        self._log_failure(err, ctx)
        return err

    def _status_failure(self, response: httpx.Response, ctx: LogContext) -> TransportError:
        """Error for a non-success response whose body has already been read."""
        err = status_error(response.status_code, response.text)
        self._log_failure(err, ctx)
        return err

    def _log_failure(self, err: TransportError | DecodeError, ctx: LogContext) -> None:
        normalized_log_event(
            self._logger,
            "client.call.error",
            ctx,
            phase="finalize",
            error_code=err.code.value,
            emitted=False,
            level=logging.WARNING,
            status=err.status_code,
            error=err.message,
        )

    def _parse(self, response: httpx.Response, model: Type[M], ctx: LogContext) -> M:
        """Validate a successful response body into ``model``.

        Raises:
            DecodeError: the body is not JSON or does not match ``model``.
        """
        debug_pretty_json_from_string("response body", response.text, self._logger)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            err = DecodeError(message=str(e), line=response.text, status_code=response.status_code, raw=e)
            self._log_failure(err, ctx)
            raise err from e

    def _log_tool_dispatch(self, ctx: LogContext, count: int) -> None:
        if count:
            log_event(self._logger, "client.tool_calls.dispatched", ctx, level=logging.DEBUG, count=count)


__all__ = ["ClientRequestMixin", "status_error"]
