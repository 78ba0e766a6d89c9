"""Sequence adapter turning a streamed HTTP body into stream items.

Pipeline per network delivery::

    bytes -> LineFramer -> classify_line -> decode_fragment -> StreamItem

``StreamDecoder`` is the runtime-independent core; ``ChatStream`` drives it
from a synchronous ``httpx.Response`` and ``AsyncChatStream`` from an async
one. Both expose the same lifecycle::

    IDLE -> ACTIVE -> TERMINATED   (sentinel, end of body, or close)
                   -> ERRORED      (transport failure mid-stream)

Failure modes:
- Malformed line: reported as an error on the item for that delivery;
  subsequent deliveries are still processed.
- Transport failure while reading: one final item carrying a
  ``TransportError``; no further items.
- Terminal states emit nothing further; the response is closed exactly once.
- Abandoned stream: dropping the last reference releases the connection,
  whether or not iteration had started.
"""
from __future__ import annotations

import asyncio
import logging
import time
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    AsyncGenerator,
    AsyncIterator,
    Awaitable,
    Callable,
    Generator,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
)

import httpx

from ...dto.chat_stream import StreamFragment
from ..errors import ApiError, ErrorCode, TransportError, classify_exception
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from .fragment_decoder import decode_lines
from .line_framer import LineFramer
from .stream_summary import StreamSummary, accumulate_fragments
from .streaming_metrics import StreamMetrics


class StreamState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    TERMINATED = "terminated"
    ERRORED = "errored"


@dataclass(frozen=True)
class StreamItem:
    """Outcome of one network delivery.

    Carries the fragments decoded from the delivery's lines and the errors
    raised by the lines that failed. At least one of the two is non-empty.
    """

    fragments: Tuple[StreamFragment, ...] = field(default_factory=tuple)
    errors: Tuple[ApiError, ...] = field(default_factory=tuple)

    def is_error(self) -> bool:
        return bool(self.errors)

    @property
    def error(self) -> Optional[ApiError]:
        """First error of the delivery, if any."""
        return self.errors[0] if self.errors else None

    def unwrap(self) -> List[StreamFragment]:
        """Return the fragments, raising the first error when there is one."""
        if self.errors:
            raise self.errors[0]
        return list(self.fragments)


class StreamDecoder:
    """Incremental decoder: feed deliveries, receive items.

    Holds the line framer state and the termination flag. No I/O.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self._framer = LineFramer(strict=strict)
        self.terminated = False

    def feed(self, chunk: bytes) -> Optional[StreamItem]:
        """Decode one delivery; ``None`` when it produced neither fragments nor errors."""
        if self.terminated:
            return None
        try:
            lines = self._framer.feed(chunk)
        except ApiError as e:
            return StreamItem(errors=(e,))
        return self._to_item(lines)

    def finish(self) -> Optional[StreamItem]:
        """Decode whatever the framer still holds once the body has ended."""
        if self.terminated:
            return None
        try:
            lines = self._framer.flush()
        except ApiError as e:
            return StreamItem(errors=(e,))
        return self._to_item(lines)

    def _to_item(self, lines: List[str]) -> Optional[StreamItem]:
        batch = decode_lines(lines)
        if batch.terminated:
            self.terminated = True
            self._framer.reset()
        if not batch.fragments and not batch.errors:
            return None
        return StreamItem(fragments=tuple(batch.fragments), errors=tuple(batch.errors))


def transport_error_from(exc: Exception) -> TransportError:
    """Wrap an httpx failure observed while reading a body."""
    return TransportError(
        code=classify_exception(exc),
        message=str(exc) or type(exc).__name__,
        raw=exc,
    )


class _StreamCore:
    """Decoder, lifecycle state and metrics of one stream.

    Shared by a stream object and its item generator. The core never refers
    back to the stream, so dropping an abandoned stream frees the generator
    right away and its finalizer can release the connection.
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        strict: bool = True,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.response = response
        self.decoder = StreamDecoder(strict=strict)
        self.state = StreamState.IDLE
        self.ctx = ctx or LogContext(operation="chat_stream")
        self.logger = logger or get_logger("streaming")
        self.metrics = StreamMetrics()
        self.finalized = False
        self._t0: Optional[float] = None
        self._error: Optional[TransportError] = None

    @property
    def terminated(self) -> bool:
        return self.decoder.terminated

    def start(self) -> None:
        self.state = StreamState.ACTIVE
        self._t0 = time.perf_counter()
        log_event(self.logger, "stream.start", self.ctx, level=logging.DEBUG)

    def delivered(self, chunk: bytes) -> Optional[StreamItem]:
        self.metrics.deliveries += 1
        return self._record(self.decoder.feed(chunk))

    def ended(self) -> Optional[StreamItem]:
        return self._record(self.decoder.finish())

    def failed(self, exc: Exception) -> StreamItem:
        self.state = StreamState.ERRORED
        err = transport_error_from(exc)
        log_event(
            self.logger,
            "stream.transport_error",
            self.ctx,
            level=logging.WARNING,
            code=err.code.value,
            error=err.message,
        )
        self._error = err
        item = StreamItem(errors=(err,))
        self._record(item)
        return item

    def _record(self, item: Optional[StreamItem]) -> Optional[StreamItem]:
        if self.decoder.terminated and self.state is StreamState.ACTIVE:
            self.state = StreamState.TERMINATED
        if item is None:
            return None
        if item.fragments:
            if self.metrics.emitted == 0 and self._t0 is not None:
                self.metrics.time_to_first_fragment_ms = (time.perf_counter() - self._t0) * 1000.0
            self.metrics.emitted += len(item.fragments)
            for fragment in item.fragments:
                if fragment.usage is not None:
                    self.metrics.usage = fragment.usage
        for err in item.errors:
            self.metrics.errors += 1
            if err.code is ErrorCode.DECODE:
                log_event(
                    self.logger,
                    "stream.decode_error",
                    self.ctx,
                    level=logging.WARNING,
                    code=err.code.value,
                    error=err.message,
                )
        return item

    def mark_closed(self) -> bool:
        """Move to a terminal state; return ``False`` when already finalized."""
        if self.finalized:
            return False
        self.finalized = True
        if self.state in (StreamState.IDLE, StreamState.ACTIVE):
            self.state = StreamState.TERMINATED
        if self._t0 is not None:
            self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        normalized_log_event(
            self.logger,
            "stream.finalize",
            self.ctx,
            phase="finalize",
            emitted=self.metrics.emitted > 0,
            tokens=self.metrics.tokens(),
            error_code=self._error.code.value if self._error is not None else None,
            state=self.state.value,
            deliveries=self.metrics.deliveries,
            emitted_count=self.metrics.emitted,
            errors=self.metrics.errors,
            time_to_first_fragment_ms=self.metrics.time_to_first_fragment_ms,
            total_duration_ms=self.metrics.total_duration_ms,
        )
        return True


class _SyncStreamCore(_StreamCore):
    def __init__(self, response: httpx.Response, *, on_close: Optional[Callable[[], None]] = None, **kwargs) -> None:
        super().__init__(response, **kwargs)
        self.on_close = on_close

    def release(self) -> None:
        """Close the response, then run ``on_close``. Only the first call acts."""
        if not self.mark_closed():
            return
        try:
            self.response.close()
        finally:
            if self.on_close is not None:
                self.on_close()


class _AsyncStreamCore(_StreamCore):
    def __init__(
        self,
        response: httpx.Response,
        *,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
        **kwargs,
    ) -> None:
        super().__init__(response, **kwargs)
        self.on_close = on_close

    async def release(self) -> None:
        if not self.mark_closed():
            return
        try:
            await self.response.aclose()
        finally:
            if self.on_close is not None:
                await self.on_close()


def _iter_items(core: _SyncStreamCore) -> Generator[StreamItem, None, None]:
    core.start()
    try:
        try:
            for chunk in core.response.iter_bytes():
                item = core.delivered(chunk)
                if item is not None:
                    yield item
                if core.terminated:
                    return
            item = core.ended()
            if item is not None:
                yield item
        except httpx.TransportError as exc:
            yield core.failed(exc)
    finally:
        core.release()


async def _aiter_items(core: _AsyncStreamCore) -> AsyncGenerator[StreamItem, None]:
    core.start()
    try:
        try:
            async for chunk in core.response.aiter_bytes():
                item = core.delivered(chunk)
                if item is not None:
                    yield item
                if core.terminated:
                    return
            item = core.ended()
            if item is not None:
                yield item
        except httpx.TransportError as exc:
            yield core.failed(exc)
    finally:
        await core.release()


# Strong references to release tasks scheduled for dropped async streams.
_PENDING_RELEASES: Set["asyncio.Task[None]"] = set()


def _release_dropped_async(core: _AsyncStreamCore) -> None:
    """Finalizer of an ``AsyncChatStream`` dropped without ``aclose``."""
    if core.finalized:
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        log_event(core.logger, "stream.release_skipped", core.ctx, level=logging.WARNING, reason="no running loop")
        return
    task = loop.create_task(core.release())
    _PENDING_RELEASES.add(task)
    task.add_done_callback(_PENDING_RELEASES.discard)


class _StreamView:
    """Read-only accessors shared by the sync and async streams."""

    _core: _StreamCore

    @property
    def state(self) -> StreamState:
        return self._core.state

    @property
    def response(self) -> httpx.Response:
        return self._core.response

    @property
    def metrics(self) -> StreamMetrics:
        return self._core.metrics


class ChatStream(_StreamView):
    """Synchronous iterator of :class:`StreamItem` over a streamed response.

    Usable as a context manager. Leaving the block, exhausting the stream or
    dropping the last reference to it closes the response.
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        strict: bool = True,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._core = _SyncStreamCore(response, strict=strict, ctx=ctx, logger=logger, on_close=on_close)
        self._iterator: Optional[Generator[StreamItem, None, None]] = None
        self._finalizer = weakref.finalize(self, self._core.release)

    def __iter__(self) -> "ChatStream":
        return self

    def __next__(self) -> StreamItem:
        if self._iterator is None:
            if self._core.finalized:
                raise StopIteration
            self._iterator = _iter_items(self._core)
        return next(self._iterator)

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Stop the stream and release the connection. Idempotent."""
        if self._iterator is not None:
            self._iterator.close()
        self._finalizer()

    def iter_fragments(self, *, raise_on_error: bool = False) -> Iterator[StreamFragment]:
        """Flatten items into fragments.

        Errored lines are skipped (they are logged and counted) unless
        ``raise_on_error`` is set, in which case the delivery's fragments are
        yielded and then its first error is raised.
        """
        for item in self:
            yield from item.fragments
            if raise_on_error and item.errors:
                self.close()
                raise item.errors[0]

    def collect(self, *, raise_on_error: bool = False) -> StreamSummary:
        """Consume the whole stream into a :class:`StreamSummary`."""
        with self:
            return accumulate_fragments(self.iter_fragments(raise_on_error=raise_on_error))


class AsyncChatStream(_StreamView):
    """Asynchronous iterator of :class:`StreamItem` over a streamed response.

    ``on_close`` is awaited after the response is closed; the client uses it
    to dispose of an ``httpx.AsyncClient`` created for this stream alone.
    A stream dropped without ``aclose`` is released by a task on the running
    event loop.
    """

    def __init__(
        self,
        response: httpx.Response,
        *,
        strict: bool = True,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
        on_close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._core = _AsyncStreamCore(response, strict=strict, ctx=ctx, logger=logger, on_close=on_close)
        self._iterator: Optional[AsyncGenerator[StreamItem, None]] = None
        self._finalizer = weakref.finalize(self, _release_dropped_async, self._core)
        self._finalizer.atexit = False

    def __aiter__(self) -> "AsyncChatStream":
        return self

    async def __anext__(self) -> StreamItem:
        if self._iterator is None:
            if self._core.finalized:
                raise StopAsyncIteration
            self._iterator = _aiter_items(self._core)
        return await self._iterator.__anext__()

    async def __aenter__(self) -> "AsyncChatStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Stop the stream and release the connection. Idempotent."""
        self._finalizer.detach()
        if self._iterator is not None:
            await self._iterator.aclose()
        await self._core.release()

    async def iter_fragments(self, *, raise_on_error: bool = False) -> AsyncIterator[StreamFragment]:
        """Async counterpart of :meth:`ChatStream.iter_fragments`."""
        async for item in self:
            for fragment in item.fragments:
                yield fragment
            if raise_on_error and item.errors:
                await self.aclose()
                raise item.errors[0]

    async def collect(self, *, raise_on_error: bool = False) -> StreamSummary:
        """Consume the whole stream into a :class:`StreamSummary`."""
        async with self:
            fragments = [f async for f in self.iter_fragments(raise_on_error=raise_on_error)]
        return accumulate_fragments(fragments)


__all__ = [
    "StreamState",
    "StreamItem",
    "StreamDecoder",
    "ChatStream",
    "AsyncChatStream",
    "transport_error_from",
]
