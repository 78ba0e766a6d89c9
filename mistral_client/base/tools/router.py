"""In-process function registry used for client-side tool-call dispatch.

Maps the function names a model may request to locally registered handlers
and invokes them with the raw JSON ``arguments`` string from the tool call,
returning a standard :class:`ToolResult`. The registry also owns the
"last function call result" slot that ``Client.chat`` writes after
dispatching.

Both the handler map and the result slot are guarded by locks: at most one
writer at a time, and the slot is last-write-wins.
"""

from __future__ import annotations

import inspect
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

from ...dto.tool_result import ToolResult
from ..logging import get_logger, log_event


@runtime_checkable
class Function(Protocol):
    """Executable handler. ``execute`` may return a value or an awaitable."""

    def execute(self, arguments: str) -> Any: ...


FunctionHandler = Union[Function, Callable[[str], Any]]


def _call(handler: FunctionHandler, arguments: str) -> Any:
    if isinstance(handler, Function):
        return handler.execute(arguments)
    return handler(arguments)


class FunctionRegistry:
    """Name-keyed registry of tool handlers plus the last-result slot.

    Contract:
        - Register handlers with ``register(name, handler)``; re-registering
          a name replaces the previous handler.
        - ``invoke`` runs synchronous handlers; a handler that returns an
          awaitable fails with ``code="ASYNC_HANDLER"`` there and must be run
          through ``ainvoke``.
        - Handler exceptions never propagate; they become ``ok=False`` results.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._handlers: Dict[str, FunctionHandler] = {}
        self._handlers_lock = threading.Lock()
        self._last_result: Optional[ToolResult] = None
        self._result_lock = threading.Lock()
        self._logger = logger or get_logger("tools")

    def register(self, name: str, handler: FunctionHandler) -> None:
        """Register ``handler`` under ``name``.

        Raises:
            TypeError: ``handler`` is neither callable nor has ``execute``.
        """
        if not (isinstance(handler, Function) or callable(handler)):
            raise TypeError(f"handler for '{name}' must be callable or define execute(arguments)")
        with self._handlers_lock:
            self._handlers[name] = handler

    def get(self, name: str) -> Optional[FunctionHandler]:
        with self._handlers_lock:
            return self._handlers.get(name)

    def names(self) -> List[str]:
        with self._handlers_lock:
            return sorted(self._handlers)

    def invoke(self, name: str, arguments: str = "") -> ToolResult:
        """Invoke a synchronous handler and wrap the outcome."""
        handler = self.get(name)
        if handler is None:
            return self._not_found(name)
        try:
            value = _call(handler, arguments)
        except Exception as e:
            return self._failed(name, e)
        if inspect.isawaitable(value):
            if inspect.iscoroutine(value):
                value.close()
            return self._done(
                ToolResult(
                    name=name,
                    ok=False,
                    code="ASYNC_HANDLER",
                    error=f"tool '{name}' is asynchronous; use the async client path",
                )
            )
        return self._done(ToolResult(name=name, ok=True, value=value))

    async def ainvoke(self, name: str, arguments: str = "") -> ToolResult:
        """Invoke a handler, awaiting its result when it returns an awaitable."""
        handler = self.get(name)
        if handler is None:
            return self._not_found(name)
        try:
            value = _call(handler, arguments)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            return self._failed(name, e)
        return self._done(ToolResult(name=name, ok=True, value=value))

    def set_last_result(self, result: Optional[ToolResult]) -> None:
        with self._result_lock:
            self._last_result = result

    def last_result(self) -> Optional[ToolResult]:
        with self._result_lock:
            return self._last_result

    def _not_found(self, name: str) -> ToolResult:
        return self._done(
            ToolResult(name=name, ok=False, code="NOT_FOUND", error=f"tool '{name}' not registered")
        )

    def _failed(self, name: str, exc: Exception) -> ToolResult:
        return self._done(ToolResult(name=name, ok=False, code="EXCEPTION", error=str(exc)))

    def _done(self, result: ToolResult) -> ToolResult:
        log_event(
            self._logger,
            "tool.invoke",
            None,
            level=logging.DEBUG if result.ok else logging.WARNING,
            tool=result.name,
            ok=result.ok,
            code=result.code,
            error=result.error,
        )
        return result


__all__ = ["Function", "FunctionHandler", "FunctionRegistry"]
