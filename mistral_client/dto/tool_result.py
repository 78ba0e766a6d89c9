"""Result envelope for a locally dispatched tool call.

Handlers return arbitrary Python values; the envelope keeps the value
type-erased and lets the caller resolve it against the type it expects.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ToolResult(BaseModel):
    """Result envelope for a tool invocation.

    Attributes:
        name: The function name that was invoked.
        ok: True when the handler returned normally.
        value: Whatever the handler returned (``None`` on failure).
        code: Error code when ``ok`` is False (``NOT_FOUND``, ``EXCEPTION``,
            ``ASYNC_HANDLER``).
        error: Human-readable error when ``ok`` is False.
        metadata: Free-form metadata (e.g. the tool call id).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    ok: bool
    value: Any = None
    code: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def value_as(self, expected_type: Type[T]) -> T:
        """Return ``value`` when it is an instance of ``expected_type``.

        Raises:
            TypeError: the value has another type, or the call failed.
        """
        if not self.ok:
            raise TypeError(f"tool '{self.name}' failed ({self.code}): {self.error}")
        if not isinstance(self.value, expected_type):
            raise TypeError(
                f"tool '{self.name}' returned {type(self.value).__name__}, "
                f"expected {expected_type.__name__}"
            )
        return self.value


__all__ = ["ToolResult"]
