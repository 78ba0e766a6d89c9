"""Per-call context attached to every structured log event.

A :class:`LogContext` is built once per client call and passed to
``log_event`` so start, end, error and stream events share the same
``operation``/``model``/``endpoint`` fields.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    operation: Optional[str] = None
    model: Optional[str] = None
    endpoint: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into event fields; ``extra`` is merged in and ``None`` values dropped."""
        fields = {
            "operation": self.operation,
            "model": self.model,
            "endpoint": self.endpoint,
            "request_id": self.request_id,
        }
        fields.update(self.extra or {})
        return {k: v for k, v in fields.items() if v is not None}


__all__ = ["LogContext"]
