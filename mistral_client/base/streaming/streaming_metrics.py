"""Streaming metrics data structures.

Collected per stream by the sequence adapter and logged once when the stream
finalizes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...dto.common import ResponseUsage


@dataclass
class StreamMetrics:
    """Counters for a single streamed chat completion.

    Fields:
      deliveries: network chunks read from the response body
      emitted: fragments handed to the caller
      errors: errors handed to the caller (decode and transport)
      time_to_first_fragment_ms: latency from first read to first fragment
      total_duration_ms: wall time from first read to finalization
      usage: last usage block reported by the server, if any
    """

    deliveries: int = 0
    emitted: int = 0
    errors: int = 0
    time_to_first_fragment_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    usage: Optional[ResponseUsage] = None

    def tokens(self) -> Optional[Dict[str, Any]]:
        """Canonical token mapping for normalized logging."""
        if self.usage is None:
            return None
        return {
            "prompt": self.usage.prompt_tokens,
            "completion": self.usage.completion_tokens,
            "total": self.usage.total_tokens,
        }


__all__ = ["StreamMetrics"]
