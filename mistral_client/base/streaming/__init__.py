"""Event-stream decoding for streamed chat completions."""

from .event_classifier import EventKind, StreamEvent, classify_line
from .fragment_decoder import DecodedBatch, decode_fragment, decode_line, decode_lines
from .line_framer import LineFramer
from .sequence_adapter import (
    AsyncChatStream,
    ChatStream,
    StreamDecoder,
    StreamItem,
    StreamState,
    transport_error_from,
)
from .stream_summary import StreamSummary, accumulate_fragments
from .streaming_metrics import StreamMetrics

__all__ = [
    "EventKind",
    "StreamEvent",
    "classify_line",
    "DecodedBatch",
    "decode_fragment",
    "decode_line",
    "decode_lines",
    "LineFramer",
    "AsyncChatStream",
    "ChatStream",
    "StreamDecoder",
    "StreamItem",
    "StreamState",
    "transport_error_from",
    "StreamSummary",
    "accumulate_fragments",
    "StreamMetrics",
]
