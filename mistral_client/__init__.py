"""mistral_client package

Client for the Mistral chat completion, embeddings and models HTTP API.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`Client`
    - Exceptions: :class:`ApiError`, :class:`TransportError`,
      :class:`DecodeError`, :class:`ClientError`, :class:`MissingApiKeyError`,
      :class:`ErrorCode`
    - Streaming: :class:`ChatStream`, :class:`AsyncChatStream`,
      :class:`StreamItem`, :class:`StreamState`, :class:`StreamSummary`
    - DTOs: everything exported by :mod:`mistral_client.dto`

Example::

    from mistral_client import ChatMessage, Client, Model

    client = Client()
    with client.chat_stream(Model.OPEN_MISTRAL_7B, [ChatMessage.user("Hi")]) as stream:
        for fragment in stream.iter_fragments():
            print(fragment.content, end="")
"""

from .base.constants import CLIENT_VERSION
from .base.errors import (
    ApiError,
    ClientError,
    DecodeError,
    ErrorCode,
    MissingApiKeyError,
    TransportError,
)
from .base.streaming import (
    AsyncChatStream,
    ChatStream,
    StreamItem,
    StreamState,
    StreamSummary,
    accumulate_fragments,
)
from .base.tools import Function
from .client import Client
from .dto import *  # noqa: F401,F403
from .dto import __all__ as _dto_all

__version__ = CLIENT_VERSION

__all__ = [
    # Version
    "__version__",
    # Client
    "Client",
    "Function",
    # Exceptions
    "ApiError",
    "ClientError",
    "DecodeError",
    "ErrorCode",
    "MissingApiKeyError",
    "TransportError",
    # Streaming
    "AsyncChatStream",
    "ChatStream",
    "StreamItem",
    "StreamState",
    "StreamSummary",
    "accumulate_fragments",
    # DTOs
    *_dto_all,
]
