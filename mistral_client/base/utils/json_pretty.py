"""Pretty JSON helpers for debug logging of request and response bodies."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from ..logging import get_logger

_logger = get_logger("debug")


def prettify_json_string(text: str) -> str:
    """Re-indent a JSON document; return ``text`` unchanged when it is not JSON."""
    try:
        return json.dumps(json.loads(text), indent=2, ensure_ascii=False)
    except ValueError:
        return text


def prettify_json_struct(value: Any) -> str:
    """Render a model or plain structure as indented JSON, falling back to ``repr``."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2, exclude_none=True)
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)


def debug_pretty_json_from_string(label: str, text: str, logger: logging.Logger | None = None) -> None:
    logger = logger or _logger
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s: %s", label, prettify_json_string(text))


def debug_pretty_json_from_struct(label: str, value: Any, logger: logging.Logger | None = None) -> None:
    logger = logger or _logger
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s: %s", label, prettify_json_struct(value))


__all__ = [
    "prettify_json_string",
    "prettify_json_struct",
    "debug_pretty_json_from_string",
    "debug_pretty_json_from_struct",
]
