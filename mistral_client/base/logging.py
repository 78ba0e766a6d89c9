"""JSON logging for the client, the HTTP pool and the stream decoder.

Every logger returned here is a child of ``mistral_client``. That base logger
owns one stderr handler and takes its level from ``MISTRAL_LOG_LEVEL``
(``WARNING`` when unset, so importing the package prints nothing).

Events are single JSON lines built by ``log_event``. Call start/end/error and
stream finalize records go through ``normalized_log_event``, which always
carries ``structured``, ``phase``, ``attempt``, ``emitted`` and ``tokens``
(plus ``error_code`` when there is one).
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "mistral_client"
LOG_LEVEL_ENV_VAR = "MISTRAL_LOG_LEVEL"

# Marker attributes on the handlers this module manages.
_READY_ATTR = "_mistral_ready"
_STDERR_ATTR = "_mistral_stderr"
_FILE_ATTR = "_mistral_file"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    if json_mode:
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def _parse_level(value: Optional[str], default: int = logging.WARNING) -> int:
    """Map a level name (any case) to its numeric value, else ``default``."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.strip().upper(), default)


def _base_logger(json_mode: bool = True) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _READY_ATTR, False):
        return logger
    logger.setLevel(_parse_level(os.getenv(LOG_LEVEL_ENV_VAR)))
    stderr = logging.StreamHandler(sys.stderr)
    stderr.setFormatter(_formatter(json_mode))
    setattr(stderr, _STDERR_ATTR, True)
    logger.handlers[:] = [stderr]
    setattr(logger, _READY_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True) -> logging.Logger:
    """Logger for ``name`` under the ``mistral_client`` namespace.

    ``get_logger("streaming")`` returns ``mistral_client.streaming``; records
    propagate to the base logger's handler.
    """
    base = _base_logger(json_mode)
    if name == BASE_LOGGER_NAME:
        return base
    prefix = BASE_LOGGER_NAME + "."
    return logging.getLogger(name if name.startswith(prefix) else prefix + name)


def _drop_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(OSError):
        handler.close()


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the base logger at runtime.

    ``level`` accepts a number or a name; ``None`` keeps the current level.
    With ``file_path`` a rotating file handler (10 MB, 5 backups) writes there,
    replacing any file handler added by an earlier call. Without it, that
    handler is removed. Handlers added by the application are left alone.
    """
    logger = _base_logger(json_mode)
    if isinstance(level, str):
        logger.setLevel(_parse_level(level, default=logger.level))
    elif level is not None:
        logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, _STDERR_ATTR, False):
            handler.setFormatter(_formatter(json_mode))

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    kept: Optional[logging.Handler] = None
    for handler in [h for h in logger.handlers if getattr(h, _FILE_ATTR, False)]:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            kept = handler
        else:
            _drop_handler(logger, handler)
    if target is None:
        return logger

    if kept is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        kept = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(kept, _FILE_ATTR, True)
        logger.addHandler(kept)
    kept.setFormatter(_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` with the context and ``fields`` as one JSON object.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")


def _tokens_field(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    if hasattr(tokens, "model_dump"):
        return tokens.model_dump()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | int | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """``log_event`` with the normalized key set.

    ``error_code`` appears only when given. Extra fields are added when not
    ``None`` and never replace a normalized value that is set.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _tokens_field(tokens),
    }
    if error_code is not None:
        fields["error_code"] = error_code
    for key, value in extra_fields.items():
        if value is not None and fields.get(key) is None:
            fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
