"""Structured logging for the connection layer.

Every logger handed out here is a child of the ``resilient_chat`` logger.
That base logger owns a single console handler (JSON by default) and, on
request, one rotating file handler. Its level is read from
``RESILIENT_CHAT_LOG_LEVEL`` (default INFO) each time a logger is requested,
so tests and applications can change verbosity without re-importing.

Events are JSON objects with an ``event`` name plus the fields of the call's
:class:`LogContext`. ``normalized_log_event`` additionally guarantees the
keys ``structured``, ``phase``, ``attempt``, ``emitted`` and ``tokens``
(and ``error_code`` on failures) so log consumers can filter every chat call
the same way.
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


BASE_LOGGER_NAME = "resilient_chat"
LEVEL_ENV = "RESILIENT_CHAT_LOG_LEVEL"

_READY_FLAG = "_resilient_chat_logger_initialized"
_CONSOLE_FLAG = "_resilient_chat_console_handler"
_FILE_FLAG = "_resilient_chat_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _level_from(value: int | str | None, default: int) -> int:
    """Resolve ``value`` (number or level name such as ``"warn"``) to an int."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def _handlers_flagged(logger: logging.Logger, flag: str):
    return [h for h in logger.handlers if getattr(h, flag, False)]


def _base_logger(json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _level_from(os.getenv(LEVEL_ENV), level)
    if not getattr(logger, _READY_FLAG, False):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_formatter(json_mode))
        setattr(console, _CONSOLE_FLAG, True)
        logger.handlers[:] = [console]
        # Records still reach the root logger (and pytest's caplog).
        logger.propagate = True
        setattr(logger, _READY_FLAG, True)
    logger.setLevel(wanted)
    for handler in _handlers_flagged(logger, _CONSOLE_FLAG):
        handler.setLevel(wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger below ``resilient_chat``; the prefix is added if missing."""
    base = _base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    prefix = BASE_LOGGER_NAME + "."
    child = logging.getLogger(name if name.startswith(prefix) else prefix + name)
    # Children defer to the base level and reuse its handlers.
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


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
    """Reconfigure the base logger at runtime and return it.

    ``level`` applies to the logger and all of its handlers; ``None`` keeps
    the current level. ``file_path`` attaches a rotating file handler
    (10 MB x 5 backups), replacing one that points elsewhere; ``None``
    removes it. ``json_mode`` picks the formatter for every managed handler.
    """
    logger = _base_logger(json_mode=json_mode)
    if level is not None:
        resolved = _level_from(level, logger.level)
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
    for handler in _handlers_flagged(logger, _CONSOLE_FLAG):
        handler.setFormatter(_formatter(json_mode))

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    keep: Optional[logging.Handler] = None
    for handler in _handlers_flagged(logger, _FILE_FLAG):
        if target is not None and getattr(handler, "baseFilename", None) == target:
            keep = handler
        else:
            _drop_handler(logger, handler)
    if target is None:
        return logger

    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(
            target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8"
        )
        setattr(keep, _FILE_FLAG, True)
        logger.addHandler(keep)
    keep.setFormatter(_formatter(json_mode))
    keep.setLevel(logger.level)
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
    """Log ``event`` as one JSON object.

    The context's fields are merged first, then ``fields``. ``None`` values
    are dropped unless ``keep_none`` is set. Values that are not JSON
    serializable are logged via ``str``.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    for key, value in fields.items():
        if value is not None or keep_none:
            payload[key] = value
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _tokens_field(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log ``event`` with the normalized key set.

    ``error_code`` appears only when given. Extra fields with ``None`` values
    are skipped, and an extra field never replaces a normalized value that
    is already set.
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
    "BASE_LOGGER_NAME",
    "LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
