"""Structured logging for the adapters, the transport helper and the CLI.

All loggers hang off one ``ask`` logger that owns the handlers; modules call
:func:`get_logger` with an ``ask.``-prefixed name and never attach handlers
themselves. Records are written to stderr as JSON lines.

``ASK_LOG_LEVEL`` sets the threshold (WARNING when unset, so ordinary CLI
output stays clean). :func:`log_event` emits at INFO, so lowering the level to
``info`` or ``debug`` exposes request and response events. The CLI passes
``ASK_LOG_FILE`` to :func:`configure_logger`, which adds a rotating file
handler.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "ask"
LOG_LEVEL_ENV = "ASK_LOG_LEVEL"
LOG_FILE_ENV = "ASK_LOG_FILE"

_READY_FLAG = "_ask_ready"
_STDERR_FLAG = "_ask_stderr"
_FILE_FLAG = "_ask_file"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name from ``ASK_LOG_LEVEL`` to its constant (``default`` if unknown)."""
    if not value or not value.strip():
        return default
    return _LEVELS.get(value.strip().lower(), default)


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def _root() -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    level = _parse_level(os.getenv(LOG_LEVEL_ENV))
    if not getattr(logger, _READY_FLAG, False):
        stderr = logging.StreamHandler(sys.stderr)
        stderr.setFormatter(JsonFormatter())
        setattr(stderr, _STDERR_FLAG, True)
        logger.handlers[:] = [stderr]
        logger.propagate = False
        setattr(logger, _READY_FLAG, True)
        _apply_level(logger, level)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return ``name`` under the shared ``ask`` logger, setting that logger up on first use."""
    root = _root()
    if name == BASE_LOGGER_NAME:
        return root
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def _drop_file_handlers(logger: logging.Logger, keep: Optional[str]) -> bool:
    """Remove managed file handlers except one writing to ``keep``; report whether it survived."""
    kept = False
    for handler in [h for h in logger.handlers if getattr(h, _FILE_FLAG, False)]:
        if keep is not None and getattr(handler, "baseFilename", None) == keep:
            kept = True
            continue
        logger.removeHandler(handler)
        with contextlib.suppress(OSError):
            handler.close()
    return kept


def configure_logger(*, level: int | str | None = None, file_path: Optional[str] = None) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New threshold, as a constant or a name such as ``"debug"``. ``None``
        keeps the current one.
    file_path: Optional[str]
        Target for a rotating JSON log file. ``None`` removes any file handler
        added by an earlier call.
    """
    logger = _root()
    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        _apply_level(logger, resolved)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    if _drop_file_handlers(logger, target) or target is None:
        return logger

    os.makedirs(os.path.dirname(target), exist_ok=True)
    # 1MB x 3 backups
    handler = RotatingFileHandler(target, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    handler.setLevel(logger.level)
    setattr(handler, _FILE_FLAG, True)
    logger.addHandler(handler)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON message.

    ``ctx`` is merged first, then ``fields``; ``None`` values are left out.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LOG_FILE_ENV",
]
