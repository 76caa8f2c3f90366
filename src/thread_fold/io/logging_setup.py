"""Centralized logging bootstrap for thread-fold.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] Runtime log path/level are derived here and returned to callers.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    return str(logging.getLevelName(level)), int(level)


def _default_log_path() -> str:
    log_dir = Path(
        os.environ.get("THREAD_FOLD_LOG_DIR", os.path.expanduser("~/.local/share/thread-fold/logs"))
    )
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"thread-fold-{ts}-{os.getpid()}.log")


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(level: str | None = None, *, stream: bool = True) -> LoggingRuntime:
    """Configure the thread_fold logger hierarchy with stderr + rotating file handlers.

    stream=False drops the stderr handler (the TUI owns the terminal).
    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get("THREAD_FOLD_LOG_LEVEL", "WARNING"))
    file_path = os.environ.get("THREAD_FOLD_LOG_FILE") or _default_log_path()
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    # [LAW:single-enforcer] All thread_fold module loggers propagate to this one logger.
    logger = logging.getLogger("thread_fold")
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    if stream:
        logger.addHandler(_make_stream_handler(level_value))
    logger.addHandler(_make_file_handler(level_value, file_path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Detach handlers and forget the runtime. Used by tests."""
    global _RUNTIME
    logger = logging.getLogger("thread_fold")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    _RUNTIME = None
