"""Logging bootstrap for the tag browser.

All ``tagview.*`` module loggers propagate to the ``tagview`` logger, which
writes to a rotating log file. No stream handler is installed: output on
stderr would be drawn over the terminal UI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tagview.config import DEFAULT_CONFIG, ViewerConfig


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, None)
    if not isinstance(level, int):
        level = logging.WARNING
    return str(logging.getLevelName(level)), level


def _default_log_path(config: ViewerConfig) -> str:
    log_dir = config.resolved_log_dir()
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return str(log_dir / f"tagview-{ts}-{os.getpid()}.log")


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=20 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(config: ViewerConfig = DEFAULT_CONFIG) -> LoggingRuntime:
    """Configure the tagview logger hierarchy with a rotating file handler.

    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level = _parse_level(config.log_level)
    file_path = config.log_file or _default_log_path(config)
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("tagview")
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_file_handler(level, file_path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level, file_path=file_path)
    logger.info("Logging configured at %s to %s", level_name, file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Detach the handlers installed by configure() so it can run again."""
    global _RUNTIME
    logger = logging.getLogger("tagview")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    _RUNTIME = None
