"""Logging setup for the command-line entry point and host integrations.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed once by whichever front-end owns the process.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TextIO

__all__ = ["setup_logging", "get_log_path", "level_from_env"]

_DEFAULT_LOG_DIR = Path.home() / ".textformat" / "logs"
_LOG_FILE_NAME = "textformat.log"
_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_QUIET_LOGGERS: tuple[str, ...] = ("PySide6",)
_CONFIGURED = False
_LOG_PATH: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    log_to_file: bool = True,
    stream: TextIO | None = None,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path | None:
    """Install a rotating file handler plus a stderr handler on the root logger.

    ``stream`` defaults to ``sys.stderr`` so stdout stays free for command
    output. Returns the log file path, or ``None`` when file logging is off.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force:
        return _LOG_PATH

    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)
    console_handler = logging.StreamHandler(stream or sys.stderr)
    handlers: list[logging.Handler] = [console_handler]

    log_path: Path | None = None
    if log_to_file:
        target_dir = Path(log_dir or os.environ.get("TEXTFORMAT_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
        target_dir.mkdir(parents=True, exist_ok=True)
        log_path = target_dir / _LOG_FILE_NAME
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    quiet_level = max(level, logging.WARNING)
    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(quiet_level)

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def level_from_env(name: str = "TEXTFORMAT_LOG_LEVEL", default: int = logging.WARNING) -> int:
    """Read a level name (``DEBUG``, ``info`` ...) or number from ``name``."""

    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default
