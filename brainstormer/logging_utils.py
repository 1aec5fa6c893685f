"""Logging setup shared by the CLI and the GUI entry point.

``setup_logging`` attaches a rotating file handler (per-user directory unless
``--log-file`` says otherwise) and an optional console handler. The active
:class:`LogMode` is kept module-wide so hot paths such as the spin loop can
ask :func:`is_perf_logging_enabled` before doing any bookkeeping.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import time
from enum import Enum
from pathlib import Path
from typing import Optional


DEFAULT_LOG_FILENAME = "brainstormer.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3
_PLAIN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_KV_FORMAT = "ts=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


class LogMode(str, Enum):
    """quiet: console shows warnings only; perf: DEBUG plus spin step summaries."""

    QUIET = "quiet"
    NORMAL = "normal"
    PERF = "perf"


_LOG_MODE: LogMode = LogMode.NORMAL


def get_default_log_dir() -> Path:
    """``%LOCALAPPDATA%/MiniBrainstormer`` on Windows, ``~/.brainstormer`` elsewhere, cwd as last resort."""
    candidates = []
    local_appdata = os.environ.get("LOCALAPPDATA")
    if local_appdata:
        candidates.append(Path(local_appdata) / "MiniBrainstormer")
    candidates.append(Path.home() / ".brainstormer")
    for directory in candidates:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            continue
        return directory
    return Path.cwd()


def get_default_log_path() -> Path:
    return get_default_log_dir() / DEFAULT_LOG_FILENAME


def set_log_mode(mode: LogMode | str | None) -> LogMode:
    """Record the active mode; unknown names fall back to NORMAL."""
    global _LOG_MODE
    if isinstance(mode, LogMode):
        _LOG_MODE = mode
    else:
        try:
            _LOG_MODE = LogMode((mode or LogMode.NORMAL.value).lower())
        except ValueError:
            _LOG_MODE = LogMode.NORMAL
    return _LOG_MODE


def get_log_mode() -> LogMode:
    return _LOG_MODE


def is_perf_logging_enabled() -> bool:
    return _LOG_MODE is LogMode.PERF


def _level_number(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_logging(
    *,
    level: str | int = "INFO",
    log_file: Optional[str | Path] = None,
    json_format: bool = False,
    logger_name: Optional[str] = None,
    log_mode: LogMode | str | None = None,
    add_console: bool = True,
) -> logging.Logger:
    """Configure the root logger (or ``logger_name``) and return it.

    Calling it again only re-applies levels to the existing handlers, so the
    CLI can reconfigure after the GUI entry point has already run it.
    """
    file_level = _level_number(level)
    mode = set_log_mode(log_mode) if log_mode is not None else get_log_mode()
    if mode is LogMode.PERF:
        file_level = min(file_level, logging.DEBUG)
    console_level = max(logging.WARNING, file_level) if mode is LogMode.QUIET else file_level

    logger = logging.getLogger(logger_name) if logger_name else logging.getLogger()
    logger.setLevel(file_level)

    if logger.handlers:
        for handler in logger.handlers:
            # FileHandler first: it is itself a StreamHandler.
            if isinstance(handler, logging.FileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)
            else:
                handler.setLevel(file_level)
        return logger

    formatter = logging.Formatter(fmt=_KV_FORMAT if json_format else _PLAIN_FORMAT, datefmt="%H:%M:%S")
    log_path = Path(log_file) if log_file else get_default_log_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
    except OSError as exc:
        # Read-only home or bad --log-file; console output still works.
        logging.getLogger(__name__).warning("file logging disabled (%s): %s", log_path, exc)
    else:
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if add_console:
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(formatter)
        logger.addHandler(console)
    return logger


class BurstSampler:
    """Counts high-rate events and hands back a total once per interval.

    ``record`` returns ``None`` until ``interval_s`` has passed since the last
    report, then the accumulated count; ``flush`` reports early.
    """

    def __init__(self, interval_s: float = 2.0) -> None:
        self.interval_s = max(0.1, float(interval_s))
        self._count = 0
        self._next_flush = time.monotonic() + self.interval_s

    def record(self, amount: int = 1) -> Optional[int]:
        self._count += max(0, amount)
        now = time.monotonic()
        if now < self._next_flush:
            return None
        return self._drain(now)

    def flush(self) -> int:
        return self._drain(time.monotonic())

    def _drain(self, now: float) -> int:
        total, self._count = self._count, 0
        self._next_flush = now + self.interval_s
        return total
