"""Minimal coloured logger writing timestamped lines to a text stream."""

from __future__ import annotations

import enum
import sys
import threading
import time
from typing import TextIO

RESET = "\033[0m"


class LogLevel(enum.IntEnum):
    """Severity of a log message; lower values are more verbose."""

    DEBUG = 0
    INFO = 1
    ERROR = 2

    @property
    def color(self) -> str:
        return _COLORS.get(self, RESET)


_COLORS = {
    LogLevel.INFO: "\033[32m",
    LogLevel.DEBUG: "\033[34m",
    LogLevel.ERROR: "\033[31m",
}


class _Config:
    def __init__(self) -> None:
        self.stream: TextIO | None = None
        self.level = LogLevel.DEBUG
        self.lock = threading.Lock()


_config = _Config()


def init(stream: TextIO | None = None) -> None:
    """Direct log output to ``stream``; ``None`` means standard output."""
    with _config.lock:
        _config.stream = stream


def set_log_level(level: LogLevel) -> None:
    """Suppress messages below ``level``."""
    with _config.lock:
        _config.level = LogLevel(level)


def debug(msg: str) -> None:
    _log(msg, LogLevel.DEBUG)


def info(msg: str) -> None:
    _log(msg, LogLevel.INFO)


def error(msg: str) -> None:
    _log(msg, LogLevel.ERROR)


def _log(msg: str, level: LogLevel) -> None:
    with _config.lock:
        if level < _config.level:
            return
        stream = sys.stdout if _config.stream is None else _config.stream
        line = f"{level.color}[{level.name}] {RESET}{time.ctime()} - {msg}\n"
        stream.write(line)
        stream.flush()