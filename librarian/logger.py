"""Dual console/file logging used throughout the package.

Console records are written as ``key=value`` text to standard output; file
records are written as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import os
import string
import sys
from datetime import datetime
from typing import IO, Any, Mapping

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}
_RESERVED = ("time", "level", "msg")
_PLAIN_CHARS = frozenset(string.ascii_letters + string.digits + "-._/@^+")
_MIN_LEVEL = logging.INFO

_log_path = "/golibrarian.log"
_instance: "Logger | None" = None


def _level_name(level: int) -> str:
    return _LEVEL_NAMES.get(level, logging.getLevelName(level).lower())


def _timestamp() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def _text_value(value: Any) -> str:
    text = value if isinstance(value, str) else json.dumps(value, default=str)
    if text and all(ch in _PLAIN_CHARS for ch in text):
        return text
    return json.dumps(text)


class Logger:
    """Writes every record both to the console and to a JSON log file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self._file: IO[str] = open(self.path, "a", encoding="utf-8")
        self._console_enabled = True

    def _emit(self, level: int, message: str, data: Mapping[str, Any]) -> None:
        if level < _MIN_LEVEL:
            return
        message = message.rstrip("\n")
        when = _timestamp()
        name = _level_name(level)

        fields: dict[str, Any] = {}
        for key, value in data.items():
            fields[f"fields.{key}" if key in _RESERVED else key] = value

        record = dict(fields)
        record.update({"level": name, "msg": message, "time": when})
        self._file.write(json.dumps(record, default=str, sort_keys=True) + "\n")
        self._file.flush()

        if self._console_enabled:
            parts = [f"time={_text_value(when)}", f"level={name}", f"msg={_text_value(message)}"]
            parts.extend(f"{key}={_text_value(fields[key])}" for key in sorted(fields))
            sys.stdout.write(" ".join(parts) + "\n")
            sys.stdout.flush()

        if level >= logging.CRITICAL:
            raise SystemExit(1)

    def log(self, level: int, message: str) -> None:
        """Record *message* at *level*; a critical record ends the program."""
        self._emit(level, message, {})

    def log_fields(self, level: int, data: Mapping[str, Any], message: str) -> None:
        """Record *message* together with structured *data*."""
        self._emit(level, message, data)

    def disable_console(self) -> None:
        """Stop writing records to the console; the log file is unaffected."""
        self._console_enabled = False

    def close(self) -> None:
        self._file.close()


def get_logger() -> Logger:
    """Return the shared logger, creating it on first use."""
    global _instance
    if _instance is None:
        _instance = Logger(_log_path)
    return _instance


def set_logpath(directory: str | os.PathLike[str]) -> None:
    """Place the log file inside *directory*."""
    global _log_path
    _log_path = os.path.join(os.fspath(directory), _log_path.lstrip(os.sep))


def set_options(console_out: bool) -> None:
    """Apply output options to the shared logger."""
    if not console_out:
        get_logger().disable_console()


def log(level: int, message: str) -> None:
    get_logger().log(level, message)


def log_fields(level: int, data: Mapping[str, Any], message: str) -> None:
    get_logger().log_fields(level, data, message)


def console(message: str) -> None:
    """Write *message* to standard error only, without recording it."""
    sys.stderr.write(message)
    sys.stderr.flush()