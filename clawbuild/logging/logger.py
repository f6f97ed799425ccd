# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for clawbuild.

Every diagnostic record is one JSON line: timestamped, leveled, and tagged
with the source module. Diagnostics go to stderr by default, because stdout
belongs to the human-readable progress lines and to cargo's own output.

How this works:
  - We use Python's standard `logging` module under the hood, but replace the
    default formatter with JsonFormatter, which serializes every log record
    into a single JSON line.
  - One stream handler is always attached, plus an optional file handler.
  - `get_logger` is the only way to create loggers in this package.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "clawbuild.driver.core", "msg": "Invoking toolchain", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

_STANDARD_ATTRS = frozenset({
    "name",
    "msg",
    "args",
    "created",
    "relativeCreated",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "pathname",
    "filename",
    "module",
    "levelno",
    "levelname",
    "processName",
    "process",
    "threadName",
    "thread",
    "message",
    "msecs",
    "taskName",
})


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Each entry carries four mandatory fields:
      ts     — ISO 8601 UTC timestamp
      level  — log level name
      module — the logger name (usually the Python module path)
      msg    — the formatted message string

    Anything passed through `extra` is merged in as additional fields, which
    is how the driver attaches the platform, backend, exit status and so on.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Calling this again for a name that already has handlers only updates the
    level, so module-level loggers pick up the level chosen on the command line.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  the stream and the file.
        stream: Where to write. Defaults to sys.stderr at call time.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Avoid stacking handlers if get_logger is called multiple times for the
    # same name (happens in tests).
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Don't propagate to root logger — we handle all output ourselves.
    logger.propagate = False

    return logger


def configure_package_logging(log_level: str, log_file: Optional[Path] = None) -> logging.Logger:
    """
    Set the level for every clawbuild logger at once.

    Module loggers are created at import time with the default level. The
    CLI calls this after parsing arguments so they all follow --log-level,
    and all write into the same log file when one is configured.
    """
    root = get_logger("clawbuild", log_level=log_level, log_file=log_file)
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]

    for name in list(logging.Logger.manager.loggerDict):
        if not name.startswith("clawbuild."):
            continue
        child = logging.getLogger(name)
        if not child.handlers:
            continue
        get_logger(name, log_level=log_level)
        for handler in file_handlers:
            if handler not in child.handlers:
                child.addHandler(handler)
    return root
