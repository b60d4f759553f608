# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for packcheck.

Every log entry is a single JSON line with a timestamp, level, source module
and message. Context goes in through the `extra` kwarg and gets merged into
the object, so a failed validation log carries the expected and actual values
right next to the message.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "packcheck.harness.driver", "msg": "build completed", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_STANDARD_ATTRS: frozenset[str] = frozenset(
    {
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
    }
)


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory fields are `ts` (ISO 8601 UTC), `level`, `module` (the logger
    name) and `msg`. Anything passed via `extra` is merged in; internal
    LogRecord attributes are skipped.
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
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Every module calls this once at import time and keeps the returned
    instance. Calling it again for the same name only updates the level.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stdout and the file.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Tests call get_logger repeatedly for the same name.
    if logger.handlers:
        return logger

    formatter = JsonFormatter()

    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def configure_logging(
    root_name: str,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> None:
    """
    Apply one level, and optionally one log file, to every logger under `root_name`.

    Module loggers are created at import time with the default level, so the
    CLI calls this once the harness config is known. Loggers created later
    still start at the get_logger default.
    """
    level = _resolve_log_level(log_level)
    prefix = f"{root_name}."
    file_target = str(log_file.resolve()) if log_file is not None else None

    for name, candidate in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(candidate, logging.Logger):
            continue
        if name != root_name and not name.startswith(prefix):
            continue

        logger = get_logger(name, log_level=log_level)
        for handler in logger.handlers:
            handler.setLevel(level)

        if file_target is None:
            continue
        already_attached = any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == file_target
            for handler in logger.handlers
        )
        if not already_attached:
            Path(file_target).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(file_target, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonFormatter())
            logger.addHandler(file_handler)
