# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for perfgate.

Every log entry is a single JSON line: timestamped, leveled, tagged with the
source module, plus any `extra` context the caller attached.

How this works:
  - All perfgate loggers are children of the "perfgate" logger. Only that
    parent owns handlers, so a module-level `get_logger(__name__)` picks up
    whatever level and destinations the CLI configured later on.
  - Log lines go to stderr. Stdout is reserved for the rendered summary,
    which CI jobs commonly pipe into a file or a comment body.
  - `configure_logging` is called once per CLI invocation with the level and
    optional log file from the global config.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "perfgate.evaluation.reports", "msg": "Reports loaded", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "perfgate"

# LogRecord attributes that are never copied into the JSON payload.
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

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory fields:
      ts:     ISO 8601 UTC timestamp
      level:  log level name
      module: the logger name (usually the Python module path)
      msg:    the formatted message string

    Extra fields (variant, category, report path...) are merged in as-is.
    Exceptions attached with exc_info land in an "exc" field.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
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


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    (Re)configure the shared "perfgate" logger.

    Existing handlers are replaced, so calling this twice (config file level
    after CLI flag level, or once per test) never duplicates output.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stderr and the file.

    Returns:
        The configured root perfgate logger.
    """
    level = _resolve_log_level(log_level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(stream=sys.stderr)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Don't propagate to the Python root logger.
    root.propagate = False

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a structured JSON logger for a perfgate module.

    Names outside the perfgate hierarchy are nested under it, so every
    logger shares the handlers installed by configure_logging. If nothing
    has been configured yet, INFO to stderr is installed on first use.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        configure_logging()

    return logging.getLogger(name)
