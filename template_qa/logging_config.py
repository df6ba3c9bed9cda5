"""
Logging setup for the API and CLI entry points.

Engine modules only ask for a named logger:
    from template_qa.logging_config import get_engine_logger
    logger = get_engine_logger("policy")

Entry points call setup_logging() once; LOG_FORMAT=json switches the root
handler to one JSON object per line, carrying any of EXTRA_FIELDS a caller
passed through `extra=`.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

from template_qa import config

EXTRA_FIELDS = ("template_name", "tenant_id", "error_count", "rules_version", "duration_ms")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        return json.dumps(entry)


class TextFormatter(logging.Formatter):

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


_initialized = False


def setup_logging(level: str = None, fmt: str = None, log_file: str = None):
    """Configure the root logger. Later calls are no-ops.

    Args:
        level: Log level (default: config.LOG_LEVEL)
        fmt: "text" or "json" (default: config.LOG_FORMAT)
        log_file: Also write to this file (default: config.LOG_FILE)
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = level or config.LOG_LEVEL
    fmt = fmt or config.LOG_FORMAT
    log_file = log_file or config.LOG_FILE

    formatter = JSONFormatter() if fmt == "json" else TextFormatter()
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("template_qa").info("Logging configured: level=%s, format=%s", level, fmt)


def get_engine_logger(component: str) -> logging.Logger:
    return logging.getLogger(f"template_qa.engine.{component}")
