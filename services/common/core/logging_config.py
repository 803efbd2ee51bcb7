"""
Logging Configuration
Custom JSON Logger implementation for job runner log collection.

Provides:
- CustomJsonFormatter: one JSON object per log record
- setup_logging: YAML based dictConfig with environment substitution
"""

import json
import logging
import logging.config
import os
import string
from datetime import datetime, timezone
from typing import Optional

import yaml

from .request_context import get_invocation_id

# LogRecord attributes that are not forwarded as extra fields.
_STANDARD_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class CustomJsonFormatter(logging.Formatter):
    """
    JSON Formatter.

    Fields:
      - _time: ISO8601 timestamp (millisecond precision)
      - level: Log level
      - logger: Logger name (e.g. webhook.invoker)
      - message: Log message
      - invocation_id: ID of the job invocation that produced the record
    """

    def format(self, record: logging.LogRecord) -> str:
        invocation_id = getattr(record, "invocation_id", None) or get_invocation_id()

        log_data = {
            "_time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if invocation_id:
            log_data["invocation_id"] = invocation_id

        # Include extra fields
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config_path: str = "logging.yml", log_level: Optional[str] = None):
    """
    Load the YAML config, substitute environment variables, and initialize logging.

    log_level (usually the settings LOG_LEVEL) wins over the LOG_LEVEL variable.
    """
    if not os.path.exists(config_path):
        logging.basicConfig(level=(log_level or "INFO").upper())
        return

    with open(config_path, "r", encoding="utf-8") as f:
        # Substitute environment variables using string.Template.
        # Supports ${LOG_LEVEL} format.
        template = string.Template(f.read())

        # Default values.
        mapping = os.environ.copy()
        if log_level:
            mapping["LOG_LEVEL"] = log_level.upper()
        elif "LOG_LEVEL" not in mapping:
            mapping["LOG_LEVEL"] = "INFO"

        content = template.safe_substitute(mapping)
        config = yaml.safe_load(content)
        logging.config.dictConfig(config)
