"""Logging configuration: daily rotated file log with structured formatters."""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Literal, Union

from .context import get_log_context

LogFormat = Literal["json", "key-value"]

LOG_FILE_NAME = "notify.log"
SERVICE_NAME = "nagios-notify"


class ContextualFilter(logging.Filter):
    """Filter that enriches log records with static metadata and active context.

    This filter merges:
    1. The static service name into every record
    2. Active context from LogContextVar (host, service, notification_type)
    """

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service

        context = get_log_context()
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


def _format_timestamp(created: float) -> str:
    """Format a record timestamp as local ISO-8601 with microseconds."""
    dt = datetime.fromtimestamp(created, tz=timezone.utc).astimezone()
    return dt.isoformat(timespec="microseconds")


class JSONFormatter(logging.Formatter):
    """JSON formatter producing one object per line."""

    # Standard log record attributes to exclude from extras
    STANDARD_ATTRS = {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "asctime",
        "exc_info", "exc_text", "stack_info", "taskName"
    }

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": _format_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in self.STANDARD_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, datetime):
                log_obj[key] = value.isoformat()
            elif isinstance(value, (str, int, float, bool, type(None), list, dict)):
                log_obj[key] = value
            else:
                log_obj[key] = str(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Key-value formatter for human-readable logs.

    Produces logs in format:
    timestamp [level] logger: message key1=value1 key2=value2
    """

    SKIP_ATTRS = JSONFormatter.STANDARD_ATTRS | {"service"}

    def formatTime(self, record: logging.LogRecord, datefmt=None) -> str:
        return _format_timestamp(record.created)

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        extras = []
        for key, value in sorted(record.__dict__.items()):
            if key in self.SKIP_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, str):
                if " " in value or "=" in value or "," in value:
                    value_str = f'"{value}"'
                else:
                    value_str = value
            elif isinstance(value, bool):
                value_str = str(value).lower()
            elif value is None:
                value_str = "null"
            else:
                value_str = str(value)
            extras.append(f"{key}={value_str}")

        if not extras:
            return base
        # Tracebacks stay at the end of the entry
        head, sep, tail = base.partition("\n")
        return f"{head} {' '.join(extras)}{sep}{tail}"


def configure_logging(
    log_dir: Union[str, Path] = "log",
    level: str = "INFO",
    format_type: LogFormat = "key-value",
) -> Path:
    """
    Configure the root logger to write a daily rotated file.

    Args:
        log_dir: Directory for notify.log (created if missing)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' or 'key-value'

    Returns:
        Path of the active log file

    Raises:
        ValueError: If level or format_type is invalid
        OSError: If the log directory cannot be created
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type not in ("json", "key-value"):
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME

    handler = TimedRotatingFileHandler(log_file, when="midnight", encoding="utf-8")

    if format_type == "json":
        formatter = JSONFormatter()
    else:
        formatter = KeyValueFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    handler.setFormatter(formatter)
    handler.addFilter(ContextualFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
        existing.close()

    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
            "log_file": str(log_file),
        },
    )
    return log_file
