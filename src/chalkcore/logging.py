"""Logging utilities for chalkcore.

This module provides:
- Logging configuration from AuthorizationConfig
- Safe, bounded previews of logged values
- A formatter that emits structured JSON or plain text
- A logger adapter that stamps the subject id on every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import AuthorizationConfig, LogLevel
from .models import Subject

# LogRecord attributes that are not user-supplied extras.
_RECORD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "subject_id",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Dicts and lists are rendered as JSON; whitespace is collapsed and the
    result is cut at ``limit`` characters with a trailing ellipsis.
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class AuthorizationFormatter(logging.Formatter):
    """Formatter that includes the subject id and extra fields.

    Args:
        json_format: Output one JSON object per record (True) or plain text.
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        subject_id = getattr(record, "subject_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if subject_id:
            log_data["subject_id"] = subject_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        if subject_id:
            parts.append(f"subject_id={subject_id}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class SubjectLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds ``subject_id`` to log records.

    Usage:
        logger = get_subject_logger(__name__)
        logger.info("Granted access", subject=user)
    """

    def __init__(self, logger: logging.Logger, subject_id: Optional[str] = None):
        super().__init__(logger, {})
        self.subject_id = subject_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        subject_id = kwargs.pop("subject_id", self.subject_id)

        subject = kwargs.pop("subject", None)
        if isinstance(subject, Subject):
            subject_id = subject_id or subject.id

        extra = kwargs.get("extra", {})
        if subject_id:
            extra["subject_id"] = subject_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AuthorizationConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger.

    Args:
        config: AuthorizationConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        AuthorizationFormatter(json_format=config.log_json if json_format is None else json_format)
    )
    root_logger.addHandler(console_handler)


def get_subject_logger(name: str, subject_id: Optional[str] = None) -> SubjectLoggerAdapter:
    """Get a logger adapter bound to an optional subject id.

    Example:
        logger = get_subject_logger(__name__, subject_id="user-1")
        logger.info("Permissions updated")
    """
    return SubjectLoggerAdapter(logging.getLogger(name), subject_id=subject_id)


__all__ = [
    "AuthorizationFormatter",
    "SubjectLoggerAdapter",
    "get_subject_logger",
    "safe_preview",
    "setup_logging",
]
