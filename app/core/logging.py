"""Structured logging for the check-in scoring engine.

Log lines are rendered as ``key=value`` pairs so they stay greppable in the
host application's log stream, e.g.::

    timestamp=... level=INFO logger=app.core.scoring.engine message="Score computed" template_id=t1 overall=82.5
"""

import logging
import sys
from typing import Any

# Context fields promoted to the front of every line when present
CONTEXT_FIELDS = ("template_id", "template_version")


def _render(value: Any) -> str:
    text = str(value)
    if not text or any(ch.isspace() for ch in text) or "=" in text:
        return '"' + text.replace('"', '\\"') + '"'
    return text


class StructuredFormatter(logging.Formatter):
    """key=value structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured output."""
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return " ".join(f"{k}={_render(v)}" for k, v in log_data.items())


def _resolve_level() -> int:
    try:
        from app.core.config import get_settings

        settings = get_settings()
    except Exception:
        # Settings can be invalid while the host app boots
        return logging.INFO

    if settings.LOG_LEVEL:
        return logging.getLevelName(settings.LOG_LEVEL.upper())
    return logging.DEBUG if settings.CHECKIN_ENV == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Handlers are attached once per logger name; calling this repeatedly for
    the same module is cheap.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_resolve_level())
        logger.propagate = False

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with additional context fields.

    ``template_id`` and ``template_version`` are lifted onto the record so
    they lead the rendered line; anything else is appended in call order.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        msg: Log message
        **kwargs: Additional context fields
    """
    extra: dict[str, Any] = {
        name: kwargs.pop(name) for name in CONTEXT_FIELDS if name in kwargs
    }
    extra["extra_data"] = kwargs

    logger.log(level, msg, extra=extra)
