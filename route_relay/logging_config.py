"""Structured logging configuration (structlog over stdlib handlers)."""

from __future__ import annotations

import logging
import sys
from typing import Any, Final

import structlog

_LOGGING_SENSITIVE_KEY_FRAGMENTS: Final[tuple[str, ...]] = ("token", "authorization", "password", "secret")


def logging_redact_sensitive(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace values of credential-like keys before rendering.

    Args:
        logger: Wrapped logger (unused).
        method_name: Log method name (unused).
        event_dict: Structured event payload.

    Returns:
        dict[str, Any]: Event payload with sensitive values redacted.

    Raises:
        RuntimeError: This processor does not raise runtime errors.
    """

    _ = (logger, method_name)
    return {
        key: "[REDACTED]" if any(fragment in str(key).lower() for fragment in _LOGGING_SENSITIVE_KEY_FRAGMENTS) else value
        for key, value in event_dict.items()
    }


def logging_configure(level: str = "INFO") -> None:
    """Configure JSON structured logging for the process.

    Events render as one JSON line each and go through the root stdlib logger
    to stderr, leaving stdout to command output.

    Args:
        level: Minimum log level name.

    Returns:
        None: Configures structlog and the root logger as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            logging_redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [stream_handler]
    root_logger.setLevel(numeric_level)
