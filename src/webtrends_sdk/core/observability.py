from __future__ import annotations

import logging
from typing import Any, Dict
from urllib.parse import urlsplit

OBSERVABILITY_LOGGER = "webtrends_sdk.observability"

RESERVED_LOG_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "message",
    "asctime",
}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def endpoint_of(uri: str) -> str:
    """Path of ``uri`` without its query; the query carries the key token."""
    return urlsplit(uri).path or "/"


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """
    Emit a structured INFO record.
    Fields travel in ``extra`` so formatters can render them; reserved
    LogRecord attributes are dropped to avoid collisions.
    """
    log = logger or logging.getLogger(OBSERVABILITY_LOGGER)
    log.info(event, extra=_clean_fields(fields))


__all__ = ["log_event", "endpoint_of", "OBSERVABILITY_LOGGER"]
