"""
rota_auth.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs on stdout.
- Scrub credential-bearing fields before rendering.
- Render exception chains so unexpected errors keep their causes.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Final

import structlog

# Field names that may carry a raw credential. Values are replaced, keys kept.
SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "password",
        "token",
        "access_token",
        "jwt",
        "two_fa_code",
        "code",
        "login_attempt_id",
        "authorization",
        "cookie",
    }
)
REDACTED: Final[str] = "[redacted]"


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_sensitive,
            # Walks __cause__/__context__, so wrapped store errors keep their chain.
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_sensitive(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Emails are logged only through `Email.masked()`; the redaction processor is a
# backstop for fields that should never be logged at all.
