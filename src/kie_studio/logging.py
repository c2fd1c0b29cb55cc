"""Logging configuration for kie-studio."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping

import structlog

MASK = "***"
SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "authorization",
        "base64data",
        "gemini_api_key",
        "kie_api_key",
        "x-goog-api-key",
    }
)
QUIET_LOGGERS = ("httpx", "httpcore")


def mask_secrets(value: Any) -> Any:
    """Return ``value`` with credential-bearing keys replaced by ``***``."""
    if isinstance(value, dict):
        return {
            key: MASK if str(key).lower() in SENSITIVE_KEYS and item else mask_secrets(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(mask_secrets(item) for item in value)
    return value


def mask_secrets_processor(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor applying :func:`mask_secrets` to the event dict."""
    return mask_secrets(dict(event_dict))


class SecretMaskingFilter(logging.Filter):
    """Mask credential fields passed through ``extra`` on stdlib records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, item in list(vars(record).items()):
            if key.lower() in SENSITIVE_KEYS and item:
                setattr(record, key, MASK)
            elif isinstance(item, (dict, list, tuple)) and key != "args":
                setattr(record, key, mask_secrets(item))
        return True


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure stdlib logging and structlog with JSON rendering."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        if not any(isinstance(existing, SecretMaskingFilter) for existing in handler.filters):
            handler.addFilter(SecretMaskingFilter())
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            mask_secrets_processor,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
