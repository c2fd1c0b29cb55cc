from __future__ import annotations

import logging

import pytest

from src.kie_studio.config import AppConfig
from src.kie_studio.logging import (
    SecretMaskingFilter,
    configure_logging,
    mask_secrets,
    mask_secrets_processor,
)


@pytest.fixture
def restore_levels():
    names = ("", "httpx", "httpcore")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_mask_secrets_handles_nested_headers() -> None:
    event = {
        "event": "kie.task.create",
        "headers": {"Authorization": "Bearer secret", "Content-Type": "application/json"},
        "uploads": [{"base64Data": "data:image/png;base64,AAAA", "fileName": "a.png"}],
        "api_key": None,
    }

    masked = mask_secrets(event)

    assert masked["headers"] == {"Authorization": "***", "Content-Type": "application/json"}
    assert masked["uploads"] == [{"base64Data": "***", "fileName": "a.png"}]
    assert masked["api_key"] is None
    assert event["headers"]["Authorization"] == "Bearer secret"


def test_structlog_processor_masks_event_dict() -> None:
    result = mask_secrets_processor(None, "info", {"event": "gemini.prompt", "x-goog-api-key": "g-key"})

    assert result == {"event": "gemini.prompt", "x-goog-api-key": "***"}


def test_stdlib_filter_masks_extra_fields() -> None:
    record = logging.LogRecord("kie", logging.INFO, __file__, 1, "kie.task.create", None, None)
    record.kie_api_key = "secret"
    record.headers = {"authorization": "Bearer secret"}
    record.task_id = "task-1"

    assert SecretMaskingFilter().filter(record) is True
    assert record.kie_api_key == "***"
    assert record.headers == {"authorization": "***"}
    assert record.task_id == "task-1"


def test_configure_logging_applies_level_and_quiets_httpx(restore_levels) -> None:
    configure_logging(AppConfig(log_level="debug").log_level)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert any(
        isinstance(existing, SecretMaskingFilter)
        for handler in logging.getLogger().handlers
        for existing in handler.filters
    )
