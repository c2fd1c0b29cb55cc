from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from src.kie_studio.config import AppConfig
from src.kie_studio.generation.generation_service import GenerationServices
from src.kie_studio.tasks.task_models import LocalAsset
from tests.mocks.kie_gateway import MP4_BYTES, PNG_BYTES, FakeGateway


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("KIE_STUDIO_KIE_API_KEY", "KIE_STUDIO_GEMINI_API_KEY", "KIE_STUDIO_CALLBACK_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gateway(monkeypatch) -> FakeGateway:
    fake = FakeGateway()
    monkeypatch.setattr("httpx.AsyncClient", fake.client_factory)
    return fake


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        poll_interval_seconds=0.0,
        max_poll_attempts=120,
        status_rotation_seconds=60.0,
    )


@pytest.fixture
def services(config: AppConfig) -> GenerationServices:
    return GenerationServices.from_config(config)


@pytest.fixture
def make_asset(tmp_path: Path) -> Callable[..., LocalAsset]:
    def _make(
        name: str = "frame.png",
        content: bytes | None = None,
        content_type: str | None = None,
    ) -> LocalAsset:
        path = tmp_path / name
        if content is None:
            content = MP4_BYTES if name.endswith(".mp4") else PNG_BYTES
        path.write_bytes(content)
        return LocalAsset.from_path(path, content_type=content_type)

    return _make
