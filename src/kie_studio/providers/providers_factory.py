"""Factory for provider adapters."""

from __future__ import annotations

from ..config import AppConfig
from ..tasks.task_client import KieTaskClient
from ..tasks.task_poller import TaskPoller
from .providers_base import ProviderAdapter
from .providers_grok import GrokImagineImageToVideoAdapter, GrokImagineTextToVideoAdapter
from .providers_hailuo import Hailuo23ProAdapter, Hailuo23StandardAdapter
from .providers_kling import Kling26ImageToVideoAdapter, Kling26TextToVideoAdapter
from .providers_seedance import SeedanceAdapter
from .providers_sora import (
    Sora2CharactersAdapter,
    Sora2ImageToVideoAdapter,
    Sora2ProImageToVideoAdapter,
    Sora2ProStoryboardAdapter,
    Sora2ProTextToVideoAdapter,
    Sora2TextToVideoAdapter,
    Sora2WatermarkRemoverAdapter,
)
from .providers_veo import Veo31Adapter
from .providers_wan import (
    Wan26ImageToVideoAdapter,
    Wan26TextToVideoAdapter,
    Wan26VideoToVideoAdapter,
)

ADAPTER_TYPES: dict[str, type[ProviderAdapter]] = {
    adapter.name: adapter
    for adapter in (
        SeedanceAdapter,
        Wan26TextToVideoAdapter,
        Wan26ImageToVideoAdapter,
        Wan26VideoToVideoAdapter,
        Kling26TextToVideoAdapter,
        Kling26ImageToVideoAdapter,
        GrokImagineTextToVideoAdapter,
        GrokImagineImageToVideoAdapter,
        Hailuo23ProAdapter,
        Hailuo23StandardAdapter,
        Sora2ProTextToVideoAdapter,
        Sora2ProImageToVideoAdapter,
        Sora2TextToVideoAdapter,
        Sora2ImageToVideoAdapter,
        Sora2WatermarkRemoverAdapter,
        Sora2CharactersAdapter,
        Sora2ProStoryboardAdapter,
        Veo31Adapter,
    )
}


def build_task_client(config: AppConfig) -> KieTaskClient:
    return KieTaskClient(
        api_base=config.kie_api_base_url,
        timeout_seconds=config.request_timeout_seconds,
        callback_url=config.callback_url,
    )


def build_poller(config: AppConfig, client: KieTaskClient) -> TaskPoller:
    return TaskPoller(
        client=client,
        poll_interval_seconds=config.poll_interval_seconds,
        max_attempts=config.max_poll_attempts,
    )


def create_adapter(name: str, *, client: KieTaskClient, poller: TaskPoller) -> ProviderAdapter:
    """Instantiate provider adapter by name."""
    adapter_type = ADAPTER_TYPES.get(name.lower())
    if adapter_type is None:
        raise ValueError(f"Unsupported provider adapter '{name}'")
    return adapter_type(client=client, poller=poller)
