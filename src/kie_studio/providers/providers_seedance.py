"""Seedance 1.5 Pro adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .providers_base import ProviderAdapter, TaskInput, url_list

SEEDANCE_MODEL_NAME = "bytedance/seedance-1.5-pro"


@dataclass(slots=True, frozen=True, kw_only=True)
class SeedanceInput(TaskInput):
    prompt: str
    aspect_ratio: str = "1:1"
    resolution: str = "720p"
    duration: str = "8"
    fixed_lens: bool = True
    generate_audio: bool = True
    input_urls: tuple[str, ...] = ()

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "input_urls": url_list(self.input_urls),
            "aspect_ratio": self.aspect_ratio,
            "resolution": self.resolution,
            "duration": self.duration,
            "fixed_lens": self.fixed_lens,
            "generate_audio": self.generate_audio,
        }


class SeedanceAdapter(ProviderAdapter):
    name = "seedance"
    model_name = SEEDANCE_MODEL_NAME
    input_type = SeedanceInput
