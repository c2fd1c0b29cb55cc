"""Wan 2.6 adapters: text, image and video to video."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .providers_base import ProviderAdapter, TaskInput

WAN26_T2V_MODEL_NAME = "wan/2-6-text-to-video"
WAN26_I2V_MODEL_NAME = "wan/2-6-image-to-video"
WAN26_V2V_MODEL_NAME = "wan/2-6-video-to-video"


@dataclass(slots=True, frozen=True, kw_only=True)
class WanTextToVideoInput(TaskInput):
    prompt: str
    duration: str = "5"
    resolution: str = "1080p"
    multi_shots: bool = False

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "duration": self.duration,
            "resolution": self.resolution,
            "multi_shots": self.multi_shots,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class WanImageToVideoInput(TaskInput):
    prompt: str
    image_urls: tuple[str, ...]
    duration: str = "5"
    resolution: str = "1080p"
    multi_shots: bool = False

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image_urls": list(self.image_urls),
            "duration": self.duration,
            "resolution": self.resolution,
            "multi_shots": self.multi_shots,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class WanVideoToVideoInput(TaskInput):
    prompt: str
    video_urls: tuple[str, ...]
    duration: str = "5"
    resolution: str = "1080p"
    multi_shots: bool = False

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "video_urls": list(self.video_urls),
            "duration": self.duration,
            "resolution": self.resolution,
            "multi_shots": self.multi_shots,
        }


class Wan26TextToVideoAdapter(ProviderAdapter):
    name = "wan26_t2v"
    model_name = WAN26_T2V_MODEL_NAME
    input_type = WanTextToVideoInput


class Wan26ImageToVideoAdapter(ProviderAdapter):
    name = "wan26_i2v"
    model_name = WAN26_I2V_MODEL_NAME
    input_type = WanImageToVideoInput


class Wan26VideoToVideoAdapter(ProviderAdapter):
    name = "wan26_v2v"
    model_name = WAN26_V2V_MODEL_NAME
    input_type = WanVideoToVideoInput
