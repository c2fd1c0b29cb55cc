"""Kling 2.6 adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .providers_base import ProviderAdapter, TaskInput, url_list

KLING26_T2V_MODEL_NAME = "kling/2-6-text-to-video"
KLING26_I2V_MODEL_NAME = "kling-2.6/image-to-video"


@dataclass(slots=True, frozen=True, kw_only=True)
class KlingTextToVideoInput(TaskInput):
    prompt: str
    duration: str = "5"
    sound: bool = False
    # Optional reference image; text-to-video still accepts one.
    image_urls: tuple[str, ...] = ()

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image_urls": url_list(self.image_urls),
            "sound": self.sound,
            "duration": self.duration,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class KlingImageToVideoInput(TaskInput):
    prompt: str
    image_urls: tuple[str, ...]
    duration: str = "5"
    sound: bool = False

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image_urls": list(self.image_urls),
            "sound": self.sound,
            "duration": self.duration,
        }


class Kling26TextToVideoAdapter(ProviderAdapter):
    name = "kling26_t2v"
    model_name = KLING26_T2V_MODEL_NAME
    input_type = KlingTextToVideoInput


class Kling26ImageToVideoAdapter(ProviderAdapter):
    name = "kling26_i2v"
    model_name = KLING26_I2V_MODEL_NAME
    input_type = KlingImageToVideoInput
