"""Hailuo 2.3 image-to-video adapters (Pro and Standard)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .providers_base import ProviderAdapter, TaskInput

HAILUO23_I2V_PRO_MODEL_NAME = "hailuo/2-3-image-to-video-pro"
HAILUO23_I2V_STANDARD_MODEL_NAME = "hailuo/2-3-image-to-video-standard"


@dataclass(slots=True, frozen=True, kw_only=True)
class HailuoImageToVideoInput(TaskInput):
    prompt: str
    image_url: str
    duration: str = "6"
    resolution: str = "768P"

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image_url": self.image_url,
            "duration": self.duration,
            "resolution": self.resolution,
        }


class Hailuo23ProAdapter(ProviderAdapter):
    name = "hailuo23_pro"
    model_name = HAILUO23_I2V_PRO_MODEL_NAME
    input_type = HailuoImageToVideoInput


class Hailuo23StandardAdapter(ProviderAdapter):
    name = "hailuo23_standard"
    model_name = HAILUO23_I2V_STANDARD_MODEL_NAME
    input_type = HailuoImageToVideoInput
