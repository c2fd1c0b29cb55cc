"""Veo 3.1 adapter.

Veo is served from ``/veo/generate`` with a flat camelCase body instead of
the ``{model, input}`` envelope; status polling is the shared one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..tasks.cancellation import CancelToken
from .providers_base import ProviderAdapter, TaskInput, url_list

VEO31_QUALITY_MODEL_NAME = "veo3"
VEO31_FAST_MODEL_NAME = "veo3_fast"


class VeoModel(StrEnum):
    QUALITY = VEO31_QUALITY_MODEL_NAME
    FAST = VEO31_FAST_MODEL_NAME


class VeoGenerationType(StrEnum):
    TEXT_2_VIDEO = "TEXT_2_VIDEO"
    FIRST_AND_LAST_FRAMES_2_VIDEO = "FIRST_AND_LAST_FRAMES_2_VIDEO"
    REFERENCE_2_VIDEO = "REFERENCE_2_VIDEO"


@dataclass(slots=True, frozen=True, kw_only=True)
class VeoInput(TaskInput):
    prompt: str
    model: VeoModel = VeoModel.FAST
    generation_type: VeoGenerationType = VeoGenerationType.TEXT_2_VIDEO
    aspect_ratio: str = "16:9"
    image_urls: tuple[str, ...] = ()
    seeds: int | None = None
    enable_translation: bool = True
    watermark: str | None = None

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "imageUrls": url_list(self.image_urls),
            "model": self.model.value,
            "generationType": self.generation_type.value,
            "aspectRatio": self.aspect_ratio,
            "seeds": self.seeds,
            "enableTranslation": self.enable_translation,
            "watermark": self.watermark,
            # Deprecated upstream; always sent as false.
            "enableFallback": False,
        }


class Veo31Adapter(ProviderAdapter):
    name = "veo31"
    model_name = "veo3.1"
    input_type = VeoInput

    async def submit(
        self,
        api_key: str | None,
        task_input: TaskInput,
        *,
        cancel: CancelToken | None = None,
    ) -> str:
        self._check_input(task_input)
        return await self.client.create_veo_task(api_key, task_input.to_input(), cancel=cancel)
