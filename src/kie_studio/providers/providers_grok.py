"""Grok Imagine adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .providers_base import ProviderAdapter, TaskInput, url_list

GROK_IMAGINE_T2V_MODEL_NAME = "grok-imagine/text-to-video"
GROK_IMAGINE_I2V_MODEL_NAME = "grok-imagine/image-to-video"


class GrokMode(StrEnum):
    FUN = "fun"
    NORMAL = "normal"
    SPICY = "spicy"


@dataclass(slots=True, frozen=True, kw_only=True)
class GrokTextToVideoInput(TaskInput):
    prompt: str
    mode: GrokMode = GrokMode.NORMAL

    def to_input(self) -> dict[str, Any]:
        return {"prompt": self.prompt, "mode": self.mode.value}


@dataclass(slots=True, frozen=True, kw_only=True)
class GrokImageToVideoInput(TaskInput):
    """Either ``image_urls`` or a Grok ``task_id`` + ``index``, never both."""

    image_urls: tuple[str, ...] = ()
    task_id: str | None = None
    index: int | None = None
    prompt: str | None = None
    mode: GrokMode = GrokMode.NORMAL

    def to_input(self) -> dict[str, Any]:
        return {
            "image_urls": url_list(self.image_urls),
            "task_id": self.task_id,
            "index": self.index,
            "prompt": self.prompt,
            "mode": self.mode.value,
        }


class GrokImagineTextToVideoAdapter(ProviderAdapter):
    name = "grok_t2v"
    model_name = GROK_IMAGINE_T2V_MODEL_NAME
    input_type = GrokTextToVideoInput


class GrokImagineImageToVideoAdapter(ProviderAdapter):
    name = "grok_i2v"
    model_name = GROK_IMAGINE_I2V_MODEL_NAME
    input_type = GrokImageToVideoInput
