"""Sora 2 adapters: Pro/standard video, watermark remover, characters, storyboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_models import ResultShape
from .providers_base import ProviderAdapter, TaskInput, url_list

SORA2_PRO_T2V_MODEL_NAME = "sora-2-pro-text-to-video"
SORA2_PRO_I2V_MODEL_NAME = "sora-2-pro-image-to-video"
SORA2_T2V_MODEL_NAME = "sora-2-text-to-video"
SORA2_I2V_MODEL_NAME = "sora-2-image-to-video"
SORA2_WATERMARK_REMOVER_MODEL_NAME = "sora-watermark-remover"
SORA2_CHARACTERS_MODEL_NAME = "sora-2-characters"
SORA2_PRO_STORYBOARD_MODEL_NAME = "sora-2-pro-storyboard"


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraTextToVideoInput(TaskInput):
    prompt: str
    aspect_ratio: str = "landscape"
    n_frames: str = "10"
    size: str = "standard"
    remove_watermark: bool = True

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "aspect_ratio": self.aspect_ratio,
            "n_frames": self.n_frames,
            "size": self.size,
            "remove_watermark": self.remove_watermark,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraImageToVideoInput(TaskInput):
    prompt: str
    image_urls: tuple[str, ...]
    aspect_ratio: str = "landscape"
    n_frames: str = "10"
    size: str = "standard"
    remove_watermark: bool = True

    def to_input(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image_urls": list(self.image_urls),
            "aspect_ratio": self.aspect_ratio,
            "n_frames": self.n_frames,
            "size": self.size,
            "remove_watermark": self.remove_watermark,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraWatermarkRemoverInput(TaskInput):
    video_url: str

    def to_input(self) -> dict[str, Any]:
        return {"video_url": self.video_url}


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraCharactersInput(TaskInput):
    character_file_url: tuple[str, ...]
    character_prompt: str | None = None
    safety_instruction: str | None = None

    def to_input(self) -> dict[str, Any]:
        return {
            "character_file_url": list(self.character_file_url),
            "character_prompt": self.character_prompt,
            "safety_instruction": self.safety_instruction,
        }


@dataclass(slots=True, frozen=True)
class StoryboardShot:
    scene: str
    duration: float

    def to_wire(self) -> dict[str, Any]:
        return {"Scene": self.scene, "duration": self.duration}


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraStoryboardInput(TaskInput):
    n_frames: str
    shots: tuple[StoryboardShot, ...]
    aspect_ratio: str = "landscape"
    image_urls: tuple[str, ...] = ()

    def to_input(self) -> dict[str, Any]:
        return {
            "n_frames": self.n_frames,
            "image_urls": url_list(self.image_urls),
            "aspect_ratio": self.aspect_ratio,
            "shots": [shot.to_wire() for shot in self.shots],
        }


class Sora2ProTextToVideoAdapter(ProviderAdapter):
    name = "sora2_pro_t2v"
    model_name = SORA2_PRO_T2V_MODEL_NAME
    input_type = SoraTextToVideoInput


class Sora2ProImageToVideoAdapter(ProviderAdapter):
    name = "sora2_pro_i2v"
    model_name = SORA2_PRO_I2V_MODEL_NAME
    input_type = SoraImageToVideoInput


class Sora2TextToVideoAdapter(ProviderAdapter):
    name = "sora2_t2v"
    model_name = SORA2_T2V_MODEL_NAME
    input_type = SoraTextToVideoInput


class Sora2ImageToVideoAdapter(ProviderAdapter):
    name = "sora2_i2v"
    model_name = SORA2_I2V_MODEL_NAME
    input_type = SoraImageToVideoInput


class Sora2WatermarkRemoverAdapter(ProviderAdapter):
    name = "sora2_watermark_remover"
    model_name = SORA2_WATERMARK_REMOVER_MODEL_NAME
    input_type = SoraWatermarkRemoverInput


class Sora2CharactersAdapter(ProviderAdapter):
    name = "sora2_characters"
    model_name = SORA2_CHARACTERS_MODEL_NAME
    input_type = SoraCharactersInput
    result_shape = ResultShape.CHARACTER


class Sora2ProStoryboardAdapter(ProviderAdapter):
    name = "sora2_pro_storyboard"
    model_name = SORA2_PRO_STORYBOARD_MODEL_NAME
    input_type = SoraStoryboardInput
