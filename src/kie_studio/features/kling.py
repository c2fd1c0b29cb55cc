"""Kling 2.6 feature: text-to-video (optional reference image) and image-to-video."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, require_choice, validate_assets
from ..providers.providers_base import TaskInput
from ..providers.providers_kling import (
    Kling26ImageToVideoAdapter,
    Kling26TextToVideoAdapter,
    KlingImageToVideoInput,
    KlingTextToVideoInput,
)
from ..tasks.task_models import LocalAsset

KLING_T2V_UPLOAD_PATH = "kling-t2v-input-image"
KLING_I2V_UPLOAD_PATH = "kling-i2v-input-image"
KLING_T2V_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=5000)
KLING_I2V_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=2500)
KLING_DURATIONS = ("5", "10")


class KlingMode(StrEnum):
    TEXT_TO_VIDEO = "t2v"
    IMAGE_TO_VIDEO = "i2v"


@dataclass(slots=True, frozen=True, kw_only=True)
class KlingRequest(PromptedRequest):
    mode: KlingMode = KlingMode.TEXT_TO_VIDEO
    image: tuple[LocalAsset, ...] = ()
    duration: str = "5"
    sound: bool = False


class KlingController(FeatureController[KlingRequest]):
    feature = "kling26"
    request_type = KlingRequest
    asset_field = "image"
    status_messages = (
        "Requesting a video from Kling 2.6...",
        "Turning your idea into a video...",
        "Processing data for a high-quality render...",
        "This can take a few minutes, please wait!",
        "Coordinating sound and camera movement...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: KlingRequest) -> RunPlan:
        mode = KlingMode(require_choice(request.mode, tuple(KlingMode), label="mode"))
        image_to_video = mode is KlingMode.IMAGE_TO_VIDEO
        prompt = request.resolve_prompt(
            KLING_I2V_PROMPT_BOUNDS if image_to_video else KLING_T2V_PROMPT_BOUNDS
        )
        require_choice(request.duration, KLING_DURATIONS, label="duration")
        image = validate_assets(
            request.image,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=1 if image_to_video else 0,
            max_count=1,
        )

        if image_to_video:
            def build_i2v(urls: dict[str, list[str]]) -> TaskInput:
                return KlingImageToVideoInput(
                    prompt=prompt,
                    image_urls=tuple(urls["image"]),
                    duration=request.duration,
                    sound=request.sound,
                )

            return RunPlan(
                adapter_name=Kling26ImageToVideoAdapter.name,
                build_input=build_i2v,
                uploads=(UploadGroup("image", image, KLING_I2V_UPLOAD_PATH),),
            )

        def build_t2v(urls: dict[str, list[str]]) -> TaskInput:
            return KlingTextToVideoInput(
                prompt=prompt,
                image_urls=tuple(urls.get("image", ())),
                duration=request.duration,
                sound=request.sound,
            )

        return RunPlan(
            adapter_name=Kling26TextToVideoAdapter.name,
            build_input=build_t2v,
            uploads=(UploadGroup("image", image, KLING_T2V_UPLOAD_PATH),),
        )
