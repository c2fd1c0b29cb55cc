"""Grok Imagine feature: text-to-video and image-to-video."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from ..errors import ValidationError
from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, require_choice, require_range, validate_assets
from ..providers.providers_base import TaskInput
from ..providers.providers_grok import (
    GrokImageToVideoInput,
    GrokImagineImageToVideoAdapter,
    GrokImagineTextToVideoAdapter,
    GrokMode,
    GrokTextToVideoInput,
)
from ..tasks.task_models import LocalAsset

logger = logging.getLogger(__name__)

GROK_UPLOAD_PATH = "grok-input-image"
GROK_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=5000)
GROK_MAX_INDEX = 5


class GrokVideoMode(StrEnum):
    TEXT_TO_VIDEO = "t2v"
    IMAGE_TO_VIDEO = "i2v"


@dataclass(slots=True, frozen=True, kw_only=True)
class GrokRequest(PromptedRequest):
    """Image-to-video takes an uploaded image or a Grok task id, not both."""

    video_mode: GrokVideoMode = GrokVideoMode.IMAGE_TO_VIDEO
    mode: GrokMode = GrokMode.NORMAL
    image: tuple[LocalAsset, ...] = ()
    task_id: str | None = None
    index: int = 0


class GrokController(FeatureController[GrokRequest]):
    feature = "grok_imagine"
    request_type = GrokRequest
    asset_field = "image"
    status_messages = (
        "Requesting a video from Grok Imagine...",
        "Turning your input into a video...",
        "Generating consistent motion with synchronized audio...",
        "This can take a few minutes, please wait!",
        "Polishing the clip and rendering...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: GrokRequest) -> RunPlan:
        video_mode = GrokVideoMode(
            require_choice(request.video_mode, tuple(GrokVideoMode), label="video mode")
        )
        mode = GrokMode(require_choice(request.mode, tuple(GrokMode), label="mode"))

        if video_mode is GrokVideoMode.TEXT_TO_VIDEO:
            prompt = request.resolve_prompt(GROK_PROMPT_BOUNDS)
            if request.image or request.task_id:
                raise ValidationError("Text-to-video does not accept an image or task id")
            if mode is GrokMode.SPICY:
                logger.warning("grok.mode.downgraded", extra={"video_mode": video_mode.value})
                mode = GrokMode.NORMAL
            return RunPlan(
                adapter_name=GrokImagineTextToVideoAdapter.name,
                build_input=lambda urls: GrokTextToVideoInput(prompt=prompt, mode=mode),
            )

        prompt = request.resolve_prompt(GROK_PROMPT_BOUNDS, required=False)
        task_id = (request.task_id or "").strip()
        if not request.image and not task_id:
            raise ValidationError(
                "Image-to-video needs an uploaded image or the task id of a Grok image"
            )
        if request.image and task_id:
            raise ValidationError("Provide either an image or a task id, not both")

        if task_id:
            index = require_range(request.index, minimum=0, maximum=GROK_MAX_INDEX, label="Index")
            return RunPlan(
                adapter_name=GrokImagineImageToVideoAdapter.name,
                build_input=lambda urls: GrokImageToVideoInput(
                    task_id=task_id, index=index, prompt=prompt, mode=mode
                ),
            )

        image = validate_assets(
            request.image,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=1,
            max_count=1,
        )
        if mode is GrokMode.SPICY:
            logger.warning("grok.mode.downgraded", extra={"video_mode": video_mode.value})
            mode = GrokMode.NORMAL

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return GrokImageToVideoInput(image_urls=tuple(urls["image"]), prompt=prompt, mode=mode)

        return RunPlan(
            adapter_name=GrokImagineImageToVideoAdapter.name,
            build_input=build_input,
            uploads=(UploadGroup("image", image, GROK_UPLOAD_PATH),),
        )
