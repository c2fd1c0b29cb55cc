"""Wan 2.6 feature: text, image and video to video."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..errors import ValidationError
from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, VIDEO, require_choice, validate_assets
from ..providers.providers_base import TaskInput
from ..providers.providers_wan import (
    Wan26ImageToVideoAdapter,
    Wan26TextToVideoAdapter,
    Wan26VideoToVideoAdapter,
    WanImageToVideoInput,
    WanTextToVideoInput,
    WanVideoToVideoInput,
)
from ..tasks.task_models import LocalAsset

WAN_IMAGE_UPLOAD_PATH = "wan26-input-images"
WAN_VIDEO_UPLOAD_PATH = "wan26-input-videos"
WAN_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=5000)
WAN_RESOLUTIONS = ("720p", "1080p")
WAN_DURATIONS = ("5", "10", "15")
WAN_V2V_DURATIONS = ("5", "10")
WAN_MAX_REFERENCES = 3


class WanMode(StrEnum):
    TEXT_TO_VIDEO = "t2v"
    IMAGE_TO_VIDEO = "i2v"
    VIDEO_TO_VIDEO = "v2v"


@dataclass(slots=True, frozen=True, kw_only=True)
class WanRequest(PromptedRequest):
    mode: WanMode = WanMode.TEXT_TO_VIDEO
    # Images for i2v, videos for v2v.
    references: tuple[LocalAsset, ...] = ()
    duration: str = "5"
    resolution: str = "1080p"
    multi_shots: bool = False


class WanController(FeatureController[WanRequest]):
    feature = "wan26"
    request_type = WanRequest
    asset_field = "references"
    status_messages = (
        "Requesting a video from Wan 2.6...",
        "Turning your idea into a video...",
        "Processing data for an ultra high resolution render...",
        "This can take a few minutes, please wait!",
        "Arranging scene transitions and shots...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: WanRequest) -> RunPlan:
        mode = WanMode(require_choice(request.mode, tuple(WanMode), label="mode"))
        prompt = request.resolve_prompt(WAN_PROMPT_BOUNDS)
        durations = WAN_V2V_DURATIONS if mode is WanMode.VIDEO_TO_VIDEO else WAN_DURATIONS
        require_choice(request.duration, durations, label="duration")
        require_choice(request.resolution, WAN_RESOLUTIONS, label="resolution")
        options = {
            "prompt": prompt,
            "duration": request.duration,
            "resolution": request.resolution,
            "multi_shots": request.multi_shots,
        }

        if mode is WanMode.TEXT_TO_VIDEO:
            if request.references:
                raise ValidationError("Text-to-video does not accept reference files")
            return RunPlan(
                adapter_name=Wan26TextToVideoAdapter.name,
                build_input=lambda urls: WanTextToVideoInput(**options),
            )

        max_bytes = self.services.config.upload_max_bytes
        if mode is WanMode.IMAGE_TO_VIDEO:
            images = validate_assets(
                request.references,
                kind=IMAGE,
                max_bytes=max_bytes,
                min_count=1,
                max_count=WAN_MAX_REFERENCES,
            )

            def build_i2v(urls: dict[str, list[str]]) -> TaskInput:
                return WanImageToVideoInput(image_urls=tuple(urls["references"]), **options)

            return RunPlan(
                adapter_name=Wan26ImageToVideoAdapter.name,
                build_input=build_i2v,
                uploads=(UploadGroup("references", images, WAN_IMAGE_UPLOAD_PATH),),
            )

        videos = validate_assets(
            request.references,
            kind=VIDEO,
            max_bytes=max_bytes,
            min_count=1,
            max_count=WAN_MAX_REFERENCES,
        )

        def build_v2v(urls: dict[str, list[str]]) -> TaskInput:
            return WanVideoToVideoInput(video_urls=tuple(urls["references"]), **options)

        return RunPlan(
            adapter_name=Wan26VideoToVideoAdapter.name,
            build_input=build_v2v,
            uploads=(UploadGroup("references", videos, WAN_VIDEO_UPLOAD_PATH),),
        )
