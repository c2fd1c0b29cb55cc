"""Hailuo 2.3 image-to-video feature (Pro and Standard)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..errors import ValidationError
from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, require_choice, validate_assets
from ..providers.providers_base import TaskInput
from ..providers.providers_hailuo import (
    Hailuo23ProAdapter,
    Hailuo23StandardAdapter,
    HailuoImageToVideoInput,
)
from ..tasks.task_models import LocalAsset

HAILUO_UPLOAD_PATH = "hailuo-input-image"
HAILUO_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=5000)
HAILUO_DURATIONS = ("6", "10")
HAILUO_RESOLUTIONS = ("768P", "1080P")


class HailuoTier(StrEnum):
    PRO = "pro"
    STANDARD = "standard"


@dataclass(slots=True, frozen=True, kw_only=True)
class HailuoRequest(PromptedRequest):
    tier: HailuoTier = HailuoTier.PRO
    image: tuple[LocalAsset, ...] = ()
    duration: str = "6"
    resolution: str = "768P"


class HailuoController(FeatureController[HailuoRequest]):
    feature = "hailuo23"
    request_type = HailuoRequest
    asset_field = "image"
    status_messages = (
        "Requesting a video from Hailuo 2.3...",
        "Generating realistic motion from your image and prompt...",
        "Handling complex movement, lighting changes and facial detail...",
        "This can take a few minutes, please wait!",
        "Rendering cinematic visuals and fine textures...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: HailuoRequest) -> RunPlan:
        tier = HailuoTier(require_choice(request.tier, tuple(HailuoTier), label="tier"))
        prompt = request.resolve_prompt(HAILUO_PROMPT_BOUNDS)
        require_choice(request.duration, HAILUO_DURATIONS, label="duration")
        require_choice(request.resolution, HAILUO_RESOLUTIONS, label="resolution")
        if request.duration == "10" and request.resolution == "1080P":
            raise ValidationError("10 second videos are not available at 1080P")
        image = validate_assets(
            request.image,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=1,
            max_count=1,
        )
        adapter = Hailuo23ProAdapter if tier is HailuoTier.PRO else Hailuo23StandardAdapter

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return HailuoImageToVideoInput(
                prompt=prompt,
                image_url=urls["image"][0],
                duration=request.duration,
                resolution=request.resolution,
            )

        return RunPlan(
            adapter_name=adapter.name,
            build_input=build_input,
            uploads=(UploadGroup("image", image, HAILUO_UPLOAD_PATH),),
        )
