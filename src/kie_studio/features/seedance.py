"""Seedance 1.5 Pro text/image-to-video feature."""

from __future__ import annotations

from dataclasses import dataclass

from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, require_choice, validate_assets
from ..providers.providers_seedance import SeedanceAdapter, SeedanceInput
from ..tasks.task_models import LocalAsset

SEEDANCE_UPLOAD_PATH = "seedance-input-images"
SEEDANCE_PROMPT_BOUNDS = PromptBounds(min_length=3, max_length=2500)
SEEDANCE_ASPECT_RATIOS = ("1:1", "21:9", "4:3", "3:4", "16:9", "9:16")
SEEDANCE_RESOLUTIONS = ("480p", "720p")
SEEDANCE_DURATIONS = ("4", "8", "12")
SEEDANCE_MAX_IMAGES = 2


@dataclass(slots=True, frozen=True, kw_only=True)
class SeedanceRequest(PromptedRequest):
    images: tuple[LocalAsset, ...] = ()
    aspect_ratio: str = "1:1"
    resolution: str = "720p"
    duration: str = "8"
    fixed_lens: bool = True
    generate_audio: bool = True


class SeedanceController(FeatureController[SeedanceRequest]):
    feature = "seedance"
    request_type = SeedanceRequest
    asset_field = "images"
    status_messages = (
        "Requesting a video from Seedance...",
        "Turning your idea into a video...",
        "Processing data for a high-quality render...",
        "This can take a few minutes, please wait!",
        "Applying sound effects and lens adjustments...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: SeedanceRequest) -> RunPlan:
        prompt = request.resolve_prompt(SEEDANCE_PROMPT_BOUNDS)
        require_choice(request.aspect_ratio, SEEDANCE_ASPECT_RATIOS, label="aspect ratio")
        require_choice(request.resolution, SEEDANCE_RESOLUTIONS, label="resolution")
        require_choice(request.duration, SEEDANCE_DURATIONS, label="duration")
        images = validate_assets(
            request.images,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            max_count=SEEDANCE_MAX_IMAGES,
        )

        def build_input(urls: dict[str, list[str]]) -> SeedanceInput:
            return SeedanceInput(
                prompt=prompt,
                input_urls=tuple(urls.get("images", ())),
                aspect_ratio=request.aspect_ratio,
                resolution=request.resolution,
                duration=request.duration,
                fixed_lens=request.fixed_lens,
                generate_audio=request.generate_audio,
            )

        return RunPlan(
            adapter_name=SeedanceAdapter.name,
            build_input=build_input,
            uploads=(UploadGroup("images", images, SEEDANCE_UPLOAD_PATH),),
        )
