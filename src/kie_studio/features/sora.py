"""Sora 2 features: video generation, watermark removal, characters and storyboards."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from ..errors import ValidationError
from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, VIDEO, require_choice, validate_assets
from ..providers.providers_base import ProviderAdapter, TaskInput
from ..providers.providers_sora import (
    Sora2CharactersAdapter,
    Sora2ImageToVideoAdapter,
    Sora2ProImageToVideoAdapter,
    Sora2ProStoryboardAdapter,
    Sora2ProTextToVideoAdapter,
    Sora2TextToVideoAdapter,
    Sora2WatermarkRemoverAdapter,
    SoraCharactersInput,
    SoraImageToVideoInput,
    SoraStoryboardInput,
    SoraTextToVideoInput,
    SoraWatermarkRemoverInput,
    StoryboardShot,
)
from ..tasks.task_models import LocalAsset

SORA_IMAGE_UPLOAD_PATH = "sora2-input-image"
SORA_CHARACTER_UPLOAD_PATH = "sora2-character-video"
SORA_STORYBOARD_UPLOAD_PATH = "sora2-storyboard-image"
SORA_PROMPT_BOUNDS = PromptBounds(min_length=1, max_length=10000)
SORA_ASPECT_RATIOS = ("portrait", "landscape")
SORA_N_FRAMES = ("10", "15")
SORA_SIZES = ("standard", "high")
SORA_STORYBOARD_N_FRAMES = ("10", "15", "25")
SORA_SCENE_MAX_LENGTH = 5000
SORA_SHARE_URL_PREFIX = "https://sora.chatgpt.com/"
SORA_SHARE_URL_MAX_LENGTH = 500


class SoraMode(StrEnum):
    TEXT_TO_VIDEO = "t2v"
    IMAGE_TO_VIDEO = "i2v"
    TEXT_TO_VIDEO_STANDARD = "t2v_alt"
    IMAGE_TO_VIDEO_STANDARD = "i2v_alt"

    @property
    def is_pro(self) -> bool:
        return self in {SoraMode.TEXT_TO_VIDEO, SoraMode.IMAGE_TO_VIDEO}

    @property
    def needs_image(self) -> bool:
        return self in {SoraMode.IMAGE_TO_VIDEO, SoraMode.IMAGE_TO_VIDEO_STANDARD}


_SORA_VIDEO_ADAPTERS: dict[SoraMode, type[ProviderAdapter]] = {
    SoraMode.TEXT_TO_VIDEO: Sora2ProTextToVideoAdapter,
    SoraMode.IMAGE_TO_VIDEO: Sora2ProImageToVideoAdapter,
    SoraMode.TEXT_TO_VIDEO_STANDARD: Sora2TextToVideoAdapter,
    SoraMode.IMAGE_TO_VIDEO_STANDARD: Sora2ImageToVideoAdapter,
}


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraVideoRequest(PromptedRequest):
    """``size`` defaults to ``high`` for Pro modes and ``standard`` otherwise."""

    mode: SoraMode = SoraMode.TEXT_TO_VIDEO
    image: tuple[LocalAsset, ...] = ()
    aspect_ratio: str = "landscape"
    n_frames: str = "10"
    size: str | None = None
    remove_watermark: bool = True


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraWatermarkRemoverRequest:
    video_url: str = ""


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraCharactersRequest:
    video: tuple[LocalAsset, ...] = ()
    character_prompt: str | None = None
    safety_instruction: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class SoraStoryboardRequest:
    shots: tuple[StoryboardShot, ...] = ()
    n_frames: str = "15"
    aspect_ratio: str = "landscape"
    image: tuple[LocalAsset, ...] = ()


class SoraVideoController(FeatureController[SoraVideoRequest]):
    feature = "sora2"
    request_type = SoraVideoRequest
    asset_field = "image"
    status_messages = (
        "Requesting a video from Sora 2...",
        "Composing scenes from your prompt...",
        "This can take a few minutes, please wait!",
        "Rendering the video...",
    )

    def plan(self, request: SoraVideoRequest) -> RunPlan:
        mode = SoraMode(require_choice(request.mode, tuple(SoraMode), label="mode"))
        prompt = request.resolve_prompt(SORA_PROMPT_BOUNDS)
        require_choice(request.aspect_ratio, SORA_ASPECT_RATIOS, label="aspect ratio")
        require_choice(request.n_frames, SORA_N_FRAMES, label="n_frames")
        size = request.size or ("high" if mode.is_pro else "standard")
        require_choice(size, SORA_SIZES, label="size")
        if size == "high" and not mode.is_pro:
            raise ValidationError("High size is only available for Sora 2 Pro")
        if not mode.needs_image and request.image:
            raise ValidationError("Text-to-video does not accept an input image")
        options = {
            "prompt": prompt,
            "aspect_ratio": request.aspect_ratio,
            "n_frames": request.n_frames,
            "size": size,
            "remove_watermark": request.remove_watermark,
        }
        adapter = _SORA_VIDEO_ADAPTERS[mode]

        if not mode.needs_image:
            return RunPlan(
                adapter_name=adapter.name,
                build_input=lambda urls: SoraTextToVideoInput(**options),
            )

        image = validate_assets(
            request.image,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=1,
            max_count=1,
        )

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return SoraImageToVideoInput(image_urls=tuple(urls["image"]), **options)

        return RunPlan(
            adapter_name=adapter.name,
            build_input=build_input,
            uploads=(UploadGroup("image", image, SORA_IMAGE_UPLOAD_PATH),),
        )


class SoraWatermarkRemoverController(FeatureController[SoraWatermarkRemoverRequest]):
    feature = "sora2_watermark_remover"
    request_type = SoraWatermarkRemoverRequest
    status_messages = (
        "Removing the watermark from your Sora 2 video...",
        "Locating the watermark area...",
        "Rendering a clean copy of the video...",
        "Watermark removal is almost done...",
    )

    def plan(self, request: SoraWatermarkRemoverRequest) -> RunPlan:
        video_url = request.video_url.strip()
        if not video_url:
            raise ValidationError("Please enter the Sora 2 video URL to clean up")
        if not video_url.startswith(SORA_SHARE_URL_PREFIX) or len(video_url) > SORA_SHARE_URL_MAX_LENGTH:
            raise ValidationError(
                f"Please enter a valid Sora 2 video URL (starting with {SORA_SHARE_URL_PREFIX}, "
                f"at most {SORA_SHARE_URL_MAX_LENGTH} characters)"
            )
        return RunPlan(
            adapter_name=Sora2WatermarkRemoverAdapter.name,
            build_input=lambda urls: SoraWatermarkRemoverInput(video_url=video_url),
        )


class SoraCharactersController(FeatureController[SoraCharactersRequest]):
    feature = "sora2_characters"
    request_type = SoraCharactersRequest
    asset_field = "video"
    status_messages = (
        "Creating a Sora 2 character...",
        "Extracting character features from the video...",
        "Building the character definition...",
        "Almost there! The character id is on its way...",
    )

    def plan(self, request: SoraCharactersRequest) -> RunPlan:
        video = validate_assets(
            request.video,
            kind=VIDEO,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=1,
            max_count=1,
        )
        character_prompt = (request.character_prompt or "").strip() or None
        safety_instruction = (request.safety_instruction or "").strip() or None

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return SoraCharactersInput(
                character_file_url=tuple(urls["video"]),
                character_prompt=character_prompt,
                safety_instruction=safety_instruction,
            )

        return RunPlan(
            adapter_name=Sora2CharactersAdapter.name,
            build_input=build_input,
            uploads=(UploadGroup("video", video, SORA_CHARACTER_UPLOAD_PATH),),
        )


def validate_storyboard(shots: tuple[StoryboardShot, ...], n_frames: str) -> None:
    """Check shot contents and that their durations add up to ``n_frames``."""
    if not shots:
        raise ValidationError("A storyboard needs at least one shot")
    for position, shot in enumerate(shots, start=1):
        if not shot.scene.strip():
            raise ValidationError(f"Shot {position} needs a scene description")
        if len(shot.scene) > SORA_SCENE_MAX_LENGTH:
            raise ValidationError(
                f"Shot {position} scene exceeds {SORA_SCENE_MAX_LENGTH} characters"
            )
        if shot.duration <= 0:
            raise ValidationError(f"Shot {position} duration must be greater than 0")
    total = sum(shot.duration for shot in shots)
    if not math.isclose(total, int(n_frames)):
        raise ValidationError(
            f"Shot durations add up to {total:g}s but the video is {n_frames}s long"
        )


class SoraStoryboardController(FeatureController[SoraStoryboardRequest]):
    feature = "sora2_storyboard"
    request_type = SoraStoryboardRequest
    asset_field = "image"
    status_messages = (
        "Creating a Sora 2 Pro storyboard...",
        "Planning the flow of the scene sequence...",
        "Rendering each shot for its duration...",
        "This can take a while, please wait!",
        "Stitching the storyboard clips together...",
        "Almost there! The storyboard video is nearly done...",
    )

    def plan(self, request: SoraStoryboardRequest) -> RunPlan:
        require_choice(request.n_frames, SORA_STORYBOARD_N_FRAMES, label="n_frames")
        require_choice(request.aspect_ratio, SORA_ASPECT_RATIOS, label="aspect ratio")
        shots = tuple(request.shots)
        validate_storyboard(shots, request.n_frames)
        image = validate_assets(
            request.image,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            max_count=1,
        )

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return SoraStoryboardInput(
                n_frames=request.n_frames,
                shots=shots,
                aspect_ratio=request.aspect_ratio,
                image_urls=tuple(urls.get("image", ())),
            )

        return RunPlan(
            adapter_name=Sora2ProStoryboardAdapter.name,
            build_input=build_input,
            uploads=(UploadGroup("image", image, SORA_STORYBOARD_UPLOAD_PATH),),
        )
