"""Veo 3.1 feature.

Every constraint, including the reference-to-video model and aspect ratio
restriction, is checked before any image is staged.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ValidationError
from ..generation.generation_models import RunPlan, UploadGroup
from ..generation.generation_service import FeatureController
from ..generation.prompt_input import PromptBounds, PromptedRequest
from ..generation.validation import IMAGE, require_choice, require_range, validate_assets
from ..providers.providers_base import TaskInput
from ..providers.providers_veo import Veo31Adapter, VeoGenerationType, VeoInput, VeoModel
from ..tasks.task_models import LocalAsset

VEO_UPLOAD_PATH = "veo31-input-images"
VEO_PROMPT_BOUNDS = PromptBounds(min_length=1)
VEO_ASPECT_RATIOS = ("Auto", "16:9", "9:16")
VEO_SEED_MIN = 10000
VEO_SEED_MAX = 99999

# Allowed (min, max) image counts per generation type.
VEO_IMAGE_COUNTS: dict[VeoGenerationType, tuple[int, int]] = {
    VeoGenerationType.TEXT_2_VIDEO: (0, 0),
    VeoGenerationType.FIRST_AND_LAST_FRAMES_2_VIDEO: (1, 2),
    VeoGenerationType.REFERENCE_2_VIDEO: (1, 3),
}


@dataclass(slots=True, frozen=True, kw_only=True)
class VeoRequest(PromptedRequest):
    model: VeoModel = VeoModel.FAST
    generation_type: VeoGenerationType = VeoGenerationType.TEXT_2_VIDEO
    images: tuple[LocalAsset, ...] = ()
    aspect_ratio: str = "16:9"
    seed: int | None = None
    watermark: str | None = None
    enable_translation: bool = True


class VeoController(FeatureController[VeoRequest]):
    feature = "veo31"
    request_type = VeoRequest
    asset_field = "images"
    status_messages = (
        "Requesting a video from Veo 3.1...",
        "Turning your idea into realistic motion...",
        "Processing longer clips and multiple image references...",
        "This can take a few minutes, please wait!",
        "Generating native 1080p output with synchronized audio...",
        "Almost there! Finishing the video render...",
    )

    def plan(self, request: VeoRequest) -> RunPlan:
        prompt = request.resolve_prompt(VEO_PROMPT_BOUNDS)
        model = VeoModel(require_choice(request.model, tuple(VeoModel), label="model"))
        generation_type = VeoGenerationType(
            require_choice(request.generation_type, tuple(VeoGenerationType), label="generation type")
        )
        require_choice(request.aspect_ratio, VEO_ASPECT_RATIOS, label="aspect ratio")
        if generation_type is VeoGenerationType.REFERENCE_2_VIDEO and (
            model is not VeoModel.FAST or request.aspect_ratio != "16:9"
        ):
            raise ValidationError("Reference-to-video only supports the veo3_fast model at 16:9")
        if request.seed is not None:
            require_range(request.seed, minimum=VEO_SEED_MIN, maximum=VEO_SEED_MAX, label="Seed")

        min_count, max_count = VEO_IMAGE_COUNTS[generation_type]
        if max_count == 0 and request.images:
            raise ValidationError("Text-to-video does not accept reference images")
        images = validate_assets(
            request.images,
            kind=IMAGE,
            max_bytes=self.services.config.upload_max_bytes,
            min_count=min_count,
            max_count=max_count,
        )
        watermark = (request.watermark or "").strip() or None

        def build_input(urls: dict[str, list[str]]) -> TaskInput:
            return VeoInput(
                prompt=prompt,
                model=model,
                generation_type=generation_type,
                aspect_ratio=request.aspect_ratio,
                image_urls=tuple(urls.get("images", ())),
                seeds=request.seed,
                enable_translation=request.enable_translation,
                watermark=watermark,
            )

        return RunPlan(
            adapter_name=Veo31Adapter.name,
            build_input=build_input,
            uploads=(UploadGroup("images", images, VEO_UPLOAD_PATH),),
        )
