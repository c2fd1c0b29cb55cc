"""Feature controllers, one per user-facing generation feature."""

from __future__ import annotations

from ..generation.generation_service import FeatureController, GenerationServices
from .grok import GrokController
from .hailuo import HailuoController
from .kling import KlingController
from .seedance import SeedanceController
from .sora import (
    SoraCharactersController,
    SoraStoryboardController,
    SoraVideoController,
    SoraWatermarkRemoverController,
)
from .veo import VeoController
from .wan import WanController

FEATURES: dict[str, type[FeatureController]] = {
    controller.feature: controller
    for controller in (
        SeedanceController,
        WanController,
        KlingController,
        GrokController,
        HailuoController,
        SoraVideoController,
        SoraWatermarkRemoverController,
        SoraCharactersController,
        SoraStoryboardController,
        VeoController,
    )
}


def build_controllers(services: GenerationServices) -> dict[str, FeatureController]:
    """Instantiate one controller per feature sharing ``services``."""
    return {name: controller(services) for name, controller in FEATURES.items()}


__all__ = ["FEATURES", "build_controllers"]
