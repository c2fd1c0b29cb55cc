"""Run orchestration shared by every generation feature."""

from .generation_models import GenerationRun, RunPlan, RunState, UploadGroup
from .generation_service import ApiCredentials, FeatureController, GenerationServices
from .prompt_input import PromptBounds, PromptedRequest, PromptMode, resolve_prompt
from .status_ticker import StatusTicker

__all__ = [
    "ApiCredentials",
    "FeatureController",
    "GenerationRun",
    "GenerationServices",
    "PromptBounds",
    "PromptMode",
    "PromptedRequest",
    "RunPlan",
    "RunState",
    "StatusTicker",
    "UploadGroup",
    "resolve_prompt",
]
