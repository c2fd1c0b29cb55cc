"""Kie.ai task protocol: staging uploads, task creation and polling."""

from .cancellation import CancelToken
from .task_client import KieTaskClient
from .task_models import (
    CharacterResult,
    GenerationResult,
    LocalAsset,
    ResultShape,
    TaskRecord,
    TaskState,
    UploadedAsset,
    VideoResult,
)
from .task_poller import TaskPoller, extract_media_url, extract_result_value
from .task_uploads import AssetUploader

__all__ = [
    "AssetUploader",
    "CancelToken",
    "CharacterResult",
    "GenerationResult",
    "KieTaskClient",
    "LocalAsset",
    "ResultShape",
    "TaskPoller",
    "TaskRecord",
    "TaskState",
    "UploadedAsset",
    "VideoResult",
    "extract_media_url",
    "extract_result_value",
]
