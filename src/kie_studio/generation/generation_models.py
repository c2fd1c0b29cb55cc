"""Run state and upload plans used by feature controllers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Callable

from ..providers.providers_base import TaskInput
from ..tasks.task_models import GenerationResult, LocalAsset, UploadedAsset


class RunState(StrEnum):
    """Lifecycle of one user-initiated generation run."""

    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    SUBMITTING = "submitting"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in {RunState.SUCCEEDED, RunState.FAILED, RunState.CANCELLED}


@dataclass(slots=True, frozen=True)
class UploadGroup:
    """Assets staged under one upload path and fed to one input field."""

    key: str
    assets: tuple[LocalAsset, ...]
    upload_path: str


@dataclass(slots=True)
class RunPlan:
    """Validated recipe for a run: which adapter, what to upload, how to build input."""

    adapter_name: str
    build_input: Callable[[dict[str, list[str]]], TaskInput]
    uploads: tuple[UploadGroup, ...] = ()


@dataclass(slots=True)
class GenerationRun:
    """Client-side record of one run; discarded once its result is consumed."""

    feature: str
    state: RunState = RunState.IDLE
    adapter_name: str | None = None
    task_id: str | None = None
    uploaded: list[UploadedAsset] = field(default_factory=list)
    result: GenerationResult | None = None
    error: str | None = None
    status_message: str | None = None
    history: list[RunState] = field(default_factory=lambda: [RunState.IDLE])

    def transition(self, state: RunState) -> None:
        if self.state.is_terminal:
            raise RuntimeError(f"Run already finished with state {self.state}")
        self.state = state
        self.history.append(state)
