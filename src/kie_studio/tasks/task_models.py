"""Data structures shared by the task submitter, poller and uploader."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Mapping


class TaskState(StrEnum):
    """Remote task states reported by ``/jobs/recordInfo``."""

    WAITING = "waiting"
    SUCCESS = "success"
    FAIL = "fail"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskState.WAITING


class ResultShape(StrEnum):
    """Kind of artefact an adapter expects from a successful task."""

    MEDIA_URL = "media_url"
    CHARACTER = "character"


@dataclass(slots=True, frozen=True)
class TaskRecord:
    """Snapshot of a remote task as observed by one status query."""

    task_id: str
    state: TaskState
    model: str | None = None
    param: str | None = None
    result_json: str | None = None
    fail_code: str | None = None
    fail_msg: str | None = None
    create_time: int | None = None
    complete_time: int | None = None
    cost_time: int | None = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], *, task_id: str) -> "TaskRecord":
        raw_state = str(data.get("state") or TaskState.WAITING.value).lower()
        try:
            state = TaskState(raw_state)
        except ValueError:
            # Intermediate states ("queuing", "generating") are still non-terminal.
            state = TaskState.WAITING
        return cls(
            task_id=str(data.get("taskId") or task_id),
            state=state,
            model=data.get("model"),
            param=data.get("param"),
            result_json=data.get("resultJson"),
            fail_code=_optional_str(data.get("failCode")),
            fail_msg=data.get("failMsg"),
            create_time=data.get("createTime"),
            complete_time=data.get("completeTime"),
            cost_time=data.get("costTime"),
        )


@dataclass(slots=True, frozen=True)
class VideoResult:
    """Playable media URL produced by a generation task."""

    url: str
    type: str = field(default="video", init=False)


@dataclass(slots=True, frozen=True)
class CharacterResult:
    """Character identifier produced by the Sora 2 characters model."""

    id: str
    raw_json: str
    type: str = field(default="characterId", init=False)


GenerationResult = VideoResult | CharacterResult


@dataclass(slots=True, frozen=True)
class LocalAsset:
    """Local binary file that has to be staged before submission."""

    path: Path
    content_type: str
    filename: str

    @classmethod
    def from_path(
        cls,
        path: Path | str,
        *,
        content_type: str | None = None,
        filename: str | None = None,
    ) -> "LocalAsset":
        resolved = Path(path)
        mime = content_type or mimetypes.guess_type(resolved.name)[0] or "application/octet-stream"
        return cls(path=resolved, content_type=mime, filename=filename or resolved.name)

    def size_bytes(self) -> int:
        return self.path.stat().st_size


@dataclass(slots=True, frozen=True)
class UploadedAsset:
    """Asset staged on the upload endpoint, valid until ``expires_at``."""

    source: LocalAsset
    upload_path: str
    file_url: str
    file_id: str | None = None
    download_url: str | None = None
    expires_at: str | None = None


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
