"""Fixed-interval polling of Kie.ai tasks and result extraction.

Every adapter ends up here: a task is submitted with a model-specific
payload and then observed through ``/jobs/recordInfo`` until it reaches a
terminal state.  The adapter's result shape picks the extractor: media
models must return a ``resultUrls`` list, the character model a
``resultObject.character_id`` envelope.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..errors import MalformedResultError, RemoteFailureError, TaskTimeoutError
from .cancellation import CancelToken, cancellable_sleep
from .task_client import KieTaskClient
from .task_models import (
    CharacterResult,
    GenerationResult,
    ResultShape,
    TaskRecord,
    TaskState,
    VideoResult,
)

logger = logging.getLogger(__name__)


def parse_result_json(result_json: str | None) -> dict[str, Any]:
    if not result_json:
        raise MalformedResultError("Kie.ai task succeeded but the result is missing")
    try:
        parsed = json.loads(result_json)
    except (TypeError, ValueError) as exc:
        raise MalformedResultError("Kie.ai task succeeded but the result is missing") from exc
    if not isinstance(parsed, dict):
        raise MalformedResultError("Kie.ai task succeeded but the result is missing")
    return parsed


def _first_url(result: dict[str, Any]) -> str | None:
    urls = result.get("resultUrls")
    if isinstance(urls, list) and urls and urls[0]:
        return str(urls[0])
    return None


def _character_id(result: dict[str, Any]) -> str | None:
    obj = result.get("resultObject")
    if isinstance(obj, dict) and obj.get("character_id"):
        return str(obj["character_id"])
    return None


def extract_result_value(result_json: str | None) -> str:
    """Return the first result URL, else the character id.

    URL lists are checked before structured objects; a payload carrying
    neither raises :class:`MalformedResultError`.
    """
    result = parse_result_json(result_json)
    url = _first_url(result)
    if url is not None:
        return url
    character_id = _character_id(result)
    if character_id is not None:
        return character_id
    raise MalformedResultError(
        "Kie.ai task succeeded but the result shape is unrecognized "
        "(no resultUrls or resultObject.character_id)"
    )


def extract_media_url(result_json: str | None) -> str:
    url = _first_url(parse_result_json(result_json))
    if url is None:
        raise MalformedResultError("Kie.ai task succeeded but no result URL was returned")
    return url


def extract_character(result_json: str | None) -> CharacterResult:
    result = parse_result_json(result_json)
    character_id = _character_id(result)
    if character_id is None:
        raise MalformedResultError("Kie.ai task succeeded but no character id was returned")
    return CharacterResult(id=character_id, raw_json=result_json or "")


def build_result(record: TaskRecord, shape: ResultShape) -> GenerationResult:
    """Wrap a successful record into the variant declared by ``shape``."""
    if shape is ResultShape.CHARACTER:
        return extract_character(record.result_json)
    return VideoResult(url=extract_media_url(record.result_json))


@dataclass(slots=True)
class TaskPoller:
    """Observe a task every ``poll_interval_seconds`` until it settles."""

    client: KieTaskClient
    poll_interval_seconds: float = 5.0
    max_attempts: int = 120
    log: logging.Logger = field(default_factory=lambda: logger)

    async def wait_for_completion(
        self,
        api_key: str | None,
        task_id: str,
        *,
        cancel: CancelToken | None = None,
    ) -> TaskRecord:
        """Return the first successful record; raise on failure or timeout."""
        for attempt in range(1, self.max_attempts + 1):
            if cancel is not None:
                cancel.raise_if_cancelled()

            record = await self.client.get_task_status(api_key, task_id)
            if record.state is TaskState.SUCCESS:
                self.log.info(
                    "kie.poll.success",
                    extra={"task_id": task_id, "attempt": attempt, "cost_time": record.cost_time},
                )
                return record
            if record.state is TaskState.FAIL:
                message = record.fail_msg or "Unknown error"
                self.log.warning(
                    "kie.poll.failed",
                    extra={"task_id": task_id, "attempt": attempt, "fail_code": record.fail_code},
                )
                raise RemoteFailureError(
                    f"Kie.ai task failed: {message}",
                    fail_msg=record.fail_msg,
                    fail_code=record.fail_code,
                )

            self.log.debug("kie.poll.waiting", extra={"task_id": task_id, "attempt": attempt})
            if attempt < self.max_attempts:
                await cancellable_sleep(self.poll_interval_seconds, cancel)

        self.log.warning(
            "kie.poll.timeout", extra={"task_id": task_id, "attempts": self.max_attempts}
        )
        raise TaskTimeoutError(
            f"Kie.ai task {task_id} timed out after {self.max_attempts} status checks",
            task_id=task_id,
            attempts=self.max_attempts,
        )

    async def poll(
        self,
        api_key: str | None,
        task_id: str,
        *,
        shape: ResultShape = ResultShape.MEDIA_URL,
        cancel: CancelToken | None = None,
    ) -> GenerationResult:
        record = await self.wait_for_completion(api_key, task_id, cancel=cancel)
        return build_result(record, shape)
