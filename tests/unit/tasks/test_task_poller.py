from __future__ import annotations

import asyncio
import json

import pytest

from src.kie_studio.errors import (
    MalformedResultError,
    RemoteFailureError,
    RemoteRejectionError,
    RunCancelledError,
    TaskTimeoutError,
)
from src.kie_studio.tasks.cancellation import CancelToken
from src.kie_studio.tasks.task_client import KieTaskClient
from src.kie_studio.tasks.task_models import CharacterResult, ResultShape, VideoResult
from src.kie_studio.tasks.task_poller import TaskPoller, extract_character, extract_result_value
from tests.mocks.kie_gateway import (
    RECORD_INFO,
    failed,
    record,
    rejected,
    succeeded_with_character,
    succeeded_with_urls,
    waiting,
)


def build_poller(max_attempts: int = 120) -> TaskPoller:
    return TaskPoller(client=KieTaskClient(), poll_interval_seconds=0.0, max_attempts=max_attempts)


def test_extract_returns_first_url() -> None:
    payload = json.dumps({"resultUrls": ["https://cdn.test/a.mp4", "https://cdn.test/b.mp4"]})

    assert extract_result_value(payload) == "https://cdn.test/a.mp4"


def test_extract_prefers_urls_over_character_object() -> None:
    payload = json.dumps(
        {"resultUrls": ["https://cdn.test/a.mp4"], "resultObject": {"character_id": "c-1"}}
    )

    assert extract_result_value(payload) == "https://cdn.test/a.mp4"


def test_extract_falls_back_to_character_id() -> None:
    payload = json.dumps({"resultUrls": [], "resultObject": {"character_id": "c-123"}})

    assert extract_result_value(payload) == "c-123"


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "",
        "not json",
        json.dumps(["https://cdn.test/a.mp4"]),
        json.dumps({"resultUrls": []}),
        json.dumps({"resultObject": {"name": "no id"}}),
    ],
)
def test_extract_rejects_unrecognized_payloads(payload) -> None:
    with pytest.raises(MalformedResultError):
        extract_result_value(payload)


def test_extract_character_keeps_raw_json() -> None:
    payload = json.dumps({"resultObject": {"character_id": "c-9"}})

    result = extract_character(payload)

    assert result == CharacterResult(id="c-9", raw_json=payload)
    assert result.type == "characterId"


@pytest.mark.asyncio
async def test_poll_returns_video_after_waiting(gateway) -> None:
    gateway.queue(
        RECORD_INFO,
        waiting(),
        waiting(),
        succeeded_with_urls("https://cdn.test/u.mp4"),
    )

    result = await build_poller().poll("secret", "task-1")

    assert result == VideoResult(url="https://cdn.test/u.mp4")
    assert len(gateway.calls_to(RECORD_INFO)) == 3


@pytest.mark.asyncio
async def test_poll_stops_at_first_failure(gateway) -> None:
    gateway.queue(RECORD_INFO, waiting(), failed("quota exceeded", fail_code="402"), waiting())

    with pytest.raises(RemoteFailureError) as excinfo:
        await build_poller().poll("secret", "task-1")

    assert "quota exceeded" in str(excinfo.value)
    assert excinfo.value.fail_msg == "quota exceeded"
    assert excinfo.value.fail_code == "402"
    assert len(gateway.calls_to(RECORD_INFO)) == 2


@pytest.mark.asyncio
async def test_poll_times_out_after_exactly_max_attempts(gateway) -> None:
    gateway.queue(RECORD_INFO, *[waiting() for _ in range(121)])

    with pytest.raises(TaskTimeoutError) as excinfo:
        await build_poller(max_attempts=120).poll("secret", "task-1")

    assert len(gateway.calls_to(RECORD_INFO)) == 120
    assert excinfo.value.attempts == 120
    assert excinfo.value.task_id == "task-1"


@pytest.mark.asyncio
async def test_poll_sleeps_only_between_queries(gateway, monkeypatch) -> None:
    gateway.queue(RECORD_INFO, waiting(), waiting(), waiting())
    sleeps: list[float] = []

    async def fake_sleep(seconds, token):
        sleeps.append(seconds)

    monkeypatch.setattr("src.kie_studio.tasks.task_poller.cancellable_sleep", fake_sleep)
    poller = TaskPoller(client=KieTaskClient(), poll_interval_seconds=5.0, max_attempts=3)

    with pytest.raises(TaskTimeoutError):
        await poller.poll("secret", "task-1")

    assert sleeps == [5.0, 5.0]


@pytest.mark.asyncio
async def test_poll_maps_character_shape(gateway) -> None:
    gateway.queue(RECORD_INFO, succeeded_with_character("c-123"))

    result = await build_poller().poll("secret", "task-1", shape=ResultShape.CHARACTER)

    assert isinstance(result, CharacterResult)
    assert result.id == "c-123"


@pytest.mark.asyncio
async def test_success_without_result_json_is_malformed(gateway) -> None:
    gateway.queue(RECORD_INFO, record("success"))

    with pytest.raises(MalformedResultError, match="result is missing"):
        await build_poller().poll("secret", "task-1")


@pytest.mark.asyncio
async def test_media_shape_requires_result_url(gateway) -> None:
    gateway.queue(RECORD_INFO, succeeded_with_character("c-1"))

    with pytest.raises(MalformedResultError, match="no result URL"):
        await build_poller().poll("secret", "task-1")


@pytest.mark.asyncio
async def test_character_shape_requires_character_id(gateway) -> None:
    gateway.queue(RECORD_INFO, succeeded_with_urls("https://cdn.test/a.mp4"))

    with pytest.raises(MalformedResultError, match="no character id"):
        await build_poller().poll("secret", "task-1", shape=ResultShape.CHARACTER)


@pytest.mark.asyncio
async def test_query_rejection_propagates(gateway) -> None:
    gateway.queue(RECORD_INFO, rejected(500, "server busy"))

    with pytest.raises(RemoteRejectionError, match="server busy"):
        await build_poller().poll("secret", "task-1")


@pytest.mark.asyncio
async def test_cancel_before_first_query(gateway) -> None:
    token = CancelToken()
    token.cancel("user left")

    with pytest.raises(RunCancelledError, match="user left"):
        await build_poller().poll("secret", "task-1", cancel=token)

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_cancel_wakes_pending_wait(gateway) -> None:
    gateway.queue(RECORD_INFO, waiting(), waiting())
    token = CancelToken()
    poller = TaskPoller(client=KieTaskClient(), poll_interval_seconds=30.0, max_attempts=5)

    task = asyncio.create_task(poller.poll("secret", "task-1", cancel=token))
    await asyncio.sleep(0.05)
    token.cancel()

    with pytest.raises(RunCancelledError):
        await asyncio.wait_for(task, timeout=1.0)
    assert len(gateway.calls_to(RECORD_INFO)) == 1
