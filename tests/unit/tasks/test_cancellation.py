from __future__ import annotations

import asyncio

import pytest

from src.kie_studio.errors import RunCancelledError
from src.kie_studio.tasks.cancellation import CancelToken


def test_token_starts_clear() -> None:
    token = CancelToken()

    assert not token.cancelled
    token.raise_if_cancelled()


def test_first_reason_wins() -> None:
    token = CancelToken()
    token.cancel("first")
    token.cancel("second")

    with pytest.raises(RunCancelledError, match="first"):
        token.raise_if_cancelled()


@pytest.mark.asyncio
async def test_sleep_returns_after_timeout() -> None:
    token = CancelToken()

    await token.sleep(0.01)

    assert not token.cancelled


@pytest.mark.asyncio
async def test_sleep_wakes_immediately_on_cancel() -> None:
    token = CancelToken()
    loop = asyncio.get_running_loop()
    loop.call_later(0.02, token.cancel, "stopped")
    started = loop.time()

    with pytest.raises(RunCancelledError, match="stopped"):
        await token.sleep(30)

    assert loop.time() - started < 5
