"""Cooperative cancellation for upload, submit and poll steps."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field

from ..errors import RunCancelledError


@dataclass(slots=True)
class CancelToken:
    """One-shot signal telling a run that its caller no longer cares."""

    _event: asyncio.Event = field(default_factory=asyncio.Event)
    reason: str | None = None

    def cancel(self, reason: str = "Run cancelled") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RunCancelledError(self.reason or "Run cancelled")

    async def sleep(self, seconds: float) -> None:
        """Wait ``seconds`` unless cancelled first, in which case raise."""
        self.raise_if_cancelled()
        if seconds > 0:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._event.wait(), timeout=seconds)
        self.raise_if_cancelled()


async def cancellable_sleep(seconds: float, token: CancelToken | None) -> None:
    if token is None:
        await asyncio.sleep(seconds)
        return
    await token.sleep(seconds)
