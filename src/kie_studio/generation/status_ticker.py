"""Rotating progress messages scoped to a single run."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


@dataclass(slots=True)
class StatusTicker:
    """Cycle through ``messages`` every ``interval_seconds`` while active.

    Used as ``async with``: the background task is created on entry and
    cancelled on exit, whatever state the run ended in.
    """

    messages: Sequence[str]
    interval_seconds: float
    callback: StatusCallback
    _task: asyncio.Task[None] | None = field(default=None, init=False)
    _index: int = field(default=0, init=False)

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def __aenter__(self) -> "StatusTicker":
        if self.messages:
            self._index = 0
            self.callback(self.messages[0])
            if len(self.messages) > 1:
                self._task = asyncio.create_task(self._rotate())
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _rotate(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self._index = (self._index + 1) % len(self.messages)
            try:
                self.callback(self.messages[self._index])
            except Exception:  # pragma: no cover - cosmetic only
                logger.exception("generation.status.callback_failed")
