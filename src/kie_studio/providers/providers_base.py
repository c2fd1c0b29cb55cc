"""Abstract adapter binding the generic task protocol to one model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..tasks.cancellation import CancelToken
from ..tasks.task_client import KieTaskClient
from ..tasks.task_models import GenerationResult, ResultShape
from ..tasks.task_poller import TaskPoller


class TaskInput(ABC):
    """One variant of the per-model input union."""

    __slots__ = ()

    @abstractmethod
    def to_input(self) -> dict[str, Any]:
        """Return the ``input`` object sent to ``/jobs/createTask``."""


def url_list(urls: tuple[str, ...]) -> list[str] | None:
    return list(urls) if urls else None


@dataclass(slots=True)
class ProviderAdapter:
    """Fixed (model name, input type, result shape) binding.

    ``submit`` forwards to the task submitter with the adapter's model
    name and ``poll`` forwards to the shared poller, so every adapter
    reduces to a model constant plus an input dataclass.
    """

    client: KieTaskClient
    poller: TaskPoller

    name: ClassVar[str]
    model_name: ClassVar[str]
    input_type: ClassVar[type[TaskInput]]
    result_shape: ClassVar[ResultShape] = ResultShape.MEDIA_URL

    def _check_input(self, task_input: TaskInput) -> None:
        if not isinstance(task_input, self.input_type):
            raise TypeError(
                f"{self.name} expects {self.input_type.__name__}, got {type(task_input).__name__}"
            )

    async def submit(
        self,
        api_key: str | None,
        task_input: TaskInput,
        *,
        cancel: CancelToken | None = None,
    ) -> str:
        self._check_input(task_input)
        return await self.client.create_task(
            api_key, self.model_name, task_input.to_input(), cancel=cancel
        )

    async def poll(
        self,
        api_key: str | None,
        task_id: str,
        *,
        cancel: CancelToken | None = None,
    ) -> GenerationResult:
        return await self.poller.poll(api_key, task_id, shape=self.result_shape, cancel=cancel)

    async def generate(
        self,
        api_key: str | None,
        task_input: TaskInput,
        *,
        cancel: CancelToken | None = None,
    ) -> GenerationResult:
        task_id = await self.submit(api_key, task_input, cancel=cancel)
        return await self.poll(api_key, task_id, cancel=cancel)
