"""Per-feature orchestration of validate → upload → submit → poll."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from ..config import AppConfig
from ..errors import RunCancelledError, RunInProgressError
from ..providers.providers_base import ProviderAdapter
from ..providers.providers_factory import build_poller, build_task_client, create_adapter
from ..tasks.cancellation import CancelToken
from ..tasks.task_client import KieTaskClient, require_api_key
from ..tasks.task_models import GenerationResult, UploadedAsset
from ..tasks.task_poller import TaskPoller
from ..tasks.task_uploads import AssetUploader
from .generation_models import GenerationRun, RunPlan, RunState
from .status_ticker import StatusCallback, StatusTicker

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")


@dataclass(slots=True, frozen=True)
class ApiCredentials:
    """Caller-supplied keys; either may be absent and fall back to configuration."""

    kie_api_key: str | None = None
    gemini_api_key: str | None = None

    def with_fallback(self, config: AppConfig) -> "ApiCredentials":
        """Fill blank keys from ``config``."""
        return ApiCredentials(
            kie_api_key=_present(self.kie_api_key) or config.kie_api_key,
            gemini_api_key=_present(self.gemini_api_key) or config.gemini_api_key,
        )

    def __repr__(self) -> str:
        return (
            f"ApiCredentials(kie_api_key={'***' if self.kie_api_key else None}, "
            f"gemini_api_key={'***' if self.gemini_api_key else None})"
        )


def _present(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(slots=True)
class GenerationServices:
    """Shared collaborators for every feature controller."""

    config: AppConfig
    client: KieTaskClient
    poller: TaskPoller
    uploader: AssetUploader
    _adapters: dict[str, ProviderAdapter] = field(default_factory=dict, init=False)

    @classmethod
    def from_config(cls, config: AppConfig) -> "GenerationServices":
        client = build_task_client(config)
        return cls(
            config=config,
            client=client,
            poller=build_poller(config, client),
            uploader=AssetUploader(
                upload_base=config.kie_upload_base_url,
                timeout_seconds=config.upload_timeout_seconds,
            ),
        )

    def adapter(self, name: str) -> ProviderAdapter:
        adapter = self._adapters.get(name)
        if adapter is None:
            adapter = create_adapter(name, client=self.client, poller=self.poller)
            self._adapters[name] = adapter
        return adapter


class FeatureController(ABC, Generic[RequestT]):
    """Own one run at a time for a single generation feature.

    Subclasses only translate their request into a :class:`RunPlan`
    (raising :class:`~kie_studio.errors.ValidationError` on bad input); the
    base class drives the state machine, the uploads and the adapter.
    Failed runs are recorded and re-raised, never retried.
    """

    feature: ClassVar[str]
    request_type: ClassVar[type]
    # Request field that receives uploaded files on the HTTP surface.
    asset_field: ClassVar[str | None] = None
    status_messages: ClassVar[tuple[str, ...]] = (
        "Submitting your request...",
        "The model is generating, this can take several minutes...",
        "Still working on it...",
    )

    def __init__(self, services: GenerationServices) -> None:
        self.services = services
        self.last_run: GenerationRun | None = None
        self._cancel: CancelToken | None = None
        self.log = logger

    @abstractmethod
    def plan(self, request: RequestT) -> RunPlan:
        """Validate ``request`` and describe the run; performs no I/O."""

    @property
    def busy(self) -> bool:
        return self.last_run is not None and not self.last_run.state.is_terminal

    def cancel(self, reason: str = "Run cancelled by caller") -> None:
        if self._cancel is not None:
            self._cancel.cancel(reason)

    async def run(
        self,
        request: RequestT,
        *,
        credentials: ApiCredentials | None = None,
        on_status: StatusCallback | None = None,
    ) -> GenerationResult:
        if self.busy:
            raise RunInProgressError(f"A {self.feature} run is already in progress")

        run = GenerationRun(feature=self.feature)
        self.last_run = run
        cancel = CancelToken()
        self._cancel = cancel

        def _status(message: str) -> None:
            run.status_message = message
            if on_status is not None:
                on_status(message)

        try:
            resolved = (credentials or ApiCredentials()).with_fallback(self.services.config)
            key = require_api_key(resolved.kie_api_key, purpose=self.feature)
            run.transition(RunState.VALIDATING)
            plan = self.plan(request)
            run.adapter_name = plan.adapter_name
            adapter = self.services.adapter(plan.adapter_name)

            async with StatusTicker(
                self.status_messages,
                self.services.config.status_rotation_seconds,
                _status,
            ):
                urls = await self._upload(run, plan, key, cancel)
                task_input = plan.build_input(urls)

                run.transition(RunState.SUBMITTING)
                run.task_id = await adapter.submit(key, task_input, cancel=cancel)

                run.transition(RunState.POLLING)
                result = await adapter.poll(key, run.task_id, cancel=cancel)
        except RunCancelledError as exc:
            self._finish(run, RunState.CANCELLED, error=str(exc))
            raise
        except asyncio.CancelledError:
            self._finish(run, RunState.CANCELLED, error="Run cancelled")
            raise
        except Exception as exc:
            self._finish(run, RunState.FAILED, error=str(exc) or type(exc).__name__)
            raise
        finally:
            self._cancel = None

        run.result = result
        self._finish(run, RunState.SUCCEEDED)
        return result

    async def _upload(
        self,
        run: GenerationRun,
        plan: RunPlan,
        api_key: str,
        cancel: CancelToken,
    ) -> dict[str, list[str]]:
        urls: dict[str, list[str]] = {}
        if not any(group.assets for group in plan.uploads):
            return urls
        run.transition(RunState.UPLOADING)
        for group in plan.uploads:
            staged: list[UploadedAsset] = await self.services.uploader.upload_many(
                api_key,
                group.assets,
                group.upload_path,
                concurrency=self.services.config.upload_concurrency,
                cancel=cancel,
            )
            run.uploaded.extend(staged)
            urls[group.key] = [asset.file_url for asset in staged]
        return urls

    def _finish(self, run: GenerationRun, state: RunState, *, error: str | None = None) -> None:
        run.error = error
        run.transition(state)
        extra: dict[str, Any] = {
            "feature": self.feature,
            "adapter": run.adapter_name,
            "task_id": run.task_id,
            "state": state.value,
        }
        if error:
            self.log.warning("generation.run.%s %s", state.value, error, extra=extra)
        else:
            self.log.info("generation.run.%s", state.value, extra=extra)
