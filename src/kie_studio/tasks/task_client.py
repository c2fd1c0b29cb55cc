"""Kie.ai task creation and status query client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from ..errors import ConfigurationError, RemoteRejectionError
from .cancellation import CancelToken
from .task_models import TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.kie.ai/api/v1"


def require_api_key(api_key: str | None, *, purpose: str = "Kie.ai request") -> str:
    """Return a usable bearer token or fail before touching the network."""
    if not api_key or not api_key.strip():
        raise ConfigurationError(f"Kie.ai API key is missing ({purpose})")
    return api_key.strip()


def drop_empty(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``values`` without ``None`` entries."""
    return {key: value for key, value in values.items() if value is not None}


@dataclass(slots=True)
class KieTaskClient:
    """Submit tasks and query their status through the Kie.ai gateway."""

    api_base: str = DEFAULT_API_BASE
    timeout_seconds: float = 30.0
    callback_url: str | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def create_task(
        self,
        api_key: str | None,
        model: str,
        task_input: Mapping[str, Any],
        *,
        callback_url: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        """POST ``{model, input, callBackUrl?}`` and return the new ``taskId``."""
        token = require_api_key(api_key, purpose=f"create task for {model}")
        if cancel is not None:
            cancel.raise_if_cancelled()

        body: dict[str, Any] = {"model": model, "input": drop_empty(task_input)}
        callback = callback_url or self.callback_url
        if callback:
            body["callBackUrl"] = callback

        data = await self._post_json(
            f"{self.api_base.rstrip('/')}/jobs/createTask",
            token=token,
            body=body,
            context=model,
        )
        task_id = _extract_task_id(data)
        if data.get("code") != 200 or not task_id:
            message = data.get("msg") or "Unknown error"
            self.log.warning(
                "kie.task.rejected",
                extra={"model": model, "code": data.get("code"), "provider_message": message},
            )
            raise RemoteRejectionError(f"Failed to create task for {model}: {message}")

        self.log.info("kie.task.created", extra={"model": model, "task_id": task_id})
        return task_id

    async def create_veo_task(
        self,
        api_key: str | None,
        payload: Mapping[str, Any],
        *,
        cancel: CancelToken | None = None,
    ) -> str:
        """POST a flat Veo 3.1 payload to ``/veo/generate``."""
        token = require_api_key(api_key, purpose="create Veo 3.1 task")
        if cancel is not None:
            cancel.raise_if_cancelled()

        body = drop_empty(payload)
        if self.callback_url and "callBackUrl" not in body:
            body["callBackUrl"] = self.callback_url

        data = await self._post_json(
            f"{self.api_base.rstrip('/')}/veo/generate",
            token=token,
            body=body,
            context="Veo 3.1",
        )
        task_id = _extract_task_id(data)
        if data.get("code") != 200 or not task_id:
            message = data.get("msg") or "Unknown error"
            self.log.warning(
                "kie.veo.rejected",
                extra={"model": body.get("model"), "code": data.get("code"), "provider_message": message},
            )
            raise RemoteRejectionError(f"Failed to create Veo 3.1 task: {message}")

        self.log.info("kie.veo.created", extra={"model": body.get("model"), "task_id": task_id})
        return task_id

    async def get_task_status(self, api_key: str | None, task_id: str) -> TaskRecord:
        """Query ``/jobs/recordInfo`` once; never mutates the remote task."""
        token = require_api_key(api_key, purpose="query task status")
        url = f"{self.api_base.rstrip('/')}/jobs/recordInfo"
        headers = {"Authorization": f"Bearer {token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, headers=headers, params={"taskId": task_id})
        except httpx.HTTPError as exc:
            raise RemoteRejectionError(f"Kie.ai task status query failed: {exc}") from exc

        data = _json_body(response, context="task status query")
        record = data.get("data")
        if data.get("code") != 200 or not isinstance(record, dict):
            message = data.get("msg") or "Unknown error"
            raise RemoteRejectionError(f"Failed to query Kie.ai task status: {message}")
        return TaskRecord.from_payload(record, task_id=task_id)

    async def _post_json(
        self,
        url: str,
        *,
        token: str,
        body: Mapping[str, Any],
        context: str,
    ) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise RemoteRejectionError(f"Failed to create task for {context}: {exc}") from exc
        return _json_body(response, context=f"create task for {context}")


def _extract_task_id(data: Mapping[str, Any]) -> str | None:
    payload = data.get("data")
    if not isinstance(payload, dict):
        return None
    task_id = payload.get("taskId")
    return str(task_id) if task_id else None


def _json_body(response: httpx.Response, *, context: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise RemoteRejectionError(
            f"Kie.ai {context} returned non-JSON response (status={response.status_code})"
        ) from exc
    if not isinstance(data, dict):
        raise RemoteRejectionError(f"Kie.ai {context} returned unexpected payload")
    return data
