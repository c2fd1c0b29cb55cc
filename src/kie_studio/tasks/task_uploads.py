"""Base64 staging uploads for images and videos referenced by tasks."""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from ..errors import RemoteRejectionError
from .cancellation import CancelToken
from .task_client import require_api_key
from .task_models import LocalAsset, UploadedAsset

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_BASE = "https://kieai.redpandaai.co"


def encode_data_url(payload: bytes, content_type: str) -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def file_to_data_url(asset: LocalAsset) -> str:
    """Read ``asset`` off the event loop and return it as a data URL."""
    payload = await asyncio.to_thread(asset.path.read_bytes)
    return encode_data_url(payload, asset.content_type)


@dataclass(slots=True)
class AssetUploader:
    """Publish local files to the temporary file host used by Kie.ai."""

    upload_base: str = DEFAULT_UPLOAD_BASE
    timeout_seconds: float = 120.0
    log: logging.Logger = field(default_factory=lambda: logger)

    async def upload(
        self,
        api_key: str | None,
        asset: LocalAsset,
        upload_path: str,
        file_name: str | None = None,
        *,
        cancel: CancelToken | None = None,
    ) -> UploadedAsset:
        token = require_api_key(api_key, purpose="file upload")
        if cancel is not None:
            cancel.raise_if_cancelled()

        data_url = await file_to_data_url(asset)
        name = file_name or asset.filename
        body = {"base64Data": data_url, "uploadPath": upload_path, "fileName": name}
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        url = f"{self.upload_base.rstrip('/')}/api/file-base64-upload"

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise RemoteRejectionError(f"File upload failed: {exc}") from exc

        envelope = _upload_envelope(response)
        data = envelope.get("data") if isinstance(envelope.get("data"), dict) else {}
        file_url = data.get("fileUrl")
        if not response.is_success or not envelope.get("success") or not file_url:
            message = envelope.get("msg") or response.reason_phrase or f"HTTP {response.status_code}"
            self.log.warning(
                "kie.upload.rejected",
                extra={"upload_path": upload_path, "file_name": name, "status_code": response.status_code},
            )
            raise RemoteRejectionError(f"File upload failed: {message}")

        self.log.info(
            "kie.upload.stored",
            extra={"upload_path": upload_path, "file_name": name, "expires_at": data.get("expiresAt")},
        )
        return UploadedAsset(
            source=asset,
            upload_path=upload_path,
            file_url=str(file_url),
            file_id=data.get("fileId"),
            download_url=data.get("downloadUrl"),
            expires_at=data.get("expiresAt"),
        )

    async def upload_many(
        self,
        api_key: str | None,
        assets: Sequence[LocalAsset],
        upload_path: str,
        *,
        concurrency: int = 1,
        cancel: CancelToken | None = None,
    ) -> list[UploadedAsset]:
        """Upload ``assets`` and return them in declared order.

        With ``concurrency == 1`` each upload finishes before the next one
        starts; larger values bound the number of uploads in flight. The first
        failed upload cancels the ones still running and is raised as is.
        """
        if concurrency <= 1 or len(assets) <= 1:
            uploaded: list[UploadedAsset] = []
            for asset in assets:
                uploaded.append(await self.upload(api_key, asset, upload_path, cancel=cancel))
            return uploaded

        semaphore = asyncio.Semaphore(concurrency)

        async def _bounded(asset: LocalAsset) -> UploadedAsset:
            async with semaphore:
                return await self.upload(api_key, asset, upload_path, cancel=cancel)

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(_bounded(asset)) for asset in assets]
        except BaseExceptionGroup as failures:
            raise failures.exceptions[0] from None
        return [task.result() for task in tasks]


def _upload_envelope(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
