"""HTTP routes for generation runs."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import KieStudioError, ValidationError
from ..generation.generation_models import GenerationRun
from ..generation.generation_service import ApiCredentials, FeatureController
from ..tasks.task_models import CharacterResult, GenerationResult, LocalAsset
from .credentials import get_credentials
from .errors import to_http_exception

router = APIRouter(prefix="/api/generations", tags=["generations"])
logger = logging.getLogger(__name__)


def get_controllers(request: Request) -> dict[str, FeatureController]:
    """Fetch feature controllers from application state."""
    try:
        return request.app.state.controllers  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - misconfigured app
        raise RuntimeError("Feature controllers are not configured") from exc


def _get_controller(controllers: dict[str, FeatureController], feature: str) -> FeatureController:
    controller = controllers.get(feature)
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown generation feature '{feature}'",
        )
    return controller


def parse_options(raw: str) -> dict[str, Any]:
    try:
        options = json.loads(raw or "{}")
    except ValueError as exc:
        raise ValidationError(f"options must be a JSON object: {exc}") from exc
    if not isinstance(options, dict):
        raise ValidationError("options must be a JSON object")
    return options


def build_request(controller: FeatureController, options: dict[str, Any], assets: list[LocalAsset]) -> Any:
    """Validate ``options`` (plus staged files) into the controller's request type."""
    values = dict(options)
    if assets:
        if controller.asset_field is None:
            raise ValidationError(f"{controller.feature} does not accept files")
        values[controller.asset_field] = tuple(assets)
    try:
        return TypeAdapter(controller.request_type).validate_python(values)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'options'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(f"Invalid options: {problems}") from exc


async def _stage_files(files: list[UploadFile], directory: Path) -> list[LocalAsset]:
    assets: list[LocalAsset] = []
    for position, upload in enumerate(files):
        filename = Path(upload.filename or f"upload-{position}").name
        target = directory / f"{position}-{filename}"
        target.write_bytes(await upload.read())
        assets.append(
            LocalAsset.from_path(target, content_type=upload.content_type or None, filename=filename)
        )
    return assets


def serialize_result(result: GenerationResult) -> dict[str, Any]:
    if isinstance(result, CharacterResult):
        return {"type": result.type, "id": result.id, "raw_json": result.raw_json}
    return {"type": result.type, "url": result.url}


def serialize_run(run: GenerationRun | None) -> dict[str, Any]:
    if run is None:
        return {"state": "idle"}
    return {
        "feature": run.feature,
        "state": run.state.value,
        "adapter": run.adapter_name,
        "task_id": run.task_id,
        "status_message": run.status_message,
        "error": run.error,
        "result": serialize_result(run.result) if run.result is not None else None,
    }


@router.post("/{feature}")
async def run_generation(
    feature: str,
    options: str = Form("{}"),
    files: list[UploadFile] | None = File(None),
    credentials: ApiCredentials = Depends(get_credentials),
    controllers: dict[str, FeatureController] = Depends(get_controllers),
) -> dict[str, Any]:
    """Validate, upload, submit and poll; respond once the task is terminal."""
    controller = _get_controller(controllers, feature)
    logger.info(
        "generation.request.received",
        extra={"feature": feature, "file_count": len(files or [])},
    )
    with tempfile.TemporaryDirectory(prefix="kie-studio-") as tmp:
        try:
            assets = await _stage_files(files or [], Path(tmp))
            request = build_request(controller, parse_options(options), assets)
            await controller.run(request, credentials=credentials)
        except KieStudioError as exc:
            raise to_http_exception(exc) from exc
    return serialize_run(controller.last_run)


@router.get("/{feature}")
async def get_generation(
    feature: str,
    controllers: dict[str, FeatureController] = Depends(get_controllers),
) -> dict[str, Any]:
    """Return the state of the feature's latest run."""
    return serialize_run(_get_controller(controllers, feature).last_run)


@router.post("/{feature}/cancel", status_code=status.HTTP_202_ACCEPTED)
async def cancel_generation(
    feature: str,
    controllers: dict[str, FeatureController] = Depends(get_controllers),
) -> dict[str, Any]:
    """Ask the in-flight run, if any, to stop at its next wait or request."""
    controller = _get_controller(controllers, feature)
    controller.cancel()
    return serialize_run(controller.last_run)
