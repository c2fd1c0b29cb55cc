"""Input validation applied before any upload, submit or poll call."""

from __future__ import annotations

import logging
from typing import Collection, Sequence, TypeVar

from ..errors import ValidationError
from ..tasks.task_models import LocalAsset

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE = "image"
VIDEO = "video"


def require_choice(value: T, allowed: Collection[T], *, label: str) -> T:
    if value not in allowed:
        options = ", ".join(str(option) for option in allowed)
        raise ValidationError(f"Unsupported {label} '{value}' (expected one of: {options})")
    return value


def require_range(value: int, *, minimum: int, maximum: int, label: str) -> int:
    if not minimum <= value <= maximum:
        raise ValidationError(f"{label} must be between {minimum} and {maximum}")
    return value


def validate_assets(
    assets: Sequence[LocalAsset],
    *,
    kind: str,
    max_bytes: int,
    min_count: int = 0,
    max_count: int | None = None,
    label: str = "file",
) -> tuple[LocalAsset, ...]:
    """Check count, MIME family and size of local assets.

    ``kind`` is the MIME family (``image`` or ``video``) every asset must
    belong to.
    """
    count = len(assets)
    if count < min_count:
        if min_count == 1:
            raise ValidationError(f"Please provide at least one {kind} {label}")
        raise ValidationError(f"At least {min_count} {kind} {label}s are required")
    if max_count is not None and count > max_count:
        raise ValidationError(f"At most {max_count} {kind} {label}s can be provided")

    for asset in assets:
        if not asset.content_type.startswith(f"{kind}/"):
            logger.warning(
                "generation.asset.unsupported_media",
                extra={"file_name": asset.filename, "content_type": asset.content_type},
            )
            raise ValidationError(f"Only {kind} files are accepted ({asset.filename})")
        try:
            size = asset.size_bytes()
        except OSError as exc:
            raise ValidationError(f"Cannot read {asset.filename}: {exc.strerror or exc}") from exc
        if size > max_bytes:
            logger.warning(
                "generation.asset.too_large",
                extra={"file_name": asset.filename, "size_bytes": size, "limit_bytes": max_bytes},
            )
            limit_mb = max_bytes / (1024 * 1024)
            raise ValidationError(f"{asset.filename} exceeds the {limit_mb:g}MB size limit")
    return tuple(assets)
