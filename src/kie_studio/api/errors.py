"""Translate domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..errors import (
    ConfigurationError,
    KieStudioError,
    MalformedResultError,
    RemoteFailureError,
    RemoteRejectionError,
    RunCancelledError,
    RunInProgressError,
    TaskTimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# 499: client closed request.
HTTP_STATUS_BY_ERROR: dict[type[KieStudioError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConfigurationError: status.HTTP_401_UNAUTHORIZED,
    RunInProgressError: status.HTTP_409_CONFLICT,
    RemoteRejectionError: status.HTTP_502_BAD_GATEWAY,
    RemoteFailureError: status.HTTP_502_BAD_GATEWAY,
    MalformedResultError: status.HTTP_502_BAD_GATEWAY,
    TaskTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
    RunCancelledError: 499,
}


def to_http_exception(exc: KieStudioError) -> HTTPException:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type in type(exc).__mro__:
        if error_type in HTTP_STATUS_BY_ERROR:
            status_code = HTTP_STATUS_BY_ERROR[error_type]
            break
    logger.warning(
        "api.request.failed",
        extra={"error": type(exc).__name__, "status_code": status_code},
    )
    return HTTPException(status_code=status_code, detail=str(exc))


__all__ = ["HTTP_STATUS_BY_ERROR", "to_http_exception"]
