"""Domain-specific exceptions for gateway calls and generation runs."""

from __future__ import annotations

__all__ = [
    "KieStudioError",
    "ConfigurationError",
    "ValidationError",
    "RemoteRejectionError",
    "RemoteFailureError",
    "TaskTimeoutError",
    "MalformedResultError",
    "RunCancelledError",
    "RunInProgressError",
]


class KieStudioError(Exception):
    """Base class for kie-studio errors."""


class ConfigurationError(KieStudioError):
    """Raised when a credential or setting is missing before any network call."""


class ValidationError(KieStudioError):
    """Raised when run input violates a provider constraint."""


class RemoteRejectionError(KieStudioError):
    """Raised when an endpoint answers with a non-success envelope."""


class RemoteFailureError(KieStudioError):
    """Raised when a polled task reaches the ``fail`` state."""

    def __init__(self, message: str, *, fail_msg: str | None = None, fail_code: str | None = None) -> None:
        super().__init__(message)
        self.fail_msg = fail_msg
        self.fail_code = fail_code


class TaskTimeoutError(KieStudioError):
    """Raised when polling gives up while the remote task may still be running."""

    def __init__(self, message: str, *, task_id: str, attempts: int) -> None:
        super().__init__(message)
        self.task_id = task_id
        self.attempts = attempts


class MalformedResultError(KieStudioError):
    """Raised when a successful task carries no recognizable result."""


class RunCancelledError(KieStudioError):
    """Raised when the caller cancelled an in-flight run."""


class RunInProgressError(KieStudioError):
    """Raised when a controller is asked to start an overlapping run."""
