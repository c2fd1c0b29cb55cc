"""Application configuration for kie-studio.

Defaults mirror the observed gateway behaviour: status checks every five
seconds with a ceiling of 120 attempts (ten minutes), uploads capped at
10 MiB and performed one at a time.  API keys are normally supplied per
request by the caller; the values here act as fallbacks.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Pydantic settings container for gateway clients and controllers."""

    model_config = cast(Any, SettingsConfigDict(env_prefix="KIE_STUDIO_"))

    kie_api_base_url: str = Field(
        default="https://api.kie.ai/api/v1",
        description="Base URL of the Kie.ai task API (createTask, recordInfo, veo).",
    )
    kie_upload_base_url: str = Field(
        default="https://kieai.redpandaai.co",
        description="Base URL of the Kie.ai base64 file staging API.",
    )
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API.",
    )
    kie_api_key: str | None = Field(
        default=None,
        description="Fallback bearer token for the Kie.ai gateway.",
    )
    gemini_api_key: str | None = Field(
        default=None,
        description="Fallback API key for Gemini prompt design.",
    )
    gemini_prompt_model: str = Field(
        default="gemini-3-pro-preview",
        description="Gemini model used to expand video ideas into prompts.",
    )
    gemini_check_model: str = Field(
        default="gemini-3-flash-preview",
        description="Cheap Gemini model used to verify API keys.",
    )
    poll_interval_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Fixed delay between task status checks in seconds.",
    )
    max_poll_attempts: int = Field(
        default=120,
        ge=1,
        description="Status checks performed before a task is declared timed out.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=0.1,
        description="Timeout applied to task and prompt requests in seconds.",
    )
    upload_timeout_seconds: float = Field(
        default=120.0,
        ge=0.1,
        description="Timeout applied to base64 file uploads in seconds.",
    )
    upload_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Largest local asset accepted for staging.",
    )
    upload_concurrency: int = Field(
        default=1,
        ge=1,
        le=8,
        description="Uploads in flight per run; 1 keeps them strictly sequential.",
    )
    status_rotation_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Interval for rotating progress messages while a run is active.",
    )
    callback_url: str | None = Field(
        default=None,
        description="Optional callBackUrl forwarded with every createTask request.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level; httpx request logging stays at WARNING or above.",
    )

    @classmethod
    def build_default(cls) -> "AppConfig":
        """Construct configuration from the environment with default values."""

        return cls()


__all__ = ["AppConfig"]
