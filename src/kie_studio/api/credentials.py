"""Per-request API credentials taken from headers."""

from __future__ import annotations

from fastapi import Header, Request

from ..generation.generation_service import ApiCredentials


def get_credentials(
    request: Request,
    kie_api_key: str | None = Header(None, alias="X-Kie-Api-Key"),
    gemini_api_key: str | None = Header(None, alias="X-Gemini-Api-Key"),
) -> ApiCredentials:
    """Build caller credentials, filling missing keys from the app config."""
    supplied = ApiCredentials(kie_api_key=kie_api_key, gemini_api_key=gemini_api_key)
    return supplied.with_fallback(request.app.state.config)  # type: ignore[attr-defined]
