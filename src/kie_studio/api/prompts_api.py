"""HTTP routes for the Gemini prompt designer."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from ..errors import KieStudioError
from ..generation.generation_service import ApiCredentials
from ..prompting.gemini_prompt import GeminiPromptDesigner
from ..prompting.prompting_models import DetailedVideoPrompt, PromptIdeaOptions
from .credentials import get_credentials
from .errors import to_http_exception

router = APIRouter(prefix="/api/prompts", tags=["prompts"])
logger = logging.getLogger(__name__)


class DetailedPromptRequest(BaseModel):
    idea: str
    options: PromptIdeaOptions = Field(default_factory=PromptIdeaOptions)


def get_prompt_designer(request: Request) -> GeminiPromptDesigner:
    """Fetch the prompt designer from application state."""
    try:
        return request.app.state.prompt_designer  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - misconfigured app
        raise RuntimeError("GeminiPromptDesigner is not configured") from exc


@router.post("/detailed", response_model=DetailedVideoPrompt)
async def design_detailed_prompt(
    payload: DetailedPromptRequest,
    credentials: ApiCredentials = Depends(get_credentials),
    designer: GeminiPromptDesigner = Depends(get_prompt_designer),
) -> DetailedVideoPrompt:
    """Expand a short idea into a structured video prompt."""
    try:
        return await designer.generate_detailed_video_prompt(
            payload.idea,
            payload.options,
            api_key=credentials.gemini_api_key,
        )
    except KieStudioError as exc:
        raise to_http_exception(exc) from exc


@router.post("/check-key", status_code=status.HTTP_204_NO_CONTENT)
async def check_gemini_key(
    credentials: ApiCredentials = Depends(get_credentials),
    designer: GeminiPromptDesigner = Depends(get_prompt_designer),
) -> None:
    """Verify that the Gemini key can call ``generateContent``."""
    try:
        await designer.check_gemini_api_key(credentials.gemini_api_key)
    except KieStudioError as exc:
        raise to_http_exception(exc) from exc
