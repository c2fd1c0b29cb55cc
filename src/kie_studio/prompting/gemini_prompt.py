"""Gemini-backed prompt designer and API key check."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigurationError, MalformedResultError, RemoteRejectionError, ValidationError
from .prompting_models import DETAILED_VIDEO_PROMPT_SCHEMA, DetailedVideoPrompt, PromptIdeaOptions

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PROMPT_MODEL = "gemini-3-pro-preview"
DEFAULT_CHECK_MODEL = "gemini-3-flash-preview"

_INSTRUCTION = (
    "Using the user's short video idea, write a detailed and creative video prompt "
    "that follows the JSON schema. It must be specific and evocative enough for a "
    "video generation model (e.g. Veo, Sora) to produce a high-quality video. The "
    '"full_text_prompt" field must be a single complete text prompt combining every element.'
)


def build_designer_prompt(idea: str, options: PromptIdeaOptions) -> str:
    lines = [_INSTRUCTION, "", f'User idea: "{idea}"']
    hints = (
        ("Characters to include", options.characters),
        ("Situations or plot to include", options.scenarios),
        ("Preferred camera angles", options.camera_angles),
        ("Preferred video styles or filters", options.styles),
    )
    for label, values in hints:
        if values:
            lines.append(f"{label}: {', '.join(values)}")
    return "\n".join(lines) + "\n"


def require_gemini_key(api_key: str | None) -> str:
    if not api_key or not api_key.strip():
        raise ConfigurationError("Gemini API key is missing")
    return api_key.strip()


@dataclass(slots=True)
class GeminiPromptDesigner:
    """Expand a video idea into a :class:`DetailedVideoPrompt` via ``generateContent``."""

    api_url_base: str = DEFAULT_GEMINI_API_BASE
    model: str = DEFAULT_PROMPT_MODEL
    check_model: str = DEFAULT_CHECK_MODEL
    timeout_seconds: float = 30.0
    log: logging.Logger = field(default_factory=lambda: logger)

    async def generate_detailed_video_prompt(
        self,
        idea: str,
        options: PromptIdeaOptions | None = None,
        *,
        api_key: str | None,
    ) -> DetailedVideoPrompt:
        key = require_gemini_key(api_key)
        if not idea or not idea.strip():
            raise ValidationError("Please describe your video idea")
        options = options or PromptIdeaOptions()

        body: dict[str, Any] = {
            "contents": [{"parts": [{"text": build_designer_prompt(idea, options)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": DETAILED_VIDEO_PROMPT_SCHEMA,
                "temperature": 0.9,
                "topP": 0.95,
                "topK": 64,
            },
        }
        self.log.info(
            "gemini.prompt.start",
            extra={"model": self.model, "idea_len": len(idea)},
        )
        response = await self._generate(self.model, key, body)
        if response.status_code != 200:
            detail = _extract_error(response)
            self.log.error(
                "gemini.prompt.error status=%s detail=%s",
                response.status_code,
                detail,
                extra={"status_code": response.status_code},
            )
            raise RemoteRejectionError(f"Failed to generate a detailed video prompt: {detail}")

        text = _response_text(response)
        try:
            prompt = DetailedVideoPrompt.model_validate(json.loads(text))
        except (ValueError, PydanticValidationError) as exc:
            raise MalformedResultError(
                f"Failed to generate a detailed video prompt: response is not a valid prompt document ({exc})"
            ) from exc
        self.log.info(
            "gemini.prompt.success",
            extra={"model": self.model, "prompt_len": len(prompt.full_text_prompt)},
        )
        return prompt

    async def check_gemini_api_key(self, api_key: str | None) -> None:
        """Raise unless ``api_key`` can call ``generateContent``."""
        key = require_gemini_key(api_key)
        body = {
            "contents": [{"parts": [{"text": "hello"}]}],
            "generationConfig": {
                "maxOutputTokens": 1,
                "thinkingConfig": {"thinkingBudget": 0},
            },
        }
        response = await self._generate(self.check_model, key, body)
        status = response.status_code
        if status == 200:
            self.log.info("gemini.key_check.ok", extra={"model": self.check_model})
            return
        self.log.warning("gemini.key_check.failed", extra={"status_code": status})
        if status in {401, 403}:
            raise ConfigurationError("Invalid or unauthorized Gemini API key")
        if status == 429:
            raise RemoteRejectionError("Gemini API rate limit exceeded, please try again later")
        raise RemoteRejectionError(f"Gemini API key check failed: {_extract_error(response)}")

    async def _generate(self, model: str, api_key: str, body: dict[str, Any]) -> httpx.Response:
        url = f"{self.api_url_base}/models/{model}:generateContent"
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                return await client.post(url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise RemoteRejectionError(f"Gemini HTTP error: {exc}") from exc


def _response_text(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError as exc:
        raise MalformedResultError("Gemini returned a non-JSON response") from exc
    if not isinstance(data, dict):
        raise MalformedResultError("Gemini returned an unexpected response payload")
    candidates = data.get("candidates")
    if not isinstance(candidates, list):
        candidates = []
    candidates = [item for item in candidates if isinstance(item, dict)]
    for candidate in candidates:
        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            continue
        text = "".join(
            part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if text.strip():
            return text.strip()
    finish_reason = (candidates[0].get("finishReason") if candidates else None) or "unknown"
    raise MalformedResultError(f"Gemini response has no text (finish_reason={finish_reason})")


def _extract_error(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        message = (error.get("message") or "").strip()
        status = (error.get("status") or "").strip()
        return " ".join(part for part in (status, message) if part)
    return str(data)
