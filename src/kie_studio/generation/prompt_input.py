"""Prompt normalisation shared by every generation feature.

A prompt arrives either as plain text or as a JSON document (usually the
output of the prompt designer) whose ``full_text_prompt`` field carries
the text actually sent to the model.  Length bounds apply to the text
that is finally submitted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum

from ..errors import ValidationError


class PromptMode(StrEnum):
    TEXT = "text"
    JSON = "json"


@dataclass(slots=True, frozen=True)
class PromptBounds:
    min_length: int = 1
    max_length: int | None = None

    def check(self, text: str, *, label: str = "Prompt") -> None:
        too_short = len(text) < self.min_length
        too_long = self.max_length is not None and len(text) > self.max_length
        if not (too_short or too_long):
            return
        if self.max_length is None:
            raise ValidationError(f"{label} must be at least {self.min_length} characters")
        raise ValidationError(
            f"{label} must be between {self.min_length} and {self.max_length} characters"
        )


def resolve_prompt(
    prompt: str | None,
    *,
    mode: PromptMode = PromptMode.TEXT,
    json_prompt: str | None = None,
    bounds: PromptBounds = PromptBounds(),
    required: bool = True,
) -> str | None:
    """Return the prompt text to submit, or ``None`` when optional and absent."""
    if mode is PromptMode.TEXT:
        text = prompt or ""
        if not text.strip():
            if required:
                raise ValidationError("Please enter a prompt")
            return None
        bounds.check(text)
        return text

    raw = json_prompt or ""
    if not raw.strip():
        raise ValidationError("Please enter a JSON prompt")
    try:
        document = json.loads(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid JSON prompt: {exc}") from exc
    full_text = document.get("full_text_prompt") if isinstance(document, dict) else None
    if not full_text:
        if required:
            raise ValidationError('JSON prompt is missing the "full_text_prompt" field')
        return None
    if not isinstance(full_text, str):
        raise ValidationError('"full_text_prompt" must be a string')
    bounds.check(full_text, label='"full_text_prompt"')
    return full_text


@dataclass(slots=True, frozen=True, kw_only=True)
class PromptedRequest:
    """Prompt fields every feature request carries."""

    prompt: str | None = None
    prompt_mode: PromptMode = PromptMode.TEXT
    json_prompt: str | None = None

    def resolve_prompt(self, bounds: PromptBounds, *, required: bool = True) -> str | None:
        return resolve_prompt(
            self.prompt,
            mode=self.prompt_mode,
            json_prompt=self.json_prompt,
            bounds=bounds,
            required=required,
        )
