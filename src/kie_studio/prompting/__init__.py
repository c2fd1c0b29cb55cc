"""Gemini prompt designer."""

from .gemini_prompt import GeminiPromptDesigner
from .prompting_models import DetailedVideoPrompt, PromptCharacter, PromptIdeaOptions

__all__ = ["DetailedVideoPrompt", "GeminiPromptDesigner", "PromptCharacter", "PromptIdeaOptions"]
