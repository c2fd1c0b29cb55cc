"""Structured prompt documents produced by the prompt designer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PromptCharacter(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str
    costume: str | None = None


class DetailedVideoPrompt(BaseModel):
    """Prompt document whose ``full_text_prompt`` feeds the generation features."""

    model_config = ConfigDict(extra="ignore")

    title: str
    genre: str | None = None
    characters: list[PromptCharacter] = Field(default_factory=list)
    scenario: str
    background: str
    camera_angle: str | None = None
    style: str | None = None
    dialogue_snippets: list[str] = Field(default_factory=list)
    music_mood: str | None = None
    sound_effects: list[str] = Field(default_factory=list)
    full_text_prompt: str


class PromptIdeaOptions(BaseModel):
    """Optional hints folded into the designer instruction."""

    characters: list[str] = Field(default_factory=list)
    scenarios: list[str] = Field(default_factory=list)
    camera_angles: list[str] = Field(default_factory=list, alias="cameraAngles")
    styles: list[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


# Gemini responseSchema for DetailedVideoPrompt (OpenAPI subset, upper-case types).
DETAILED_VIDEO_PROMPT_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "Title of the video"},
        "genre": {"type": "STRING", "description": "Genre, e.g. fantasy, comedy, sci-fi"},
        "characters": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "Character name"},
                    "description": {"type": "STRING", "description": "Traits and appearance"},
                    "costume": {"type": "STRING", "description": "Costume"},
                },
                "required": ["name", "description"],
            },
            "description": "Characters appearing in the video",
        },
        "scenario": {"type": "STRING", "description": "Main situation and plot"},
        "background": {"type": "STRING", "description": "Setting and background"},
        "camera_angle": {"type": "STRING", "description": "Main camera angle or shot"},
        "style": {"type": "STRING", "description": "Visual style or filter"},
        "dialogue_snippets": {
            "type": "ARRAY",
            "items": {"type": "STRING", "description": "Key line of dialogue"},
            "description": "Dialogue that may appear in the video",
        },
        "music_mood": {"type": "STRING", "description": "Mood of the music"},
        "sound_effects": {
            "type": "ARRAY",
            "items": {"type": "STRING", "description": "Sound effect"},
            "description": "Main sound effects",
        },
        "full_text_prompt": {
            "type": "STRING",
            "description": "Detailed text prompt combining every element above",
        },
    },
    "required": ["title", "scenario", "background", "full_text_prompt"],
}
