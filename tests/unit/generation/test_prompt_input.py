from __future__ import annotations

import json

import pytest

from src.kie_studio.errors import ValidationError
from src.kie_studio.generation.prompt_input import (
    PromptBounds,
    PromptedRequest,
    PromptMode,
    resolve_prompt,
)


def test_text_prompt_is_returned_verbatim() -> None:
    assert resolve_prompt("  a cat on the moon ") == "  a cat on the moon "


def test_blank_text_prompt_required() -> None:
    with pytest.raises(ValidationError, match="Please enter a prompt"):
        resolve_prompt("   ")


def test_blank_text_prompt_optional() -> None:
    assert resolve_prompt(None, required=False) is None


def test_text_prompt_bounds() -> None:
    bounds = PromptBounds(min_length=3, max_length=5)

    assert resolve_prompt("abc", bounds=bounds) == "abc"
    with pytest.raises(ValidationError, match="between 3 and 5"):
        resolve_prompt("ab", bounds=bounds)
    with pytest.raises(ValidationError, match="between 3 and 5"):
        resolve_prompt("abcdef", bounds=bounds)


def test_lower_bound_only_message() -> None:
    with pytest.raises(ValidationError, match="at least 2 characters"):
        resolve_prompt("a", bounds=PromptBounds(min_length=2))


def test_json_prompt_uses_full_text_field() -> None:
    document = json.dumps({"title": "t", "full_text_prompt": "detailed scene"})

    assert resolve_prompt(None, mode=PromptMode.JSON, json_prompt=document) == "detailed scene"


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("", "Please enter a JSON prompt"),
        ("{not json", "Invalid JSON prompt"),
        (json.dumps({"title": "t"}), "full_text_prompt"),
        (json.dumps(["full_text_prompt"]), "full_text_prompt"),
        (json.dumps({"full_text_prompt": 12}), "must be a string"),
    ],
)
def test_json_prompt_errors(raw: str, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        resolve_prompt(None, mode=PromptMode.JSON, json_prompt=raw)


def test_json_prompt_bounds_apply_to_full_text() -> None:
    document = json.dumps({"full_text_prompt": "x" * 11})

    with pytest.raises(ValidationError, match='"full_text_prompt" must be between 1 and 10'):
        resolve_prompt(
            None,
            mode=PromptMode.JSON,
            json_prompt=document,
            bounds=PromptBounds(max_length=10),
        )


def test_prompted_request_delegates() -> None:
    request = PromptedRequest(
        prompt="ignored",
        prompt_mode=PromptMode.JSON,
        json_prompt=json.dumps({"full_text_prompt": "from json"}),
    )

    assert request.resolve_prompt(PromptBounds()) == "from json"
