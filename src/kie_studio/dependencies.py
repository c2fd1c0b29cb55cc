"""Dependency wiring helpers."""

from fastapi import FastAPI

from .api.generations_api import router as generations_router
from .api.prompts_api import router as prompts_router
from .config import AppConfig
from .features import build_controllers
from .generation.generation_service import GenerationServices
from .prompting.gemini_prompt import GeminiPromptDesigner


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount routers and attach shared services."""
    services = GenerationServices.from_config(config)
    prompt_designer = GeminiPromptDesigner(
        api_url_base=config.gemini_api_base_url,
        model=config.gemini_prompt_model,
        check_model=config.gemini_check_model,
        timeout_seconds=config.request_timeout_seconds,
    )

    app.state.config = config
    app.state.services = services
    app.state.controllers = build_controllers(services)
    app.state.prompt_designer = prompt_designer

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(prompts_router)
    app.include_router(generations_router)
