"""FastAPI routers exposing prompt design and generation runs."""

from .generations_api import router as generations_router
from .prompts_api import router as prompts_router

__all__ = ["generations_router", "prompts_router"]
