"""FastAPI application entry point."""

import uvicorn
from fastapi import FastAPI

from .config import AppConfig
from .dependencies import include_routers
from .logging import configure_logging


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    cfg = config or AppConfig.build_default()
    configure_logging(cfg.log_level)
    app = FastAPI(title="kie-studio")
    include_routers(app, cfg)
    return app


def serve(host: str = "127.0.0.1", port: int = 8000) -> None:
    uvicorn.run("kie_studio.main:app", host=host, port=port)


app = create_app()
