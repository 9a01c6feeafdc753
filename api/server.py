from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.auth import install_auth_gate
from api.errors import register_error_handlers
from api.routes import router
from app_logging.activity_logger import ActivityLogger
from config.settings import Settings, get_settings
from issue_tracker.client import IssueClient
from llm.generation_client import GenerationClient

logger = ActivityLogger("server")


def create_app(
    settings: Optional[Settings] = None,
    issue_client: Optional[IssueClient] = None,
    generation_client: Optional[GenerationClient] = None,
) -> FastAPI:
    """Build the API app. Clients default to ones built from settings."""
    settings = settings or get_settings()

    missing = settings.missing_jira_settings
    if missing:
        logger.warning("jira_settings_missing", missing=missing)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("server_started", api_prefix=settings.api_prefix)
        yield
        await app.state.issue_client.close()
        logger.info("server_stopped")

    app = FastAPI(title="Agile Assist API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.issue_client = issue_client or IssueClient(settings)
    app.state.generation_client = generation_client or GenerationClient(settings)

    # Registered before CORS so CORS stays the outermost layer
    install_auth_gate(app, settings.api_prefix, exempt=["/update-description"])

    # Open CORS for the Forge front-end (prototype posture)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def serve(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    uvicorn.run(
        "api.server:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
