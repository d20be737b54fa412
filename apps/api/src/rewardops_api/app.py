from fastapi import FastAPI

from rewardops_api.core.settings import settings
from .api.routes import api_router
from .core.logging import configure_logging
from .observability.tracing import configure_tracing


APP_VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Application factory for the RewardOps curation service."""
    configure_logging(
        service_name="rewardops-api",
        environment=settings.environment,
        version=APP_VERSION,
    )

    app = FastAPI(
        title="RewardOps Curation API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    configure_tracing(
        app,
        service_name="rewardops-api",
        service_version=APP_VERSION,
        environment=settings.environment,
    )

    app.include_router(api_router)

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "version": APP_VERSION,
        }

    return app
