"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from eligibility_engine.core import EligibilityMetrics, configure_logging, get_settings
from eligibility_engine.unpaid_leave import (
    DecisionEngineAdapter,
    EligibilityService,
    create_mcp_server,
    router as eligibility_router,
)

logger = logging.getLogger(__name__)


def build_service() -> EligibilityService:
    """Load the decision table and wire the evaluation service.

    Raises TableLoadError if the bundled table cannot be loaded.
    """
    settings = get_settings()
    logger.info("Decision table: %s", settings.decision_table_path)
    adapter = DecisionEngineAdapter.from_file(settings.decision_table_path)
    return EligibilityService(
        adapter,
        EligibilityMetrics(),
        max_workers=settings.evaluation_workers,
    )


def create_app(service: EligibilityService | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    service = service or build_service()
    mcp = create_mcp_server(service)
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s on %s", settings.app_name, settings.bind_address)
        async with mcp.session_manager.run():
            yield
        logger.info("Shutting down...")
        service.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description="Unpaid leave assistance eligibility evaluation",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.eligibility_service = service

    cors_origins = (
        settings.cors_origins.split(",") if settings.cors_origins != "*" else ["*"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(eligibility_router)  # /evaluate

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "endpoints": {
                "evaluate": "/evaluate - Unpaid leave eligibility evaluation",
                "mcp": "/mcp - MCP streamable HTTP endpoint",
                "metrics": "/metrics - Prometheus metrics",
                "health": "/health - Health check",
            },
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/metrics")
    async def metrics():
        """Prometheus text exposition of the evaluation metrics."""
        return Response(
            content=service.metrics.gather(),
            media_type=service.metrics.content_type,
        )

    # Serves /mcp; mounted last so the routes above take precedence.
    app.mount("/", mcp_app)

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "eligibility_engine.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
