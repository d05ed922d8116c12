"""FastAPI application for the stream alerts service.

Serves creator status pages, registers poll tasks and runs the in-process
poll scheduler.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Response

from logging_module.config import LoggingConfig
from logging_module.logger import setup_logging
from shared.clock import utc_now

from alerts_api.dependencies import get_services
from alerts_api.error_handler import setup_exception_handlers
from alerts_api.routes import admin, creators
from alerts_api.services import Services, build_services

logger = logging.getLogger(__name__)

SERVICE_NAME = "stream-alerts"
VERSION = "1.0.0"


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Create the application.

    Args:
        services: Pre-built services. Built from the environment at startup
            when omitted.

    Returns:
        FastAPI: Configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup/shutdown."""
        if services is None:
            setup_logging(LoggingConfig.from_env())
        logger.info("Starting stream alerts service...")
        app.state.services = services or build_services()

        try:
            scheduler = app.state.services.scheduler
            scheduler.load()
            if app.state.services.api_config.enable_scheduler:
                scheduler.start()
            else:
                logger.warning("Scheduler disabled, polls will not run")

            logger.info("Service started successfully")
            yield

        finally:
            logger.info("Shutting down stream alerts service...")
            await app.state.services.aclose()
            logger.info("Service shut down complete")

    app = FastAPI(
        title="Stream Alerts",
        description="Live stream alerts for allow-listed Twitch creators",
        version=VERSION,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    app.include_router(creators.router, prefix="/creators", tags=["Creators"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])

    @app.get("/")
    async def root():
        """Root endpoint.

        Returns:
            dict: Service information.
        """
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running",
            "endpoints": {
                "creator": "/creators/{creator}",
                "schedule": "/creators/{creator}/schedule",
                "tasks": "/admin/tasks",
                "health": "/health",
                "metrics": "/metrics",
            },
        }

    @app.get("/health")
    async def health_check(services: Services = Depends(get_services)):
        """Health check endpoint.

        Returns:
            dict: Health status information.
        """
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "timestamp": utc_now().isoformat(),
            "scheduled_tasks": len(services.scheduler.query()),
            "scheduler_enabled": services.api_config.enable_scheduler,
        }

    @app.get("/metrics")
    async def metrics(services: Services = Depends(get_services)):
        """Prometheus metrics.

        Returns:
            Response: Metrics in Prometheus text format.
        """
        return Response(
            content=services.metrics.get_metrics(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from alerts_api.config import ApiConfig

    config = ApiConfig.from_env()

    uvicorn.run(
        "alerts_api.app:app",
        host=config.host,
        port=config.port,
        log_level=LoggingConfig.from_env().log_level.lower(),
        reload=config.debug,
    )
