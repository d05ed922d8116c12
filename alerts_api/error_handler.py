"""Mapping of service errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared.errors import ConfigurationError, NotFoundError, UpstreamAPIError

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup exception handlers for the app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        """Unknown or rejected creators."""
        logger.info(f"Not found: {exc}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(UpstreamAPIError)
    async def upstream_handler(request: Request, exc: UpstreamAPIError):
        """Failures talking to the streaming platform."""
        logger.error(f"Upstream error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": exc.description, "upstream_status": exc.status},
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        """Fatal configuration problems such as a token expiring in the past."""
        logger.error(f"Configuration error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Service misconfigured"},
        )
