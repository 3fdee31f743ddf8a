"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.
It sets up the webhook route, the lifespan hooks and the global
exception handler.

Design Decisions:
- Use lifespan events for startup/shutdown
- CORS headers are set by the webhook route itself, unconditionally
- Unexpected errors still answer in the webhook's error shape
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from levanta_webhook import __version__
from levanta_webhook.config import get_settings
from levanta_webhook.logging_config import get_logger, setup_logging
from levanta_webhook.webhook import router as webhook_router
from levanta_webhook.webhook.handler import CORS_HEADERS, WEBHOOK_PATH

# Initialize logging first
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events for the application.
    """
    settings = get_settings()

    logger.info(
        "Starting Levanta webhook receiver",
        host=settings.host,
        port=settings.port,
        path=WEBHOOK_PATH
    )

    if not settings.signature_verification_enabled:
        logger.warning(
            "LEVANTA_WEBHOOK_SECRET is not set, signature verification is disabled"
        )

    yield

    logger.info("Shutting down Levanta webhook receiver")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Levanta Webhook",
        description="Receiver for signed Levanta affiliate platform events",
        version=__version__,
        lifespan=lifespan,
    )

    # Register routes
    app.include_router(webhook_router)

    # Verbs the webhook route does not register still get its 405 shape
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(
        request: Request,
        exc: StarletteHTTPException
    ) -> Response:
        """Answer unregistered methods on the webhook route like the route does."""
        if (
            exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED
            or request.url.path != WEBHOOK_PATH
        ):
            return await http_exception_handler(request, exc)

        logger.debug("Method not allowed", method=request.method)
        return JSONResponse(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            content={"error": "Method not allowed"},
            headers={**(exc.headers or {}), **CORS_HEADERS}
        )

    # Add global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc)
            },
            headers=CORS_HEADERS
        )

    return app


# Create the application instance
app = create_app()
