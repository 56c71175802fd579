"""FastAPI application."""

import logging

from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from folio.application.usecase.auth import InvalidProviderError
from folio.config import load_settings
from folio.interface.api.cookies import clear_auth_cookies
from folio.interface.api.routes import auth, health, users
from folio.interface.api.security import REFRESH_TOKEN_HEADER
from folio.interface.error import InterfaceError, UnauthorizedError
from folio.util.di.container import (
    container_lifespan,
    create_container,
    setup_di,
)
from folio.util.logging import setup_logging
from folio.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)

logger = logging.getLogger(__name__)


def error_envelope(status_code: int, message: str, code: str) -> JSONResponse:
    """Render the JSON error envelope shared by every failing endpoint."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "code": code},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Render every known error as ``{"success": false, "error", "code"}``."""

    @app.exception_handler(InterfaceError)
    async def handle_interface_error(
        request: Request, exc: InterfaceError
    ) -> JSONResponse:
        response = error_envelope(exc.status_code, exc.message, exc.code)
        if isinstance(exc, UnauthorizedError) and exc.clear_credentials:
            clear_auth_cookies(response, request.app.state.settings)
        return response

    @app.exception_handler(InvalidProviderError)
    async def handle_invalid_provider(
        request: Request, exc: InvalidProviderError
    ) -> JSONResponse:
        logger.info(f"Rejected login for provider: {exc.provider}")
        return error_envelope(
            400, "Unsupported or unconfigured OAuth provider", "INVALID_PROVIDER"
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else None
        return error_envelope(400, message or "Invalid request", "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_envelope(500, "Internal server error", "INTERNAL_ERROR")


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; defaults to the production container.
            Tests pass a container built from mock providers.
    """
    settings = load_settings()
    setup_logging(settings)

    # Instrument httpx for outbound HTTP requests
    # (Logfire must be configured before instrumentation)
    instrument_httpx()

    app_instance = FastAPI(
        title="Folio API",
        description="Backend API for Folio - a personal blog and portfolio",
        version="0.1.0",
        lifespan=container_lifespan,
    )
    app_instance.state.settings = settings

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup CORS middleware
    # Credentials are required for the auth cookies; refreshed tokens for
    # bearer-style clients travel in exposed response headers
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            REFRESH_TOKEN_HEADER,
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Authorization", REFRESH_TOKEN_HEADER],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    setup_di(app_instance, container or create_container())

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)

    register_error_handlers(app_instance)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
