"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finepay.api.router import api_router
from finepay.config import Settings, get_settings
from finepay.core.exceptions import AppException, ClientInputError
from finepay.core.logging import configure_logging
from finepay.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from finepay.gateways.stripe_gateway import StripeGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    app.state.http_client = httpx.AsyncClient(timeout=settings.upstream_timeout_seconds)
    logger.info(
        f"{settings.app_name} {settings.app_version} started "
        f"({settings.environment}, {settings.source_currency}->{settings.settlement_currency})"
    )

    yield

    # Shutdown
    await app.state.http_client.aclose()
    await app.state.checkout_gateway.aclose()


def create_application(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are resolved here so a missing secret stops startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Traffic fine payments through Stripe Checkout",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.checkout_gateway = StripeGateway(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        timeout=settings.upstream_timeout_seconds,
        webhook_tolerance=settings.webhook_tolerance_seconds,
    )

    # Exception handlers
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request bodies as client input errors."""
        error = ClientInputError()
        return JSONResponse(status_code=error.status_code, content={"error": error.detail})

    # Middleware (order matters - first added = last executed)
    # 1. Security headers (outermost)
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.environment == "production")

    # 2. Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # 3. CORS
    allow_all = settings.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "finepay.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
    )
