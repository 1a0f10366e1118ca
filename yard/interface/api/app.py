"""FastAPI application."""

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from yard.config import Settings
from yard.domain.error import DomainError, RateLimitedError
from yard.interface.api.routes import feed, health, invitations, profiles, transactions
from yard.interface.error import AuthenticationError, status_code_for
from yard.util.di.container import create_container, setup_di
from yard.util.jwt import JWTError
from yard.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"error": code, "detail": message}``."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logfire.error("Request failed", path=request.url.path, error=exc.code)
    headers = {}
    if isinstance(exc, RateLimitedError):
        headers["Retry-After"] = exc.retry_after.isoformat()
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": exc.message},
        headers=headers,
    )


async def authentication_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "unauthorized", "detail": str(exc)},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use instead of the production one (tests)
    """
    settings = Settings()

    # Outbound notification calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Yard Ledger API",
        description="Time-banking ledger: log, confirm and share hours exchanged between neighbours",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(DomainError, domain_error_handler)
    app_instance.add_exception_handler(AuthenticationError, authentication_error_handler)
    app_instance.add_exception_handler(JWTError, authentication_error_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(transactions.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(feed.router)
    app_instance.include_router(profiles.router)

    return app_instance
