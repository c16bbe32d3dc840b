"""
Taskgate - multi-user task tracking API

FastAPI application factory with security hardening.
"""

import logging
import secrets
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from taskgate import __version__
from taskgate.api.api import api_router
from taskgate.auth.jwt import TokenService
from taskgate.core.config import Settings
from taskgate.core.database import Database
from taskgate.core.errors import register_exception_handlers

logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    logger.info("Starting Taskgate...")
    await app.state.db.init()

    yield

    logger.info("Shutting down Taskgate...")
    await app.state.db.close()


# =============================================================================
# Security Middleware
# =============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(self, app, enable_hsts: bool = False):
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"

        # Docs pages load their assets from a CDN
        if not request.url.path.startswith(("/docs", "/redoc")):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        # HSTS (only enable in production with HTTPS)
        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID for tracing."""

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The settings, token service and database are created here once and kept
    on ``app.state``; request dependencies read them from there.
    """
    if settings is None:
        settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Taskgate API",
        version=__version__,
        description="Multi-user task tracking with bearer-token authentication",
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
    )

    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.token_service = TokenService.from_settings(settings)

    # Middleware (order matters - last added = first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.enable_hsts)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/", tags=["root"])
    def home():
        """Root endpoint."""
        return {
            "name": "Taskgate",
            "version": __version__,
            "docs": "/docs" if settings.enable_docs else None,
        }

    @app.get("/health", tags=["health"])
    async def health_check(request: Request):
        """Health check endpoint for load balancers and monitoring."""
        db_status = "healthy"
        try:
            await request.app.state.db.ping()
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            db_status = "unhealthy"

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "database": db_status,
        }

    app.include_router(api_router)

    return app


# =============================================================================
# Development Server
# =============================================================================

def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(
        "taskgate.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
