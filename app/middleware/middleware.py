# app/middleware/middleware.py
"""
Middleware components for the Inkwell backend.

This module contains middleware for security headers, request logging and
CORS handling, plus the lifespan event handler that prepares the database
and releases its connections.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from pathlib import Path
from re import compile as re_compile
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs import file_logger, settings
from app.db import close_db, init_db
from app.monitoring import bind_request_id, clear_context, configure_logging
from app.utils.helpers import host, route_summary

REQUEST_ID_PATTERN = re_compile(r"[A-Za-z0-9._-]{1,64}")

if log_to_file := settings.LOG_TO_FILE:
    Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = getLogger("rich")
file_logger(logger)
for handler in logger.handlers:
    handler.setFormatter(JsonFormatter())

configure_logging()
install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Prepare the database on startup and release resources on shutdown.

    Outside production the tables are created from the models; in production
    the schema belongs to Alembic and is left untouched.
    """
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})")
    if log_to_file:
        logger.info(f"Logging to file: {settings.LOG_FILE}")

    try:
        if not settings.is_production:
            await init_db()
    except Exception:
        logger.exception("Database initialization failed")
        raise

    logger.info(
        f"Caches ready: identity ttl={app.state.identity_cache.ttl}s, "
        f"posts ttl={app.state.posts_cache.ttl}s",
    )
    logger.info(
        f"Sessions: cookie '{settings.SESSION_COOKIE_NAME}', "
        f"{settings.SESSION_MAX_AGE_HOURS}h absolute lifetime",
    )

    yield

    logger.info(f"Shutting down {app.title}")
    app.state.identity_cache.invalidate()
    app.state.posts_cache.invalidate()
    try:
        await close_db()
    except Exception:
        logger.exception("Error while closing database connections")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    # Credentials are required for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log each request and its outcome under a request id.

    A client-supplied ``X-Request-ID`` is reused when it looks like an id;
    anything else is replaced by a fresh one. The id is bound to the
    structlog context for the duration of the request and echoed back.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = perf_counter()
        supplied = request.headers.get("X-Request-ID", "")
        request_id = supplied if REQUEST_ID_PATTERN.fullmatch(supplied) else uuid4().hex
        bind_request_id(request_id)

        route_info = route_summary(request) or f"{request.method} {request.url.path}"
        has_session = settings.SESSION_COOKIE_NAME in request.cookies
        logger.info(
            f"Request {request_id}: {route_info}, from ip: {host(request)}"
            f"{' (session cookie)' if has_session else ''}",
        )

        try:
            response = await call_next(request)
        finally:
            clear_context()
        duration = perf_counter() - start_time

        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"Response {request_id}: {response.status_code} for {request.method} "
            f"{request.url.path} in {duration:.3f}s",
        )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
