# app/main.py

"""Inkwell Backend - JSON API for a blog with comment moderation."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.errors.validation import http_exception_handler, validation_exception_handler
from app.managers import TTLCache, limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import (
    auth_router,
    categories_router,
    comments_router,
    posts_router,
    user_router,
)
from app.utils import ApiResponse, now_str

API_VERSION = "1.0.0"

app = FastAPI(
    title=settings.APP_NAME,
    summary="Posts, categories and moderated comments behind cookie sessions",
    version=API_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None,
    swagger_ui_parameters={"docExpansion": "none", "operationsSorter": "method"},
)

# Shared by every request; routes reach them through request.app.state
app.state.identity_cache = TTLCache(settings.IDENTITY_CACHE_TTL, name="identity")
app.state.posts_cache = TTLCache(settings.POSTS_CACHE_TTL, name="posts")
app.state.limiter = limiter

configure_cors(app)

# Added last runs first: proxy headers resolve the client ip before logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=settings.TRUSTED_PROXIES)

for router in (auth_router, posts_router, categories_router, comments_router, user_router):
    app.include_router(router)

handlers = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in handlers]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "version": API_VERSION,
                            "status": "ok",
                            "timestamp": "2025-01-01 00:00:00",
                            "caches": {"identity": 0, "posts": 1},
                        },
                        "message": "OK",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Report liveness together with the size of each in-process cache.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Envelope with version, timestamp and cache sizes.
    """
    state = request.app.state
    return ApiResponse.success(
        {
            "version": API_VERSION,
            "status": "ok",
            "timestamp": now_str(),
            "caches": {"identity": len(state.identity_cache), "posts": len(state.posts_cache)},
        },
    )
