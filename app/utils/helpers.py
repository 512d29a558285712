from datetime import UTC, datetime

from fastapi import Request
from fastapi.routing import APIRoute
from starlette.routing import Match


def host(request: Request) -> str:
    """Return the client IP address."""
    return request.client.host if request.client else "unknown"


def now_str() -> str:
    """Return the current UTC time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M:%S")


def route_summary(request: Request) -> str | None:
    """
    Find the summary of the route a request will be dispatched to.

    Runs before routing, so the route table is matched by hand. Plain routes
    (docs, openapi.json) report their name instead.
    """
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return route.summary if isinstance(route, APIRoute) else getattr(route, "name", None)
    return None
