"""Utility helper functions."""

from app.utils.api_response import ApiResponse
from app.utils.helpers import host, now_str, route_summary

__all__ = [
    "ApiResponse",
    "host",
    "now_str",
    "route_summary",
]
