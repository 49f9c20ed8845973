"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from oik_scheduler.infrastructure.cache import InMemoryProjectionCache, ProjectionCache

_projection_cache = InMemoryProjectionCache()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_projection_cache() -> ProjectionCache:
    """Provide the shared upcoming-dues cache"""
    return _projection_cache
