"""
API sub-package for the Dynamic Renderer service.

This package contains the FastAPI application, its route definitions and the
Pydantic request/response envelopes.

No objects are exported directly from this package level; import `api.main`
or routers from `api.routes` directly.
"""

__all__ = []
