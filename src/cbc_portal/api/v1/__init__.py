# src/cbc_portal/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    content_admin_router,
    content_router,
    dashboard_router,
    public_router,
)

__all__ = [
    "public_router",
    "content_router",
    "auth_router",
    "dashboard_router",
    "admin_router",
    "content_admin_router",
]
