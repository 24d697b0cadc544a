# src/cbc_portal/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .content import admin_router as content_admin_router
from .content import router as content_router
from .dashboard import router as dashboard_router
from .public import router as public_router

__all__ = [
    "public_router",
    "content_router",
    "auth_router",
    "dashboard_router",
    "admin_router",
    "content_admin_router",
]
