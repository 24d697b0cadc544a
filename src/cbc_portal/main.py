# src/cbc_portal/main.py
"""Main entry point for the club portal API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from cbc_portal.api.v1 import (
    admin_router,
    auth_router,
    content_admin_router,
    content_router,
    dashboard_router,
    public_router,
)
from cbc_portal.core.settings import settings
from cbc_portal.portal import Portal, build_portal

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Events, projects, blog and membership for the Claude Builder Club",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(GZipMiddleware)

app.include_router(public_router, prefix="/api/v1")
app.include_router(content_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(content_admin_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    portal: Portal | None = getattr(app.state, "portal", None)
    if portal is None:
        portal = build_portal()
        app.state.portal = portal
    await portal.start()
    logger.info("Identity resolved as %s", portal.identity.state)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    portal: Portal | None = getattr(app.state, "portal", None)
    if portal:
        await portal.close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check; reports which backend the portal is reading from."""
    portal: Portal | None = getattr(app.state, "portal", None)
    backend = "hosted" if portal is not None and portal.source.configured else "fixture"
    return {"status": "ok", "backend": backend}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    uvicorn.run("cbc_portal.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
