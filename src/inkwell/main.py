# src/inkwell/main.py
"""Main entry point for the Inkwell application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from inkwell.api.v1 import (
    auth_router,
    posts_router,
    profile_router,
    roles_router,
    tags_router,
    users_router,
)
from inkwell.core.errors import InkwellError
from inkwell.core.roles import load_role_config
from inkwell.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Inkwell API",
    description="Content management API for posts with role-gated access",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(roles_router, prefix="/api/v1")
app.include_router(tags_router, prefix="/api/v1")
app.include_router(profile_router, prefix="/api/v1")


@app.exception_handler(InkwellError)
async def inkwell_error_handler(request: Request, exc: InkwellError) -> JSONResponse:
    """Translate domain errors into their HTTP status codes."""
    logger.debug("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.on_event("startup")
async def on_startup() -> None:
    app.state.role_config = load_role_config(settings.role_config_file)
    logger.info(
        "Loaded %d roles, most basic role is %s",
        len(app.state.role_config.roles),
        app.state.role_config.most_basic_role,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


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
    uvicorn.run("inkwell.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
