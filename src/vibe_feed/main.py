# src/vibe_feed/main.py
"""Main entry point for the Vibe Feed application."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from vibe_feed.api.v1 import (
    auth_router,
    comments_router,
    dashboard_router,
    posts_router,
    sentiment_router,
    storage_router,
)
from vibe_feed.core.settings import settings
from vibe_feed.db.session import create_tables
from vibe_feed.services.sentiment import SentimentError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Vibe Feed API",
    description="Social feed with AI-powered sentiment analysis",
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
app.include_router(comments_router, prefix="/api/v1")
app.include_router(storage_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
# The relay keeps its function-style path outside the versioned API.
app.include_router(sentiment_router)

# Uploaded images are served read-only; the directory may not exist yet.
app.mount(
    settings.storage_public_path,
    StaticFiles(directory=settings.storage_root, check_dir=False),
    name="storage",
)


@app.exception_handler(SentimentError)
async def sentiment_error_handler(request: Request, exc: SentimentError) -> JSONResponse:
    """Render relay failures as ``{"error": message}`` with their status."""
    if exc.status_code >= 500:
        logger.error("Error in %s: %s", request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.on_event("startup")
async def on_startup() -> None:
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    if settings.auto_create_tables:
        create_tables()
    if not settings.ai_gateway_api_key:
        logger.warning("AI_GATEWAY_API_KEY is not set; sentiment analysis will fail")


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
        "description": "Social feed with AI-powered sentiment analysis",
        "docs": "/docs",
        "redoc": "/redoc"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vibe_feed.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
