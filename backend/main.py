"""
Barq Preview FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from backend.config import settings
from backend.routes import preview as preview_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="Barq Preview",
    docs_url="/docs" if settings.is_development else None,
    redoc_url=None,
)

# Register routes
app.include_router(preview_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
