"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(request: Request) -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {
        "status": "ok",
        "open_sessions": len(request.app.state.sessions),
        "geocoding_configured": bool(settings.google_maps_api_key),
    }
