"""Health check endpoints."""

from fastapi import APIRouter, Request

from swapbridge.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "swapbridge"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration and routing engine info."""
    settings = get_settings()
    engine = request.app.state.routing_engine
    return {
        "status": "healthy",
        "service": "swapbridge",
        "version": "0.1.0",
        "routing_engine": {
            "type": type(engine).__name__,
            "client_id": engine.client_id or "(unrestricted)",
        },
        "config": settings.get_safe_dict(),
    }
