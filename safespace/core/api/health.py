"""
Health check endpoint.

Returns service status and relay counters.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """
    Health check endpoint.

    Returns:
        Service status, live WebSocket connection count and relay counters
    """
    state = request.app.state
    return {
        "status": "ok",
        "service": "safespace-core",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "connections": len(state.registry),
        "relay": state.metrics.snapshot(),
    }
