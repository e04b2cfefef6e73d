"""Delivery status API routes."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for delivery status."""

    remote_state: str
    enabled: bool
    draining: bool
    queue_depth: int
    delivered: int
    failed: int
    dropped: int


def create_status_router(app: IApplication) -> APIRouter:
    """Create status router."""
    router = APIRouter(prefix="/api", tags=["status"])

    @router.get("/status", response_model=StatusResponse)
    async def get_status() -> dict:
        """Current remote delivery state and counters."""
        relay = app.relay
        stats = relay.stats
        return {
            "remote_state": relay.remote_state.value,
            "enabled": relay.enabled,
            "draining": relay.draining,
            "queue_depth": relay.queue_depth,
            "delivered": stats.delivered,
            "failed": stats.failed,
            "dropped": stats.dropped,
        }

    return router
