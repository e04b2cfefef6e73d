"""API routes."""

from .logs import create_logs_router
from .status import create_status_router

__all__ = ["create_logs_router", "create_status_router"]
