"""Log ingestion API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...models import LogLevel


class LogRequest(BaseModel):
    """Request model for a structured log event."""

    level: LogLevel = LogLevel.INFO
    message: str
    source: str | None = None
    details: Any = None


class RawLineRequest(BaseModel):
    """Request model for an unstructured external log line."""

    line: str


class AcceptedResponse(BaseModel):
    """Response model for accepted events."""

    status: str


def create_logs_router(app: IApplication) -> APIRouter:
    """Create log ingestion router."""
    router = APIRouter(prefix="/api", tags=["logs"])

    @router.post("/logs", response_model=AcceptedResponse, status_code=202)
    async def ingest_log(request: LogRequest) -> dict:
        """Ingest a structured log event."""
        try:
            app.relay.log(
                request.level,
                request.message,
                source=request.source,
                details=request.details,
            )
            return {"status": "accepted"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/logs/raw", response_model=AcceptedResponse, status_code=202)
    async def ingest_raw_line(request: RawLineRequest) -> dict:
        """Normalize and ingest a raw log line."""
        try:
            app.relay.ingest_raw_line(request.line)
            return {"status": "accepted"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
