"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = Field(default=None, description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the document store is reachable."""

    status: str = Field(default="ok", description="Readiness status")
    cache: str = Field(default="memory", description="Reference-data cache backend (memory | redis)")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when Firestore is not initialized (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason (e.g. Firestore not configured)")
