"""Common schemas shared by module services."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Standard health check response."""

    status: str = "ok"
