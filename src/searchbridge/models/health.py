"""Cluster health model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClusterHealth(BaseModel):
    """Health status of the OpenSearch cluster behind a connection resource."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of the health round-trip in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of the health check")
    message: str | None = Field(default=None, description="Additional health message")
