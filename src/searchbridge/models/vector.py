"""Vector document and bulk result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class VectorDocument(BaseModel):
    """A vector plus optional metadata, ready for bulk indexing.

    ``id=None`` lets the engine assign an identifier.
    """

    id: str | None = Field(default=None, description="Document ID (None = engine-assigned)")
    vector: list[float] = Field(min_length=1, description="Embedding vector")
    metadata: dict[str, Any] | None = Field(default=None, description="Extra fields stored next to the vector")


class BulkSummary(BaseModel):
    """Outcome of one bulk request.

    ``errors`` is the engine's aggregate flag. Per-item failures are left in
    ``raw["items"]`` for callers that need them.
    """

    submitted: int = Field(default=0, description="Number of index operations sent")
    errors: bool = Field(default=False, description="Engine-reported aggregate error flag")
    failed: int = Field(default=0, description="Number of items carrying an error")
    took_ms: int = Field(default=0, description="Engine-side execution time in ms")
    raw: dict[str, Any] = Field(default_factory=dict, description="Raw bulk response")
