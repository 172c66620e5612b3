"""Search request options and result envelope models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class HighlightSpec(BaseModel):
    """Highlighting for one field, with the markers wrapped around matches."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Field to highlight")
    pre_tag: str = Field(default="<em>", description="Marker inserted before each match")
    post_tag: str = Field(default="</em>", description="Marker inserted after each match")

    def to_dsl(self) -> dict[str, Any]:
        return {"fields": {self.field: {"pre_tags": [self.pre_tag], "post_tags": [self.post_tag]}}}


class SearchOptions(BaseModel):
    """Options controlling a single search request."""

    model_config = ConfigDict(frozen=True)

    size: int | None = Field(default=None, ge=0, description="Maximum hits to return (None = engine default)")
    highlight: HighlightSpec | None = Field(default=None, description="Optional highlight specification")


class TotalHits(BaseModel):
    """Total hit count and whether it is exact (``eq``) or a lower bound (``gte``)."""

    value: int = Field(default=0, description="Number of matching documents")
    relation: Literal["eq", "gte"] = Field(default="eq", description="Exactness of ``value``")


class Hit(BaseModel):
    """One ranked search hit."""

    id: str | None = Field(default=None, description="Document ID")
    index: str | None = Field(default=None, description="Index holding the document")
    score: float | None = Field(default=None, description="Relevance score")
    source: dict[str, Any] | None = Field(default=None, description="Stored document payload")
    highlight: dict[str, list[str]] = Field(default_factory=dict, description="Highlighted fragments per field")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> Hit:
        return cls(
            id=raw.get("_id"),
            index=raw.get("_index"),
            score=raw.get("_score"),
            source=raw.get("_source"),
            highlight=raw.get("highlight") or {},
        )


class ResultEnvelope(BaseModel):
    """Search response unpacked into typed hits.

    Hits keep the engine's order (descending score); nothing is re-sorted.
    """

    total: TotalHits = Field(default_factory=TotalHits, description="Total hit count")
    hits: list[Hit] = Field(default_factory=list, description="Hits in engine order")
    max_score: float | None = Field(default=None, description="Highest score among hits")
    took_ms: int = Field(default=0, description="Engine-side execution time in ms")
    timed_out: bool = Field(default=False, description="Whether the engine hit its own timeout")

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> ResultEnvelope:
        """Build an envelope from a raw ``search`` response body."""
        hits = response.get("hits") or {}
        total = hits.get("total")
        # Legacy responses report the total as a bare integer
        if isinstance(total, int):
            total = {"value": total, "relation": "eq"}

        return cls(
            total=TotalHits(**total) if total else TotalHits(value=0),
            hits=[Hit.from_raw(raw) for raw in hits.get("hits", [])],
            max_score=hits.get("max_score"),
            took_ms=response.get("took", 0),
            timed_out=response.get("timed_out", False),
        )
