"""Result extraction helpers."""

from __future__ import annotations

from typing import Any

from searchbridge.models.search import Hit, ResultEnvelope


def extract_documents(envelope: ResultEnvelope) -> list[dict[str, Any] | None]:
    """Return one payload per hit, in hit order.

    A hit without a stored payload yields ``None`` at its position, so the
    result always lines up index-for-index with ``envelope.hits``.
    """
    return [hit.source for hit in envelope.hits]


def extract_highlights(hit: Hit) -> dict[str, list[str]]:
    """Return highlighted fragments per field, or ``{}`` when there are none."""
    return {field: list(fragments) for field, fragments in hit.highlight.items()}
