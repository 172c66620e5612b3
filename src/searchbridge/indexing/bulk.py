"""Vector bulk indexer — Merge vectors with metadata into one bulk request.

Each document becomes a payload ``{vector_field: [...]}``; metadata keys are
merged in afterwards. A metadata key equal to ``vector_field`` is dropped
with a warning so the vector is never overwritten. Keys naming engine
metadata fields (``_id``, ``_index``, ``_routing`` ...) are dropped the same
way, since the engine rejects documents that carry them in the source.
Every other key is copied as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from searchbridge.connection.resource import ConnectionResource
from searchbridge.models.vector import BulkSummary, VectorDocument

logger = logging.getLogger(__name__)

DocumentLike = VectorDocument | tuple[str | None, Sequence[float], Mapping[str, Any] | None]

# Metadata fields the engine refuses inside a document source
RESERVED_FIELDS = frozenset(
    {
        "_id", "_index", "_routing", "_source", "_type",
        "_version", "_seq_no", "_primary_term", "_field_names", "_ignored",
    }
)


def _coerce(document: DocumentLike) -> VectorDocument:
    if isinstance(document, VectorDocument):
        return document
    doc_id, vector, metadata = document
    return VectorDocument(id=doc_id, vector=list(vector), metadata=dict(metadata) if metadata else None)


def build_payload(vector_field: str, document: VectorDocument) -> dict[str, Any]:
    """Return the stored source for one document."""
    payload: dict[str, Any] = {vector_field: [float(x) for x in document.vector]}
    for key, value in (document.metadata or {}).items():
        if key == vector_field:
            logger.warning(
                "Metadata key '%s' collides with the vector field; keeping the vector (doc id: %s)",
                key,
                document.id,
            )
            continue
        if key in RESERVED_FIELDS:
            logger.warning(
                "Metadata key '%s' is an engine metadata field; dropping it (doc id: %s)",
                key,
                document.id,
            )
            continue
        payload[key] = value
    return payload


def build_actions(index: str, vector_field: str, documents: Iterable[VectorDocument]) -> list[dict[str, Any]]:
    """Return the bulk body: an action line followed by a source line per document."""
    actions: list[dict[str, Any]] = []
    for document in documents:
        meta: dict[str, Any] = {"_index": index}
        if document.id is not None:
            meta["_id"] = document.id
        actions.append({"index": meta})
        actions.append(build_payload(vector_field, document))
    return actions


class VectorBulkIndexer:
    """Bulk-load vector documents through the shared connection.

    Args:
        resource: Connection resource providing the client.
    """

    def __init__(self, resource: ConnectionResource) -> None:
        self._resource = resource

    def bulk_index(
        self,
        index: str,
        vector_field: str,
        documents: Iterable[DocumentLike],
    ) -> BulkSummary:
        """Index all ``documents`` into ``index`` with one bulk request.

        Partial failures are logged, not raised; inspect ``summary.raw`` for
        per-item results. Transport errors propagate unchanged. An empty
        ``documents`` iterable sends no request at all (the bulk API rejects
        an empty body) and returns a summary with ``submitted=0``.

        Args:
            index: Target index name.
            vector_field: Name of the ``knn_vector`` field.
            documents: ``VectorDocument`` instances or ``(id, vector, metadata)`` tuples.

        Returns:
            Summary of the bulk request.
        """
        docs = [_coerce(d) for d in documents]
        logger.info("Bulk indexing %d vectors to index: %s", len(docs), index)

        if not docs:
            # The bulk API rejects an empty body
            logger.info("Bulk indexing completed. Errors: %s", False)
            return BulkSummary(submitted=0, errors=False)

        response = self._resource.acquire().bulk(body=build_actions(index, vector_field, docs))

        items = response.get("items", [])
        failed = sum(1 for item in items for result in item.values() if "error" in result)
        errors = bool(response.get("errors", False))

        if errors:
            logger.warning("Bulk indexing completed. Errors: %s (%d of %d items failed)", errors, failed, len(docs))
        else:
            logger.info("Bulk indexing completed. Errors: %s", errors)

        return BulkSummary(
            submitted=len(docs),
            errors=errors,
            failed=failed,
            took_ms=response.get("took", 0),
            raw=dict(response),
        )
