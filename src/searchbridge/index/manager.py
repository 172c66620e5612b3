"""Index lifecycle manager — Index and template administration.

Every method is a direct translation to one ``indices`` API call. Shard and
replica counts default to the connection settings. Mappings accept full
property dicts or a type-name shorthand::

    manager.create_index("articles", mapping={"title": "text", "category": "keyword"})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from searchbridge.connection.resource import ConnectionResource

logger = logging.getLogger(__name__)

FieldMapping = Mapping[str, str | Mapping[str, Any]]


def normalize_properties(mapping: FieldMapping | None) -> dict[str, Any]:
    """Expand ``{"title": "text"}`` shorthand into ``{"title": {"type": "text"}}``."""
    properties: dict[str, Any] = {}
    for name, definition in (mapping or {}).items():
        properties[name] = {"type": definition} if isinstance(definition, str) else dict(definition)
    return properties


class IndexLifecycleManager:
    """Create, inspect and delete indices and index templates.

    Transport and validation errors from the engine propagate unchanged.

    Args:
        resource: Connection resource providing the client and defaults.
    """

    def __init__(self, resource: ConnectionResource) -> None:
        self._resource = resource

    def _index_settings(self, shards: int | None, replicas: int | None) -> dict[str, Any]:
        settings = self._resource.settings
        return {
            "number_of_shards": settings.number_of_shards if shards is None else shards,
            "number_of_replicas": settings.number_of_replicas if replicas is None else replicas,
        }

    # ── Indices ──────────────────────────────────────────────────────────

    def create_index(
        self,
        name: str,
        mapping: FieldMapping | None = None,
        enable_vector_index: bool = False,
        shards: int | None = None,
        replicas: int | None = None,
    ) -> bool:
        """Create an index.

        Args:
            name: Index name.
            mapping: Field mapping; omitted from the request when empty.
            enable_vector_index: Set ``index.knn`` so k-NN fields can be searched.
            shards: Primary shard count (defaults to settings).
            replicas: Replica count (defaults to settings).

        Returns:
            The engine's acknowledgment flag.
        """
        logger.info("Creating index: %s, enable_vector_index=%s", name, enable_vector_index)

        index_settings = self._index_settings(shards, replicas)
        if enable_vector_index:
            index_settings["knn"] = True

        body: dict[str, Any] = {"settings": {"index": index_settings}}
        properties = normalize_properties(mapping)
        if properties:
            body["mappings"] = {"properties": properties}

        response = self._resource.acquire().indices.create(index=name, body=body)
        acknowledged = bool(response.get("acknowledged", False))
        logger.info("Index %s created: acknowledged=%s", name, acknowledged)
        return acknowledged

    def delete_index(self, name: str) -> bool:
        logger.info("Deleting index: %s", name)
        response = self._resource.acquire().indices.delete(index=name)
        acknowledged = bool(response.get("acknowledged", False))
        logger.info("Index %s deleted: acknowledged=%s", name, acknowledged)
        return acknowledged

    def index_exists(self, name: str) -> bool:
        """Check whether ``name`` exists. Transport failures raise, never return False."""
        return bool(self._resource.acquire().indices.exists(index=name))

    def put_mapping(self, name: str, fields: FieldMapping) -> bool:
        """Add fields to an existing index mapping.

        Changing the type of an existing field is rejected by the engine and
        raises ``opensearchpy.RequestError``.
        """
        logger.info("Updating mapping for index: %s", name)
        response = self._resource.acquire().indices.put_mapping(
            index=name,
            body={"properties": normalize_properties(fields)},
        )
        acknowledged = bool(response.get("acknowledged", False))
        logger.info("Mapping updated for index %s: acknowledged=%s", name, acknowledged)
        return acknowledged

    def get_index_settings(self, name: str) -> dict[str, Any]:
        return dict(self._resource.acquire().indices.get_settings(index=name))

    def get_index_mapping(self, name: str) -> dict[str, Any]:
        return dict(self._resource.acquire().indices.get_mapping(index=name))

    def refresh_index(self, name: str) -> bool:
        """Make recently indexed documents searchable. Returns True unless the call raises."""
        self._resource.acquire().indices.refresh(index=name)
        return True

    # ── Templates ────────────────────────────────────────────────────────

    def put_index_template(
        self,
        name: str,
        pattern: str,
        mapping: FieldMapping | None = None,
        shards: int | None = None,
        replicas: int | None = None,
    ) -> bool:
        """Create or replace a composable index template applied to indices matching ``pattern``."""
        logger.info("Creating index template: %s, pattern: %s", name, pattern)

        template = {
            "settings": {"index": self._index_settings(shards, replicas)},
            "mappings": {"properties": normalize_properties(mapping)},
        }

        response = self._resource.acquire().indices.put_index_template(
            name=name,
            body={"index_patterns": [pattern], "template": template},
        )
        acknowledged = bool(response.get("acknowledged", False))
        logger.info("Index template %s created: acknowledged=%s", name, acknowledged)
        return acknowledged

    def delete_index_template(self, name: str) -> bool:
        logger.info("Deleting index template: %s", name)
        response = self._resource.acquire().indices.delete_index_template(name=name)
        acknowledged = bool(response.get("acknowledged", False))
        logger.info("Index template %s deleted: acknowledged=%s", name, acknowledged)
        return acknowledged

    # ── Mapping helpers ──────────────────────────────────────────────────

    def vector_field_mapping(
        self,
        dimension: int | None = None,
        space_type: str | None = None,
        engine: str | None = None,
    ) -> dict[str, Any]:
        """Return a ``knn_vector`` property using the settings' k-NN defaults."""
        settings = self._resource.settings
        return {
            "type": "knn_vector",
            "dimension": dimension or settings.knn_dimension,
            "method": {
                "name": "hnsw",
                "space_type": space_type or settings.knn_space_type,
                "engine": engine or settings.knn_engine,
            },
        }
