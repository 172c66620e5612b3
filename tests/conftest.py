"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from searchbridge.config.settings import ConnectionSettings
from searchbridge.connection.resource import ConnectionResource


@pytest.fixture
def connection_settings() -> ConnectionSettings:
    """Connection settings with explicit test values (no env lookup)."""
    return ConnectionSettings.defaults().model_copy(
        update={"port": 9201, "number_of_shards": 2, "number_of_replicas": 1, "knn_dimension": 4}
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Stand-in for ``opensearchpy.OpenSearch``."""
    client = MagicMock(name="OpenSearch")
    client.info.return_value = {"cluster_name": "test-cluster", "version": {"number": "2.11.0"}}
    for method in ("create", "delete", "put_mapping", "put_index_template", "delete_index_template"):
        getattr(client.indices, method).return_value = {"acknowledged": True}
    client.indices.exists.return_value = True
    return client


@pytest.fixture
def resource(connection_settings: ConnectionSettings, mock_client: MagicMock) -> ConnectionResource:
    """Connection resource whose factory hands out ``mock_client``."""
    return ConnectionResource(connection_settings, client_factory=lambda _settings: mock_client)


@pytest.fixture
def sample_hits() -> list[dict[str, Any]]:
    """Three raw hits in descending score order; the second has no source."""
    return [
        {
            "_index": "articles",
            "_id": "a1",
            "_score": 2.5,
            "_source": {"title": "OpenSearch in Practice", "category": "search"},
            "highlight": {"title": ["<em>OpenSearch</em> in Practice"]},
        },
        {"_index": "articles", "_id": "a2", "_score": 1.7},
        {
            "_index": "articles",
            "_id": "a3",
            "_score": 0.4,
            "_source": {"title": "Vector Search Basics", "category": "vectors"},
        },
    ]


@pytest.fixture
def search_response(sample_hits: list[dict[str, Any]]) -> dict[str, Any]:
    """Raw ``search`` response wrapping ``sample_hits``."""
    return {
        "took": 4,
        "timed_out": False,
        "hits": {
            "total": {"value": 3, "relation": "eq"},
            "max_score": 2.5,
            "hits": sample_hits,
        },
    }
