"""Integration test fixtures for a running OpenSearch cluster.

Expects OpenSearch (security plugin disabled) on localhost:9201, e.g.:
    docker run -p 9201:9200 -e discovery.type=single-node
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterator

import httpx
import pytest

from searchbridge.config.settings import ConnectionSettings
from searchbridge.connection.resource import ConnectionResource
from searchbridge.index.manager import IndexLifecycleManager

OPENSEARCH_HOST = "localhost"
OPENSEARCH_PORT = 9201


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def opensearch_settings() -> ConnectionSettings:
    """Ensure OpenSearch is running."""
    if not _wait_for_service(f"http://{OPENSEARCH_HOST}:{OPENSEARCH_PORT}"):
        pytest.skip(f"OpenSearch not available at {OPENSEARCH_HOST}:{OPENSEARCH_PORT}")
    return ConnectionSettings(host=OPENSEARCH_HOST, port=OPENSEARCH_PORT, scheme="http")


@pytest.fixture(scope="session")
def live_resource(opensearch_settings: ConnectionSettings) -> Iterator[ConnectionResource]:
    resource = ConnectionResource(opensearch_settings)
    yield resource
    resource.release()


@pytest.fixture
def index_name(live_resource: ConnectionResource) -> Iterator[str]:
    """A unique index name, deleted after the test if it still exists."""
    name = f"searchbridge-test-{uuid.uuid4().hex[:8]}"
    yield name
    manager = IndexLifecycleManager(live_resource)
    if manager.index_exists(name):
        manager.delete_index(name)
