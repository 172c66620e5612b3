"""Connection layer — The shared, lazily created OpenSearch client."""

from searchbridge.connection.resource import ConnectionResource, build_client

__all__ = ["ConnectionResource", "build_client"]
