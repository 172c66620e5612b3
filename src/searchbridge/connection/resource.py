"""Connection resource — Lazily created, thread-safe OpenSearch client handle.

A ``ConnectionResource`` owns at most one ``opensearchpy.OpenSearch``
client. The first ``acquire()`` creates it under a lock; every later caller
receives the same client without taking the lock. ``release()`` closes the
client for good: the resource cannot be re-opened afterwards.

Components receive the resource through their constructors::

    resource = ConnectionResource(ConnectionSettings(host="search.internal"))
    indices = IndexLifecycleManager(resource)
    executor = SearchExecutor(resource)
    ...
    resource.release()
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from opensearchpy import OpenSearch
from urllib3 import Timeout

from searchbridge.config.settings import ConnectionSettings
from searchbridge.exceptions import ConfigurationError, ConnectionError, ResourceReleasedError
from searchbridge.models.health import ClusterHealth

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ConnectionSettings], OpenSearch]


def build_client(settings: ConnectionSettings) -> OpenSearch:
    """Create a synchronous ``OpenSearch`` client from connection settings.

    Args:
        settings: Connection settings.

    Returns:
        A new, unconnected client. opensearch-py opens sockets lazily.

    Raises:
        ConfigurationError: If only one of username/password is set.
    """
    if bool(settings.username) != bool(settings.password):
        raise ConfigurationError("Both username and password are required for HTTP basic auth.")

    client_kwargs: dict[str, Any] = {
        "hosts": [{"host": settings.host, "port": settings.port, "scheme": settings.scheme}],
        "use_ssl": settings.scheme == "https",
        "verify_certs": settings.verify_certs,
        "ssl_show_warn": False,
        "timeout": Timeout(connect=settings.connection_timeout, read=settings.socket_timeout),
    }
    if settings.username and settings.password:
        client_kwargs["http_auth"] = (settings.username, settings.password)

    return OpenSearch(**client_kwargs)


class ConnectionResource:
    """Owner of the single shared OpenSearch client.

    Args:
        settings: Connection settings. Defaults to ``ConnectionSettings.defaults()``.
        client_factory: Callable building the client from settings. Defaults
            to :func:`build_client`.
    """

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings or ConnectionSettings.defaults()
        self._client_factory = client_factory or build_client
        self._lock = threading.Lock()
        self._client: OpenSearch | None = None
        self._released = False

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    @property
    def is_released(self) -> bool:
        return self._released

    def acquire(self) -> OpenSearch:
        """Return the shared client, creating it on first use.

        Raises:
            ResourceReleasedError: If ``release()`` has already been called.
            ConnectionError: If the client cannot be created. Not retried.
        """
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._released:
                raise ResourceReleasedError("Connection resource has been released.")
            if self._client is None:
                logger.info("Creating OpenSearch client for %s", self._settings.connection_url)
                try:
                    self._client = self._client_factory(self._settings)
                except ConfigurationError:
                    raise
                except Exception as e:
                    raise ConnectionError(
                        f"Failed to create OpenSearch client for {self._settings.connection_url}: {e}"
                    ) from e
            return self._client

    def release(self) -> None:
        """Close the client and mark the resource released. Idempotent."""
        with self._lock:
            if self._released:
                return
            self._released = True
            client, self._client = self._client, None

        if client is not None:
            logger.info("Closing OpenSearch client")
            try:
                client.close()
            except Exception:
                logger.warning("Error closing OpenSearch client", exc_info=True)

    def test_connection(self) -> bool:
        """Round-trip ``info()`` to check that the cluster is reachable.

        Failures are logged and reported as ``False``, never raised.
        """
        try:
            info = self.acquire().info()
        except Exception as e:
            logger.error("Failed to connect to OpenSearch: %s", e)
            return False

        version = info.get("version", {}).get("number", "unknown")
        cluster = info.get("cluster_name", "unknown")
        logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        return True

    def health_check(self) -> ClusterHealth:
        """Check OpenSearch cluster health."""
        if self._released:
            return ClusterHealth(status="unhealthy", message="Connection resource released")

        try:
            start = time.monotonic()
            health = self.acquire().cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return ClusterHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return ClusterHealth(status="unhealthy", message=str(e))

    def __enter__(self) -> ConnectionResource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else ("open" if self._client is not None else "idle")
        return f"ConnectionResource({self._settings.connection_url}, {state})"
