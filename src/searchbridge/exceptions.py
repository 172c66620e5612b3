"""SearchBridge exceptions.

Errors raised by the OpenSearch transport while a request is in flight
(timeouts, connection resets, rejected requests) are the ``opensearchpy``
``TransportError`` family and reach the caller unchanged. The classes here
cover the failures this package raises itself.
"""


class SearchBridgeError(Exception):
    """Base exception for SearchBridge errors."""


class ConnectionError(SearchBridgeError):
    """Raised when the OpenSearch client cannot be created."""


class ResourceReleasedError(ConnectionError):
    """Raised when a released connection resource is used again."""


class ConfigurationError(SearchBridgeError):
    """Raised when connection configuration is invalid."""
