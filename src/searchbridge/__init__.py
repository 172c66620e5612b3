"""SearchBridge — Typed query composition, vector bulk loading and index administration for OpenSearch.

Quick start::

    from searchbridge import ConnectionResource, ConnectionSettings, SearchExecutor
    from searchbridge.query import composer

    with ConnectionResource(ConnectionSettings(host="localhost")) as resource:
        envelope = SearchExecutor(resource).execute("articles", composer.match("title", "opensearch"))
        print(envelope.total.value)
"""

from searchbridge.config.settings import ConnectionSettings, Settings
from searchbridge.connection.resource import ConnectionResource
from searchbridge.index.manager import IndexLifecycleManager
from searchbridge.indexing.bulk import VectorBulkIndexer
from searchbridge.models.search import HighlightSpec, Hit, ResultEnvelope, SearchOptions, TotalHits
from searchbridge.models.vector import BulkSummary, VectorDocument
from searchbridge.search.executor import SearchExecutor
from searchbridge.search.extractor import extract_documents, extract_highlights
from searchbridge.search.services import FullTextSearchService, VectorSearchService

__version__ = "0.1.0"

__all__ = [
    "BulkSummary",
    "ConnectionResource",
    "ConnectionSettings",
    "FullTextSearchService",
    "HighlightSpec",
    "Hit",
    "IndexLifecycleManager",
    "ResultEnvelope",
    "SearchExecutor",
    "SearchOptions",
    "Settings",
    "TotalHits",
    "VectorBulkIndexer",
    "VectorDocument",
    "VectorSearchService",
    "extract_documents",
    "extract_highlights",
]
