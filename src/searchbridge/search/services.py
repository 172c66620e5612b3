"""Search services — One-call full-text and vector search on top of the executor.

Each method composes one query kind and executes it, so callers that only
need a single family of query never touch the composer directly::

    with ConnectionResource(settings) as resource:
        search = FullTextSearchService(resource)
        envelope = search.search_with_highlight("articles", "content", "opensearch")
        for hit in envelope.hits:
            print(hit.id, search.extract_highlights(hit))
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from searchbridge.connection.resource import ConnectionResource
from searchbridge.models.search import HighlightSpec, Hit, ResultEnvelope, SearchOptions
from searchbridge.query import composer
from searchbridge.query.expressions import QueryExpression
from searchbridge.search.executor import SearchExecutor
from searchbridge.search.extractor import extract_documents, extract_highlights


class FullTextSearchService:
    """Full-text query families: match, multi-match, bool, fuzzy, phrase, wildcard.

    Args:
        resource: Connection resource providing the client.
        executor: Optional executor override (defaults to one bound to ``resource``).
    """

    def __init__(self, resource: ConnectionResource, executor: SearchExecutor | None = None) -> None:
        self._executor = executor or SearchExecutor(resource)

    def match_query(self, index: str, field: str, query: str, size: int | None = None) -> ResultEnvelope:
        return self._executor.execute(index, composer.match(field, query), SearchOptions(size=size))

    def multi_match_query(
        self, index: str, fields: Iterable[str], query: str, size: int | None = None
    ) -> ResultEnvelope:
        return self._executor.execute(index, composer.multi_match(fields, query), SearchOptions(size=size))

    def bool_query(
        self,
        index: str,
        must: Iterable[QueryExpression] | None = None,
        should: Iterable[QueryExpression] | None = None,
        must_not: Iterable[QueryExpression] | None = None,
        size: int | None = None,
    ) -> ResultEnvelope:
        expression = composer.bool_query(must=must, should=should, must_not=must_not)
        return self._executor.execute(index, expression, SearchOptions(size=size))

    def fuzzy_query(
        self, index: str, field: str, value: str, fuzziness: str = "AUTO", size: int | None = None
    ) -> ResultEnvelope:
        return self._executor.execute(index, composer.fuzzy(field, value, fuzziness), SearchOptions(size=size))

    def search_with_highlight(
        self,
        index: str,
        field: str,
        query: str,
        pre_tag: str = "<em>",
        post_tag: str = "</em>",
        size: int | None = None,
    ) -> ResultEnvelope:
        """Match query on ``field`` with matches in that field highlighted."""
        options = SearchOptions(
            size=size,
            highlight=HighlightSpec(field=field, pre_tag=pre_tag, post_tag=post_tag),
        )
        return self._executor.execute(index, composer.match(field, query), options)

    def phrase_match_query(self, index: str, field: str, phrase: str, size: int | None = None) -> ResultEnvelope:
        return self._executor.execute(index, composer.match_phrase(field, phrase), SearchOptions(size=size))

    def wildcard_query(self, index: str, field: str, pattern: str, size: int | None = None) -> ResultEnvelope:
        return self._executor.execute(index, composer.wildcard(field, pattern), SearchOptions(size=size))

    @staticmethod
    def extract_documents(envelope: ResultEnvelope) -> list[dict[str, Any] | None]:
        return extract_documents(envelope)

    @staticmethod
    def extract_highlights(hit: Hit) -> dict[str, list[str]]:
        return extract_highlights(hit)


class VectorSearchService:
    """k-NN vector search, optionally restricted by a filter expression.

    The number of returned hits is bounded by ``k``.
    """

    def __init__(self, resource: ConnectionResource, executor: SearchExecutor | None = None) -> None:
        self._executor = executor or SearchExecutor(resource)

    def knn_search(self, index: str, vector_field: str, query_vector: Sequence[float], k: int) -> ResultEnvelope:
        return self._executor.execute(index, composer.knn(vector_field, query_vector, k))

    def knn_search_with_filter(
        self,
        index: str,
        vector_field: str,
        query_vector: Sequence[float],
        k: int,
        filter: QueryExpression,
    ) -> ResultEnvelope:
        return self._executor.execute(index, composer.knn(vector_field, query_vector, k, filter=filter))
