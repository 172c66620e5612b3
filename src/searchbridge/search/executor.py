"""Search executor — Send a composed query through the shared connection."""

from __future__ import annotations

import logging
from typing import Any

from searchbridge.connection.resource import ConnectionResource
from searchbridge.models.search import ResultEnvelope, SearchOptions
from searchbridge.query.composer import query_kind, to_dsl
from searchbridge.query.expressions import Knn, QueryExpression

logger = logging.getLogger(__name__)


class SearchExecutor:
    """Execute query expressions against an index.

    Transport errors (``opensearchpy.TransportError`` and its subclasses)
    propagate unchanged; nothing is retried.

    Args:
        resource: Connection resource providing the client.
    """

    def __init__(self, resource: ConnectionResource) -> None:
        self._resource = resource

    @staticmethod
    def build_request(expression: QueryExpression, options: SearchOptions | None = None) -> dict[str, Any]:
        """Build the request body for an expression.

        For k-NN expressions the result size is always ``k``.
        """
        options = options or SearchOptions()
        body: dict[str, Any] = {"query": to_dsl(expression)}

        if isinstance(expression, Knn):
            body["size"] = expression.k
        elif options.size is not None:
            body["size"] = options.size

        if options.highlight is not None:
            body["highlight"] = options.highlight.to_dsl()

        return body

    def execute(
        self,
        index: str,
        expression: QueryExpression,
        options: SearchOptions | None = None,
    ) -> ResultEnvelope:
        """Run ``expression`` against ``index`` and unpack the response."""
        kind = query_kind(expression)
        body = self.build_request(expression, options)
        logger.info("Executing %s query on index: %s", kind, index)

        response = self._resource.acquire().search(index=index, body=body)
        envelope = ResultEnvelope.from_response(response)

        logger.info("%s query returned %d hits", kind, envelope.total.value)
        return envelope
