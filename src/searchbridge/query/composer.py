"""Query composer — Build query expressions and translate them to the OpenSearch DSL.

The builders are pure: they validate shape (via the pydantic models) but
never inspect values the engine interprets, such as fuzziness tokens or
wildcard patterns.

Example::

    expr = bool_query(
        must=[match("title", "opensearch")],
        must_not=[wildcard("category", "draft*")],
    )
    body = {"query": to_dsl(expr)}
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, assert_never

from searchbridge.query.expressions import (
    Bool,
    Fuzzy,
    Knn,
    Match,
    MatchPhrase,
    MultiMatch,
    QueryExpression,
    Wildcard,
)

# ── Builders ─────────────────────────────────────────────────────────────────


def match(field: str, text: str) -> Match:
    return Match(field=field, text=text)


def multi_match(fields: Iterable[str], text: str) -> MultiMatch:
    return MultiMatch(fields=tuple(fields), text=text)


def bool_query(
    must: Iterable[QueryExpression] | None = None,
    should: Iterable[QueryExpression] | None = None,
    must_not: Iterable[QueryExpression] | None = None,
) -> Bool:
    """Combine expressions; an omitted clause list is the same as an empty one."""
    return Bool(
        must=tuple(must or ()),
        should=tuple(should or ()),
        must_not=tuple(must_not or ()),
    )


def fuzzy(field: str, value: str, fuzziness: str = "AUTO") -> Fuzzy:
    return Fuzzy(field=field, value=value, fuzziness=fuzziness)


def match_phrase(field: str, phrase: str) -> MatchPhrase:
    return MatchPhrase(field=field, phrase=phrase)


def wildcard(field: str, pattern: str) -> Wildcard:
    return Wildcard(field=field, pattern=pattern)


def knn(
    field: str,
    vector: Sequence[float],
    k: int,
    filter: QueryExpression | None = None,
) -> Knn:
    return Knn(field=field, vector=tuple(float(x) for x in vector), k=k, filter=filter)


# ── Translation ──────────────────────────────────────────────────────────────


def query_kind(expression: QueryExpression) -> str:
    """Return the variant tag of an expression (e.g. ``'match'``)."""
    return expression.kind


def to_dsl(expression: QueryExpression) -> dict[str, Any]:
    """Translate an expression into an OpenSearch query DSL clause."""
    match expression:
        case Match(field=field, text=text):
            return {"match": {field: {"query": text}}}
        case MultiMatch(fields=fields, text=text):
            return {"multi_match": {"query": text, "fields": list(fields)}}
        case Bool():
            clauses: dict[str, Any] = {}
            for name in ("must", "should", "must_not"):
                children = getattr(expression, name)
                if children:
                    clauses[name] = [to_dsl(child) for child in children]
            return {"bool": clauses}
        case Fuzzy(field=field, value=value, fuzziness=fuzziness):
            return {"fuzzy": {field: {"value": value, "fuzziness": fuzziness}}}
        case MatchPhrase(field=field, phrase=phrase):
            return {"match_phrase": {field: {"query": phrase}}}
        case Wildcard(field=field, pattern=pattern):
            return {"wildcard": {field: {"value": pattern}}}
        case Knn(field=field, vector=vector, k=k, filter=knn_filter):
            params: dict[str, Any] = {"vector": list(vector), "k": k}
            if knn_filter is not None:
                params["filter"] = to_dsl(knn_filter)
            return {"knn": {field: params}}
        case _:
            assert_never(expression)
