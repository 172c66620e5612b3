"""Query composition — Typed query expressions and their DSL translation."""

from searchbridge.query.composer import to_dsl
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

__all__ = ["Bool", "Fuzzy", "Knn", "Match", "MatchPhrase", "MultiMatch", "QueryExpression", "Wildcard", "to_dsl"]
