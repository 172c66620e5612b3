"""Query expression variants.

``QueryExpression`` is a closed, discriminated union: each variant carries
a ``kind`` literal, and ``Bool`` / ``Knn`` nest further expressions.
Expressions are frozen value objects; build them with the helpers in
:mod:`searchbridge.query.composer`.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Expression(BaseModel):
    model_config = ConfigDict(frozen=True)


class Match(_Expression):
    """Analyzed full-text match on one field."""

    kind: Literal["match"] = "match"
    field: str
    text: str


class MultiMatch(_Expression):
    """Full-text match across several fields."""

    kind: Literal["multi_match"] = "multi_match"
    fields: tuple[str, ...] = ()
    text: str


class Bool(_Expression):
    """Boolean combination of nested expressions.

    An empty clause tuple adds no constraint of that kind.
    """

    kind: Literal["bool"] = "bool"
    must: tuple[QueryExpression, ...] = ()
    should: tuple[QueryExpression, ...] = ()
    must_not: tuple[QueryExpression, ...] = ()


class Fuzzy(_Expression):
    """Term match within an edit distance; ``fuzziness`` is sent verbatim."""

    kind: Literal["fuzzy"] = "fuzzy"
    field: str
    value: str
    fuzziness: str = "AUTO"


class MatchPhrase(_Expression):
    """Exact contiguous phrase match."""

    kind: Literal["match_phrase"] = "match_phrase"
    field: str
    phrase: str


class Wildcard(_Expression):
    """Wildcard pattern match; the pattern is not escaped."""

    kind: Literal["wildcard"] = "wildcard"
    field: str
    pattern: str


class Knn(_Expression):
    """k-nearest-neighbour query against a vector field."""

    kind: Literal["knn"] = "knn"
    field: str
    vector: tuple[float, ...] = Field(min_length=1)
    k: int = Field(ge=1)
    filter: QueryExpression | None = None


QueryExpression = Annotated[
    Union[Match, MultiMatch, Bool, Fuzzy, MatchPhrase, Wildcard, Knn],
    Field(discriminator="kind"),
]

Bool.model_rebuild()
Knn.model_rebuild()
