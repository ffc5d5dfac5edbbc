r"""Builders for JSON query DSL fragments.

Every fragment serializes to a single-key object whose key names the
query kind. Optional numeric fields are omitted when zero and empty
clause lists are omitted from bool queries.

Example:
    ```pycon
    >>> from espoll.query import BoolQuery, TermQuery
    >>> TermQuery(field="status", value="ok").to_dict()
    {'term': {'status': {'value': 'ok'}}}
    >>> BoolQuery(filter=[TermQuery(field="status", value="ok")]).to_json()
    '{"bool": {"filter": [{"term": {"status": {"value": "ok"}}}]}}'

    ```
"""

from __future__ import annotations

__all__ = [
    "BoolQuery",
    "ExistsQuery",
    "MatchPhraseQuery",
    "Query",
    "TermQuery",
    "TermsQuery",
    "encode_query",
]

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class Query(ABC):
    r"""Base class for query DSL fragments."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the fragment as a single-key mapping."""

    def to_json(self) -> str:
        """Return the fragment serialized as a JSON string."""
        return json.dumps(self.to_dict())


def encode_query(value: Any) -> Any:
    r"""Recursively convert query fragments found in ``value`` into
    plain JSON-compatible structures.

    Args:
        value: A query fragment, or a mapping or list possibly containing
            query fragments.

    Returns:
        The value with every fragment replaced by its mapping.

    Example:
        ```pycon
        >>> from espoll.query import ExistsQuery, encode_query
        >>> encode_query({"query": ExistsQuery(field="trace.id")})
        {'query': {'exists': {'field': 'trace.id'}}}

        ```
    """
    if isinstance(value, Query):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: encode_query(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_query(item) for item in value]
    return value


@dataclass
class BoolQuery(Query):
    r"""A ``bool`` query combining clause lists.

    Args:
        filter: Clauses that must match, without scoring.
        must: Clauses that must match.
        must_not: Clauses that must not match.
        should: Clauses that should match.
        minimum_should_match: Minimum number of ``should`` clauses that
            must match. Omitted when zero.
        boost: Relevance boost. Omitted when zero.
    """

    filter: list[Any] = field(default_factory=list)
    must: list[Any] = field(default_factory=list)
    must_not: list[Any] = field(default_factory=list)
    should: list[Any] = field(default_factory=list)
    minimum_should_match: int = 0
    boost: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for name in ("filter", "must", "must_not", "should"):
            clauses = getattr(self, name)
            if clauses:
                body[name] = encode_query(clauses)
        if self.minimum_should_match:
            body["minimum_should_match"] = self.minimum_should_match
        if self.boost:
            body["boost"] = self.boost
        return {"bool": body}


@dataclass
class ExistsQuery(Query):
    r"""An ``exists`` query matching documents with a value for
    ``field``."""

    field: str

    def to_dict(self) -> dict[str, Any]:
        return {"exists": {"field": self.field}}


@dataclass
class TermQuery(Query):
    r"""A ``term`` query matching an exact value.

    Example:
        ```pycon
        >>> from espoll.query import TermQuery
        >>> TermQuery(field="status", value="ok", boost=2.0).to_dict()
        {'term': {'status': {'value': 'ok', 'boost': 2.0}}}

        ```
    """

    field: str
    value: Any
    boost: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        term: dict[str, Any] = {"value": self.value}
        if self.boost:
            term["boost"] = self.boost
        return {"term": {self.field: term}}


@dataclass
class TermsQuery(Query):
    r"""A ``terms`` query matching any of several exact values."""

    field: str
    values: list[Any] = field(default_factory=list)
    boost: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        terms: dict[str, Any] = {self.field: list(self.values)}
        if self.boost:
            terms["boost"] = self.boost
        return {"terms": terms}


@dataclass
class MatchPhraseQuery(Query):
    r"""A ``match_phrase`` query."""

    field: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"match_phrase": {self.field: self.value}}
