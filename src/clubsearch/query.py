"""Small builder for bool query-DSL bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

MATCH = "match"
MATCH_PHRASE = "match_phrase"
TERM = "term"
TERMS = "terms"
WILDCARD = "wildcard"
RANGE = "range"
EXISTS = "exists"
QUERY_STRING = "query_string"

QUERY_TYPES = (MATCH, MATCH_PHRASE, TERM, TERMS, WILDCARD, RANGE, EXISTS, QUERY_STRING)


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass
class QueryItem:
    """One leaf clause: ``type`` applied to ``field`` with ``value``.

    For ``range`` the value is a dict such as ``{"gte": ..., "lte": ...}``;
    ``exists`` ignores the value.
    """

    field: str
    value: Any = None
    type: str = MATCH

    def __post_init__(self) -> None:
        if self.type not in QUERY_TYPES:
            raise ValueError(f"Unsupported query type: {self.type!r}")

    def to_clause(self) -> Dict[str, Any]:
        if self.type == EXISTS:
            return {EXISTS: {"field": self.field}}
        if self.type == QUERY_STRING:
            return {QUERY_STRING: {"query": _plain(self.value), "default_field": self.field}}
        return {self.type: {self.field: _plain(self.value)}}


@dataclass
class QueryDoc:
    """A bool query with optional sort and paging."""

    and_: List[QueryItem] = field(default_factory=list)
    or_: List[QueryItem] = field(default_factory=list)
    not_: List[QueryItem] = field(default_factory=list)
    filter_: List[QueryItem] = field(default_factory=list)
    sort: List[Dict[str, str]] = field(default_factory=list)
    size: Optional[int] = None
    from_: Optional[int] = None

    def to_body(self) -> Dict[str, Any]:
        groups = {
            "must": self.and_,
            "should": self.or_,
            "must_not": self.not_,
            "filter": self.filter_,
        }
        clauses = {key: [item.to_clause() for item in items] for key, items in groups.items() if items}
        body: Dict[str, Any] = {"query": {"bool": clauses} if clauses else match_all()["query"]}
        if self.sort:
            body["sort"] = list(self.sort)
        if self.size is not None:
            body["size"] = self.size
        if self.from_ is not None:
            body["from"] = self.from_
        return body


def match_all() -> Dict[str, Any]:
    return {"query": {"match_all": {}}}


def created_within(field_name: str, since: datetime, until: Optional[datetime] = None) -> QueryItem:
    bounds: Dict[str, Any] = {"gte": since}
    if until is not None:
        bounds["lte"] = until
    return QueryItem(field=field_name, value=bounds, type=RANGE)


__all__ = [
    "MATCH",
    "MATCH_PHRASE",
    "TERM",
    "TERMS",
    "WILDCARD",
    "RANGE",
    "EXISTS",
    "QUERY_STRING",
    "QueryItem",
    "QueryDoc",
    "match_all",
    "created_within",
]
