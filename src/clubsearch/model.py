"""Club info documents and their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from .errors import DecodeError, EncodingError, SerializationError


@runtime_checkable
class JsonDocument(Protocol):
    """Anything that can render itself as a JSON document body."""

    def to_json(self) -> str:
        ...


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as stored by the engine."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"Field '{field_name}' must be a timestamp string, got {type(value).__name__}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"Field '{field_name}' is not a valid timestamp: {value!r}") from exc


def _expect(source: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = source.get(key, default)
    if value is None:
        return default
    # bool is an int subclass; reject it for integer fields.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"Field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _encode(body: Dict[str, Any]) -> str:
    try:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Document is not JSON serializable: {exc}") from exc


@dataclass
class MatchStatus:
    """One match result; ``raw`` is an opaque JSON value stored as given."""

    rank: int = 0
    point: int = 0
    year: Optional[datetime] = None
    raw: Any = None
    remark: str = ""

    def to_document(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "point": self.point,
            "year": format_timestamp(self.year),
            "raw": self.raw,
            "remark": self.remark,
        }

    @classmethod
    def from_document(cls, source: Any) -> "MatchStatus":
        if not isinstance(source, Mapping):
            raise DecodeError(f"Match status must be an object, got {type(source).__name__}")
        return cls(
            rank=_expect(source, "rank", int, 0),
            point=_expect(source, "point", int, 0),
            year=parse_timestamp(source.get("year"), "year"),
            raw=source.get("raw"),
            remark=_expect(source, "remark", str, ""),
        )


@dataclass
class ClubInfo:
    """A club record as indexed under ``club_id``."""

    club_id: str
    club_name: str = ""
    created_by: str = ""
    club_type: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    match_status: MatchStatus = field(default_factory=MatchStatus)
    history: List[MatchStatus] = field(default_factory=list)

    @property
    def document_id(self) -> str:
        return self.club_id

    def to_document(self) -> Dict[str, Any]:
        return {
            "club_id": self.club_id,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
            "deleted_at": format_timestamp(self.deleted_at),
            "club_name": self.club_name,
            "created_by": self.created_by,
            "club_type": self.club_type,
            "match_status": self.match_status.to_document(),
            "history": [status.to_document() for status in self.history],
        }

    def to_json(self) -> str:
        return _encode(self.to_document())

    @classmethod
    def from_document(cls, source: Any) -> "ClubInfo":
        """Decode a stored ``_source`` mapping, failing with DecodeError on shape mismatch."""

        if not isinstance(source, Mapping):
            raise DecodeError(f"Club document must be an object, got {type(source).__name__}")
        history = source.get("history")
        if history is None:
            history = []
        if not isinstance(history, list):
            raise DecodeError("Field 'history' must be a list")
        match_status = source.get("match_status")
        return cls(
            club_id=_expect(source, "club_id", str, ""),
            club_name=_expect(source, "club_name", str, ""),
            created_by=_expect(source, "created_by", str, ""),
            club_type=_expect(source, "club_type", str, ""),
            created_at=parse_timestamp(source.get("created_at"), "created_at"),
            updated_at=parse_timestamp(source.get("updated_at"), "updated_at"),
            deleted_at=parse_timestamp(source.get("deleted_at"), "deleted_at"),
            match_status=MatchStatus.from_document(match_status) if match_status is not None else MatchStatus(),
            history=[MatchStatus.from_document(item) for item in history],
        )


def encode_document(doc: Any) -> str:
    """Return the JSON body for any bulk-insertable document."""

    try:
        if isinstance(doc, JsonDocument):
            return doc.to_json()
        if isinstance(doc, Mapping):
            return json.dumps(dict(doc), separators=(",", ":"), ensure_ascii=False)
    except SerializationError as exc:
        raise EncodingError(str(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Error encoding document as JSON: {exc}") from exc
    raise EncodingError(f"Cannot encode document of type {type(doc).__name__}")


def document_id_of(doc: Any) -> Optional[str]:
    """Return the id a document should be indexed under, if it has one."""

    if isinstance(doc, Mapping):
        value = doc.get("club_id")
    else:
        value = getattr(doc, "document_id", None)
    return str(value) if value not in (None, "") else None


__all__ = [
    "JsonDocument",
    "MatchStatus",
    "ClubInfo",
    "encode_document",
    "document_id_of",
    "format_timestamp",
    "parse_timestamp",
]
