"""Tests for src.clubsearch.model covering encoding and typed decoding.

Run with coverage:
    pytest tests/test_model.py --maxfail=1 -v --cov=src.clubsearch.model --cov-report=term-missing
"""

import json
from datetime import datetime, timezone

import pytest

from src.clubsearch.errors import DecodeError, EncodingError, SerializationError
from src.clubsearch.model import ClubInfo, MatchStatus, document_id_of, encode_document

NOW = datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone.utc)


def _club(**overrides):
    values = dict(
        club_id="1",
        club_name="Alice",
        created_by="xiaoming3",
        club_type="football3",
        created_at=NOW,
        match_status=MatchStatus(rank=1, point=100, year=NOW, raw={"key1": "value1"}, remark="Great"),
        history=[MatchStatus(rank=2, point=90, year=NOW, raw={"nested": [1, 2]}, remark="Prev")],
    )
    values.update(overrides)
    return ClubInfo(**values)


def test_to_document_uses_mapping_field_names():
    doc = _club().to_document()
    assert set(doc) == {
        "club_id",
        "created_at",
        "updated_at",
        "deleted_at",
        "club_name",
        "created_by",
        "club_type",
        "match_status",
        "history",
    }
    assert doc["created_at"] == "2024-03-01T12:30:00+00:00"
    assert doc["updated_at"] is None
    assert doc["match_status"]["raw"] == {"key1": "value1"}
    assert doc["history"][0]["rank"] == 2


def test_json_round_trip_preserves_values():
    club = _club()
    decoded = ClubInfo.from_document(json.loads(club.to_json()))
    assert decoded == club
    assert club.document_id == "1"


def test_to_json_keeps_non_ascii_text():
    assert "测试俱乐部" in _club(club_name="测试俱乐部").to_json()


def test_to_json_rejects_unserializable_raw():
    club = _club(match_status=MatchStatus(raw=object()))
    with pytest.raises(SerializationError):
        club.to_json()


def test_from_document_accepts_zulu_timestamps_and_missing_fields():
    club = ClubInfo.from_document({"club_id": "7", "created_at": "2024-03-01T12:30:00Z"})
    assert club.created_at == NOW
    assert club.history == []
    assert club.match_status == MatchStatus()


@pytest.mark.parametrize(
    "source",
    [
        ["not", "a", "mapping"],
        {"club_id": 5},
        {"club_id": "1", "created_at": "yesterday"},
        {"club_id": "1", "history": {"rank": 1}},
        {"club_id": "1", "match_status": {"rank": "first"}},
        {"club_id": "1", "match_status": {"rank": True}},
        {"club_id": "1", "history": ["oops"]},
        {"club_id": "1", "history": {}},
        {"club_id": "1", "history": ""},
        {"club_id": "1", "history": 0},
    ],
)
def test_from_document_rejects_shape_mismatch(source):
    with pytest.raises(DecodeError):
        ClubInfo.from_document(source)


def test_encode_document_accepts_models_and_mappings():
    assert json.loads(encode_document(_club()))["club_name"] == "Alice"
    assert json.loads(encode_document({"club_id": "9"})) == {"club_id": "9"}


def test_encode_document_failures_are_encoding_errors():
    with pytest.raises(EncodingError):
        encode_document(42)
    with pytest.raises(EncodingError):
        encode_document({"bad": {1, 2}})
    with pytest.raises(EncodingError):
        encode_document(_club(match_status=MatchStatus(raw=object())))


def test_document_id_of_reads_models_and_mappings():
    assert document_id_of(_club(club_id="4")) == "4"
    assert document_id_of({"club_id": 12}) == "12"
    assert document_id_of({"club_name": "anonymous"}) is None
