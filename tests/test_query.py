"""Tests for src.clubsearch.query covering bool body rendering.

Run with:
    pytest tests/test_query.py --maxfail=1 -v --cov=src.clubsearch.query --cov-report=term-missing
"""

from datetime import datetime, timezone

import pytest

from src.clubsearch import query


def test_empty_doc_is_match_all():
    assert query.QueryDoc().to_body() == {"query": {"match_all": {}}}
    assert query.match_all() == {"query": {"match_all": {}}}


def test_bool_groups_sort_and_paging():
    body = query.QueryDoc(
        and_=[query.QueryItem("club_name", "Mary")],
        or_=[query.QueryItem("club_type", "football3", query.TERM)],
        not_=[query.QueryItem("deleted_at", type=query.EXISTS)],
        filter_=[query.QueryItem("club_id", ["1", "2"], query.TERMS)],
        sort=[{"club_id": "asc"}],
        size=5,
        from_=10,
    ).to_body()
    assert body == {
        "query": {
            "bool": {
                "must": [{"match": {"club_name": "Mary"}}],
                "should": [{"term": {"club_type": "football3"}}],
                "must_not": [{"exists": {"field": "deleted_at"}}],
                "filter": [{"terms": {"club_id": ["1", "2"]}}],
            }
        },
        "sort": [{"club_id": "asc"}],
        "size": 5,
        "from": 10,
    }


def test_created_within_renders_iso_bounds():
    since = datetime(2024, 1, 1, tzinfo=timezone.utc)
    until = datetime(2024, 1, 2, tzinfo=timezone.utc)
    clause = query.created_within("created_at", since, until).to_clause()
    assert clause == {
        "range": {"created_at": {"gte": "2024-01-01T00:00:00+00:00", "lte": "2024-01-02T00:00:00+00:00"}}
    }
    assert "lte" not in query.created_within("created_at", since).to_clause()["range"]["created_at"]


def test_query_string_clause():
    clause = query.QueryItem("remark", "great AND match", query.QUERY_STRING).to_clause()
    assert clause == {"query_string": {"query": "great AND match", "default_field": "remark"}}


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        query.QueryItem("club_name", "x", "fuzzy")
