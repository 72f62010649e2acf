"""Example scenarios exercising every client operation against a live cluster."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from .client import ESClient, connect
from .config import build_arg_parser, load_config
from .errors import ClubSearchError
from .model import ClubInfo, MatchStatus
from .query import MATCH, QueryDoc, QueryItem, created_within
from .schema import CLUB_INDEX_NAME, CLUB_MAPPING

SAMPLE_NAMES = ("Alice", "John", "Mary")
SAMPLE_CLUB_ID = "3"
SAMPLE_CREATOR = "xiaoming3"
SAMPLE_CLUB_TYPE = "football3"


def one_month_before(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def sample_club(club_id: str, name: str, now: Optional[datetime] = None) -> ClubInfo:
    """Build the fixture club used by every scenario."""

    now = now or datetime.now(timezone.utc)
    return ClubInfo(
        club_id=club_id,
        club_name=name,
        created_at=now,
        created_by=SAMPLE_CREATOR,
        club_type=SAMPLE_CLUB_TYPE,
        match_status=MatchStatus(
            rank=1,
            point=100,
            year=now,
            raw={"key1": "value1", "key2": "value2"},
            remark="Great performance",
        ),
        history=[
            MatchStatus(
                rank=2,
                point=90,
                year=one_month_before(now),
                raw={"key1": "hello world", "key3": "value3"},
                remark="Previous match",
            )
        ],
    )


def sample_clubs(names: Sequence[str] = SAMPLE_NAMES, now: Optional[datetime] = None) -> List[ClubInfo]:
    """Clubs with ids "1", "2", ... in the order of ``names``."""

    now = now or datetime.now(timezone.utc)
    return [sample_club(str(position), name, now) for position, name in enumerate(names, start=1)]


def _print_hits(hits: List[Dict[str, Any]]) -> None:
    for hit in hits:
        print(f" * ID={hit.get('_id')}, {hit.get('_source')}")


def scenario_ping(es: ESClient, index: str) -> str:
    info = es.ping()
    print(f"Elasticsearch connected: {info}")
    return info


def scenario_create_index(es: ESClient, index: str) -> None:
    es.create_index(index, CLUB_MAPPING)


def scenario_insert(es: ESClient, index: str) -> str:
    result = es.insert_document(index, sample_club(SAMPLE_CLUB_ID, "Test club 3"))
    print(f"Index doc {result}")
    return result


def scenario_bulk_insert(es: ESClient, index: str) -> Any:
    ok, fail = es.bulk_insert(index, sample_clubs(), refresh=True)
    print(f"Bulk insert completed: ok={ok} fail={fail}")
    return ok, fail


def scenario_get(es: ESClient, index: str) -> Dict[str, Any]:
    doc = es.get_document(index, SAMPLE_CLUB_ID)
    print(f"Document retrieved successfully: {doc}")
    return doc


def scenario_search_all(es: ESClient, index: str) -> List[Dict[str, Any]]:
    hits = es.search_all(index)
    _print_hits(hits)
    print("Search completed")
    return hits


def mary_created_recently(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Clubs created in the last six hours whose name matches "Mary"."""

    now = now or datetime.now(timezone.utc)
    return QueryDoc(
        and_=[
            created_within("created_at", now - timedelta(hours=6), now),
            QueryItem(field="club_name", value="Mary", type=MATCH),
        ]
    ).to_body()


def scenario_search_dsl(es: ESClient, index: str) -> List[Dict[str, Any]]:
    hits = es.search(index, mary_created_recently())
    _print_hits(hits)
    print("Search completed")
    return hits


def scenario_search_query_doc(es: ESClient, index: str) -> List[Dict[str, Any]]:
    body = QueryDoc(
        and_=[QueryItem(field="club_name", value="Mary", type=MATCH)],
        sort=[{"club_id": "asc"}],
    ).to_body()
    hits = es.search(index, body)
    _print_hits(hits)
    print("Search completed")
    return hits


def scenario_delete(es: ESClient, index: str) -> bool:
    deleted = es.delete_document(index, SAMPLE_CLUB_ID, refresh=True)
    print("Index doc deleted successfully")
    return deleted


SCENARIOS: Dict[str, Callable[[ESClient, str], Any]] = {
    "ping": scenario_ping,
    "create_index": scenario_create_index,
    "insert": scenario_insert,
    "bulk_insert": scenario_bulk_insert,
    "get": scenario_get,
    "search_all": scenario_search_all,
    "search_dsl": scenario_search_dsl,
    "search_query_doc": scenario_search_query_doc,
    "delete": scenario_delete,
}


def run(names: Sequence[str], es: ESClient, index: str = CLUB_INDEX_NAME) -> Dict[str, Any]:
    """Run the named scenarios in order; the first failure propagates."""

    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        raise ValueError(f"Unknown scenarios: {', '.join(unknown)}")
    results: Dict[str, Any] = {}
    for name in names:
        print(f"\n=== {name} ===")
        results[name] = SCENARIOS[name](es, index)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: run selected scenarios (all of them by default)."""

    parser = build_arg_parser(description="Run club search example scenarios.")
    parser.add_argument("--index", default=CLUB_INDEX_NAME)
    parser.add_argument("scenarios", nargs="*", help=f"Any of: {', '.join(SCENARIOS)}")
    args = parser.parse_args(argv)
    names = args.scenarios or list(SCENARIOS)
    unknown = [name for name in names if name not in SCENARIOS]
    if unknown:
        parser.error(f"unknown scenarios: {', '.join(unknown)}")

    try:
        settings = load_config(args.config)
        with connect(settings) as es:
            run(names, es, args.index)
    except ClubSearchError as exc:
        print(f"[error] {type(exc).__name__}: {exc}")
        return 1
    return 0


__all__ = [
    "SAMPLE_NAMES",
    "SAMPLE_CLUB_ID",
    "SCENARIOS",
    "one_month_before",
    "sample_club",
    "sample_clubs",
    "mary_created_recently",
    "run",
    "main",
]
