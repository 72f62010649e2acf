"""Entry point wiring configuration, the Elasticsearch client, and the demo sequence."""

from __future__ import annotations

from typing import List, Optional

from .client import ESClient, connect
from .config import build_arg_parser, load_config
from .errors import ClubSearchError
from .scenarios import SAMPLE_CLUB_ID, sample_clubs
from .schema import CLUB_INDEX_NAME, CLUB_MAPPING


def run_demo(es: ESClient, index: str = CLUB_INDEX_NAME, create_index: bool = False) -> None:
    """Ping, drop the stale sample doc, then bulk-insert the samples.

    With ``create_index`` the index is first created from CLUB_MAPPING when
    missing; that mapping needs the IK analysis plugin on the cluster.
    """

    info = es.ping()
    print(f"Elasticsearch connected: {info}")

    if create_index and es.ensure_index(index, CLUB_MAPPING):
        print(f"Created index '{index}'")

    es.delete_document(index, SAMPLE_CLUB_ID, missing_ok=True)
    print("Index doc deleted successfully")

    ok, fail = es.bulk_insert(index, sample_clubs())
    print(f"Bulk insert completed: ok={ok} fail={fail}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns a non-zero exit code on the first failure."""

    parser = build_arg_parser(description="Run the club search demo sequence.")
    parser.add_argument("--index", default=CLUB_INDEX_NAME)
    parser.add_argument(
        "--create-index",
        action="store_true",
        help="Create the index with the club mapping when it is missing.",
    )
    args = parser.parse_args(argv)

    print("Elasticsearch client demo begin")
    try:
        settings = load_config(args.config)
        with connect(settings) as es:
            print("Elasticsearch client created successfully")
            run_demo(es, args.index, create_index=args.create_index)
    except ClubSearchError as exc:
        print(f"[error] {type(exc).__name__}: {exc}")
        return 1
    return 0


__all__ = ["run_demo", "main"]
