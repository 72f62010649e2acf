"""Elasticsearch index name and mapping for club info documents."""

from __future__ import annotations

import json
from typing import Any, Dict

CLUB_INDEX_NAME = "idx-itsm-club-info"

# Requires the IK analysis plugin on the cluster.
TEXT_IK: Dict[str, Any] = {
    "type": "text",
    "analyzer": "ik_max_word",
    "search_analyzer": "ik_smart",
}

MATCH_STATUS_PROPERTIES: Dict[str, Any] = {
    "rank": {"type": "integer"},
    "point": {"type": "integer"},
    "year": {"type": "date"},
    "raw": {"type": "object"},
    "remark": dict(TEXT_IK),
}

CLUB_MAPPING: Dict[str, Any] = {
    "mappings": {
        "properties": {
            "club_id": {"type": "keyword"},
            "created_at": {"type": "date"},
            "updated_at": {"type": "date"},
            "deleted_at": {"type": "date"},
            "club_name": dict(TEXT_IK),
            "created_by": {"type": "keyword"},
            "club_type": {"type": "keyword"},
            "match_status": {"properties": dict(MATCH_STATUS_PROPERTIES)},
            "history": {"type": "nested", "properties": dict(MATCH_STATUS_PROPERTIES)},
        }
    }
}

CLUB_MAPPING_JSON = json.dumps(CLUB_MAPPING, indent=2)


__all__ = [
    "CLUB_INDEX_NAME",
    "CLUB_MAPPING",
    "CLUB_MAPPING_JSON",
]
