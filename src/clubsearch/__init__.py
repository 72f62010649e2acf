"""Club info search client over the Elasticsearch HTTP API."""

from .client import ESClient, connect
from .config import ElasticSearchSettings, load_config
from .model import ClubInfo, MatchStatus

__all__ = ["ESClient", "connect", "ElasticSearchSettings", "load_config", "ClubInfo", "MatchStatus"]
