"""Exception hierarchy for the club search client."""

from __future__ import annotations

from typing import Any, Optional


class ClubSearchError(RuntimeError):
    """Base class for every failure raised by this package."""


class ConfigError(ClubSearchError):
    """The configuration file is missing or malformed."""


class IndexAlreadyExistsError(ClubSearchError):
    """Index creation was requested for an index that already exists."""

    def __init__(self, index: str) -> None:
        super().__init__(f"Index '{index}' already exists")
        self.index = index


class SerializationError(ClubSearchError):
    """A document could not be turned into JSON."""


class EncodingError(SerializationError):
    """A document in a bulk batch could not be turned into JSON."""


class EngineError(ClubSearchError):
    """The search engine answered with a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EngineConnectionError(EngineError):
    """The engine could not be reached or refused our credentials."""


class DecodeError(EngineError):
    """A response or stored document did not have the expected shape."""


class DocumentNotFoundError(DecodeError):
    """The requested document has no _source in the response."""


__all__ = [
    "ClubSearchError",
    "ConfigError",
    "IndexAlreadyExistsError",
    "SerializationError",
    "EncodingError",
    "EngineError",
    "EngineConnectionError",
    "DecodeError",
    "DocumentNotFoundError",
]
