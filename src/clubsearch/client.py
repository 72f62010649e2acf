"""Thin Elasticsearch HTTP client for club info documents."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlparse

import requests

from .config import ElasticSearchSettings
from .errors import (
    DecodeError,
    DocumentNotFoundError,
    EngineConnectionError,
    EngineError,
    IndexAlreadyExistsError,
)
from .model import ClubInfo, document_id_of, encode_document

QueryBody = Union[Mapping[str, Any], str, bytes]


def _error_text(response: requests.Response) -> str:
    return (response.text or "")[:300]


class ESClient:
    """Typed facade over the Elasticsearch document, search and bulk APIs."""

    def __init__(
        self,
        base_url: str,
        username: Optional[str],
        password: Optional[str],
        api_key: Optional[str] = None,
        verify_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.verify = bool(verify_tls)
        self.timeout = timeout

        if api_key:
            self.session.headers["Authorization"] = f"ApiKey {api_key}"
        elif username and password:
            self.session.auth = (username, password)

    def __enter__(self) -> "ESClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    def _doc_path(self, index: str, doc_id: str) -> str:
        return f"{index}/_doc/{quote(str(doc_id), safe='')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """Send one request; transport failures surface as EngineConnectionError."""

        try:
            return self.session.request(
                method,
                self._url(path),
                verify=self.verify,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            print(f"[error] {method} {path}: {exc}")
            raise EngineConnectionError(f"Cannot reach Elasticsearch at {self.base_url}: {exc}") from exc

    def _json(self, response: requests.Response, what: str) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError(
                f"Error parsing the {what} response body: {exc}",
                status_code=response.status_code,
                body=_error_text(response),
            ) from exc
        if not isinstance(body, dict):
            raise DecodeError(
                f"Unexpected {what} response shape: {type(body).__name__}",
                status_code=response.status_code,
                body=body,
            )
        return body

    def _raise_for_status(self, response: requests.Response, what: str) -> None:
        if response.status_code >= 300:
            print(f"[error] {what}: {response.status_code} {_error_text(response)}")
            raise EngineError(
                f"{what} failed: {response.status_code} {_error_text(response)}",
                status_code=response.status_code,
                body=_error_text(response),
            )

    def ping(self) -> str:
        """Return a short server description; fail when unreachable or unauthorized."""

        response = self._request("GET", "/")
        if response.status_code in (401, 403):
            raise EngineConnectionError(
                f"Elasticsearch rejected the credentials: {response.status_code}",
                status_code=response.status_code,
                body=_error_text(response),
            )
        self._raise_for_status(response, "ping")
        info = self._json(response, "ping")
        version_info = info.get("version")
        if version_info is not None and not isinstance(version_info, dict):
            raise DecodeError(
                f"Unexpected ping 'version' field: {type(version_info).__name__}",
                status_code=response.status_code,
                body=info,
            )
        version = (version_info or {}).get("number", "unknown")
        return f"{info.get('name', '?')} ({info.get('cluster_name', '?')}) v{version}"

    def index_exists(self, name: str) -> bool:
        response = self._request("HEAD", name)
        return response.status_code == 200

    def create_index(self, name: str, mapping: Union[Mapping[str, Any], str]) -> None:
        """Create ``name`` with the given mapping; refuse if it already exists.

        The existence probe and the create call are two requests, so a
        concurrent creator can still win the race and surface as EngineError.
        """

        if self.index_exists(name):
            print(f"Index '{name}' already exists, skipping creation.")
            raise IndexAlreadyExistsError(name)
        data = mapping if isinstance(mapping, str) else json.dumps(mapping)
        response = self._request("PUT", name, data=data.encode("utf-8"))
        self._raise_for_status(response, f"create index '{name}'")
        print(f"Index created: {name}")

    def ensure_index(self, name: str, mapping: Union[Mapping[str, Any], str]) -> bool:
        """Create the index when missing; return True if it was created."""

        if self.index_exists(name):
            return False
        self.create_index(name, mapping)
        return True

    def insert_document(self, index: str, doc: ClubInfo) -> str:
        """Upsert one document under its id and refresh so it is searchable at once.

        A document without an id is posted and the engine assigns one.
        """

        body = doc.to_json()
        doc_id = doc.document_id
        response = self._request(
            "PUT" if doc_id else "POST",
            self._doc_path(index, doc_id) if doc_id else f"{index}/_doc",
            params={"refresh": "true"},
            data=body.encode("utf-8"),
        )
        self._raise_for_status(response, f"index document '{doc_id}'")
        return str(self._json(response, "index").get("result", ""))

    def bulk_insert(
        self,
        index: str,
        docs: Iterable[Any],
        id_func: Optional[Callable[[Any], Optional[str]]] = None,
        batch_size: int = 500,
        refresh: bool = False,
    ) -> Tuple[int, int]:
        """Index documents through the _bulk API.

        Every document is encoded before the first request, so one bad
        document aborts the whole batch with EncodingError. Per-item failures
        reported by the engine are printed and counted, not raised.
        """

        id_func = id_func or document_id_of
        lines: List[str] = []
        for doc in docs:
            source = encode_document(doc)
            meta: Dict[str, Any] = {"index": {"_index": index}}
            doc_id = id_func(doc)
            if doc_id:
                meta["index"]["_id"] = doc_id
            lines.append(json.dumps(meta, separators=(",", ":")))
            lines.append(source)

        ok_total = 0
        fail_total = 0
        step = max(1, batch_size) * 2
        for start in range(0, len(lines), step):
            payload = "\n".join(lines[start : start + step]) + "\n"
            response = self._request(
                "POST",
                f"{index}/_bulk",
                params={"refresh": "true"} if refresh else None,
                data=payload.encode("utf-8"),
                headers={"Content-Type": "application/x-ndjson"},
            )
            self._raise_for_status(response, "bulk")

            result = self._json(response, "bulk")
            items = result.get("items", [])
            if not isinstance(items, list) or not all(
                isinstance(item, dict) and all(isinstance(v, dict) for v in item.values()) for item in items
            ):
                raise DecodeError("Unexpected bulk 'items' shape", status_code=response.status_code, body=result)
            errors = [item for item in items if any(v.get("error") for v in item.values())]
            for item in errors:
                print(f"[error] bulk item: {json.dumps(item)[:300]}")
            ok_total += len(items) - len(errors)
            fail_total += len(errors)

        return ok_total, fail_total

    def get_document(self, index: str, doc_id: str) -> Dict[str, Any]:
        """Return the ``_source`` of a document."""

        response = self._request("GET", self._doc_path(index, doc_id))
        if response.status_code != 404:
            self._raise_for_status(response, f"get document '{doc_id}'")
        result = self._json(response, "get")
        source = result.get("_source")
        if not isinstance(source, dict):
            print("_source field not found in the response")
            raise DocumentNotFoundError(
                "_source field not found in the response",
                status_code=response.status_code,
                body=result,
            )
        return source

    def get_club(self, index: str, doc_id: str) -> ClubInfo:
        return ClubInfo.from_document(self.get_document(index, doc_id))

    def search(self, index: str, query_body: QueryBody) -> List[Dict[str, Any]]:
        """Run a raw query-DSL body and return the hit records."""

        if isinstance(query_body, (str, bytes)):
            data = query_body.encode("utf-8") if isinstance(query_body, str) else query_body
        else:
            data = json.dumps(dict(query_body)).encode("utf-8")
        response = self._request("POST", f"{index}/_search", data=data)
        self._raise_for_status(response, "search")

        result = self._json(response, "search")
        hits = result.get("hits")
        if hits is None:
            raise DecodeError("no 'hits' field in the response", status_code=response.status_code, body=result)
        docs = hits.get("hits") if isinstance(hits, dict) else None
        if not isinstance(docs, list):
            raise DecodeError("'hits.hits' is not a list", status_code=response.status_code, body=result)
        return docs

    def search_all(self, index: str, size: Optional[int] = None) -> List[Dict[str, Any]]:
        body: Dict[str, Any] = {"query": {"match_all": {}}}
        if size is not None:
            body["size"] = size
        return self.search(index, body)

    def delete_document(self, index: str, doc_id: str, missing_ok: bool = False, refresh: bool = False) -> bool:
        """Delete a document by id; return False when it was already gone."""

        response = self._request(
            "DELETE",
            self._doc_path(index, doc_id),
            params={"refresh": "true"} if refresh else None,
        )
        if response.status_code == 404 and missing_ok:
            return False
        self._raise_for_status(response, f"delete document '{doc_id}'")
        return True


def connect(settings: ElasticSearchSettings) -> ESClient:
    """Build a client from settings, rejecting addresses requests cannot use."""

    parsed = urlparse(settings.address or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise EngineConnectionError(f"Invalid Elasticsearch address: {settings.address!r}")
    print(f"Elasticsearch config: {settings!r}")
    return ESClient(
        base_url=settings.address,
        username=settings.username,
        password=settings.password,
        api_key=settings.api_key,
        verify_tls=settings.verify_tls,
        timeout=settings.timeout,
    )


__all__ = ["ESClient", "QueryBody", "connect"]
