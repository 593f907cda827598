"""Thin, read-only Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps serverless bundle small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from app.infrastructure.firebase._rest_encoding import _encode_value, decode_document

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    body: dict,
    access_token: str | None = None,
) -> Any:
    """POST a query to the Firestore REST API. 404 returns None.

    Other non-2xx responses raise httpx.HTTPStatusError.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    resp = await client.post(url, headers=headers, json=body)
    if resp.status_code == 404:
        return None
    if resp.status_code != 200:
        resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    def collection(self, collection_id: str) -> "CollectionReference":
        """Return a subcollection under this document (e.g. materials/{id}/comments)."""
        return CollectionReference(self._client, f"{self._path}/{collection_id}")


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
}


class _Query:
    """Fluent query builder for a collection; runs via runQuery (filter and order on server).

    Multiple where() calls are combined with AND.
    """

    def __init__(self, client: "FirestoreRESTClient", parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"

    def where(self, field: str, op: str, value: Any) -> "_Query":
        self._filters.append((field, _OP_MAP.get(op, op), value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def _where_clause(self) -> dict[str, Any] | None:
        clauses = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": op,
                    "value": _encode_value(value),
                }
            }
            for field, op, value in self._filters
        ]
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return {"compositeFilter": {"op": "AND", "filters": clauses}}

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        where = self._where_clause()
        if where is not None:
            structured["where"] = where
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        url = f"{_BASE}/{self._parent}:runQuery"
        body = {"structuredQuery": self._structured_query()}
        resp = await _request_async(
            self._client._http,
            url,
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            yield DocumentSnapshot(
                _doc_id(doc.get("name", "")), decode_document(doc.get("fields"))
            )

    async def count(self) -> int:
        """Count matching documents server-side (runAggregationQuery), without reading them."""
        url = f"{_BASE}/{self._parent}:runAggregationQuery"
        body = {
            "structuredAggregationQuery": {
                "structuredQuery": self._structured_query(),
                "aggregations": [{"alias": "count", "count": {}}],
            }
        }
        resp = await _request_async(
            self._client._http,
            url,
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            fields = item.get("result", {}).get("aggregateFields", {})
            if "count" in fields:
                return int(fields["count"].get("integerValue", 0))
        return 0


class CollectionReference:
    """Reference to a collection (top-level or nested); matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    def _query(self) -> _Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where() and .order_by(), then .stream() or .count()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        """Start an unfiltered, ordered query."""
        return self._query().order_by(field, direction)

    def query(self) -> _Query:
        """Start an unfiltered query over the whole collection."""
        return self._query()


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")
