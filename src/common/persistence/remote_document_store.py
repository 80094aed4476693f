"""Client for a remote HTTP document store, usable as a storage adapter."""

import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import APIError
from src.common.persistence.storage_adapter import IStorageAdapter, WriteOperation

logger = logging.getLogger(__name__)


class RemoteDocumentStoreClient(IStorageAdapter):
    """
    Storage adapter backed by a document store reachable over HTTP.

    Endpoints:
        GET/POST           {base}/collections/{collection}/documents
        GET/PATCH/DELETE   {base}/collections/{collection}/documents/{id}
        POST               {base}/batch

    Writes carry a ``serverTimestamps`` list naming the fields the server
    must stamp: ``createdAt`` on insert, ``updatedAt`` on update.
    """

    def __init__(
        self, base_url: Optional[str] = None, token: Optional[str] = None, timeout: Optional[int] = None
    ) -> None:
        self.base_url = (base_url or settings.REMOTE_STORE_BASE_URL or "").rstrip("/")
        self.token = token or settings.REMOTE_STORE_TOKEN
        self.timeout = timeout or settings.REMOTE_STORE_TIMEOUT
        self.session: Optional[requests.Session] = None

    def open(self) -> None:
        """Creates the HTTP session with connection pooling and a retry strategy."""
        if self.session is not None:
            return
        if not self.base_url:
            raise APIError("REMOTE_STORE_BASE_URL is not set in environment variables.")

        session = requests.Session()
        retry_strategy = Retry(
            total=3,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],  # Writes are never replayed
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=10, pool_maxsize=10)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        if self.token:
            session.headers["Authorization"] = f"Bearer {self.token}"
        self.session = session
        logger.info(f"Connected to remote document store at {self.base_url}")

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def _send(self, method: str, path: str, allow_not_found: bool = False, **kwargs) -> requests.Response:
        """Sends a request and maps transport failures to APIError."""
        if self.session is None:
            self.open()

        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            if allow_not_found and response.status_code == 404:
                return response
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise APIError(f"{method} {path} timed out: {e}", original_exception=e)
        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            raise APIError(f"{method} {path} failed: {e}", original_exception=e, status_code=status_code)

    @staticmethod
    def _json(response: requests.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Failed to decode JSON response for {path}: {e}", original_exception=e)

    @staticmethod
    def _documents_path(collection: str, record_id: Optional[str] = None) -> str:
        path = f"collections/{collection}/documents"
        return f"{path}/{record_id}" if record_id is not None else path

    @staticmethod
    def _write_payload(operation: WriteOperation) -> dict[str, Any]:
        payload: dict[str, Any] = {"op": operation.kind, "collection": operation.collection}
        if operation.record_id is not None:
            payload["id"] = operation.record_id
        if operation.kind == "insert":
            fields = {k: v for k, v in operation.data.items() if not (k == "id" and v is None)}
            payload.update({"fields": fields, "serverTimestamps": ["createdAt"]})
        elif operation.kind == "update":
            payload.update({"fields": dict(operation.data), "serverTimestamps": ["updatedAt"]})
        return payload

    def load(self, collection: str) -> list[dict[str, Any]]:
        path = self._documents_path(collection)
        body = self._json(self._send("GET", path), path)
        return list(body.get("documents", []))

    def get(self, collection: str, record_id: str) -> Optional[dict[str, Any]]:
        path = self._documents_path(collection, record_id)
        response = self._send("GET", path, allow_not_found=True)
        if response.status_code == 404:
            return None
        return self._json(response, path)

    def insert(self, collection: str, record: dict[str, Any]) -> dict[str, Any]:
        path = self._documents_path(collection)
        payload = self._write_payload(WriteOperation(kind="insert", collection=collection, data=record))
        document = self._json(self._send("POST", path, json=payload), path)
        return {**record, **document}

    def update(self, collection: str, record_id: str, changes: dict[str, Any]) -> Optional[dict[str, Any]]:
        path = self._documents_path(collection, record_id)
        payload = self._write_payload(
            WriteOperation(kind="update", collection=collection, record_id=record_id, data=changes)
        )
        response = self._send("PATCH", path, allow_not_found=True, json=payload)
        if response.status_code == 404:
            return None
        return self._json(response, path)

    def delete(self, collection: str, record_id: str) -> bool:
        path = self._documents_path(collection, record_id)
        response = self._send("DELETE", path, allow_not_found=True)
        return response.status_code != 404

    def query(
        self,
        collection: str,
        filters: Optional[dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        path = self._documents_path(collection)
        params: dict[str, Any] = {}
        if filters:
            params["where"] = [f"{field}=={value}" for field, value in filters.items()]
        if order_by:
            params["orderBy"] = order_by
            params["direction"] = "desc" if descending else "asc"
        body = self._json(self._send("GET", path, params=params), path)
        return list(body.get("documents", []))

    def commit(self, operations: list[WriteOperation]) -> list[Any]:
        """Sends all writes as one batch; the store applies them atomically."""
        if not operations:
            return []
        payload = {"writes": [self._write_payload(operation) for operation in operations]}
        body = self._json(self._send("POST", "batch", json=payload), "batch")
        results = body.get("results", [])
        if len(results) != len(operations):
            raise APIError(f"Batch returned {len(results)} results for {len(operations)} writes")
        logger.debug(f"Committed batch of {len(operations)} write(s) to remote store")
        return results
