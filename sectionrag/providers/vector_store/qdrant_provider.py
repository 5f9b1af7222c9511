"""Qdrant vector store provider.

Implements :class:`IVectorStoreProvider` against the Qdrant REST API with
``httpx``:

* ``GET  /collections/{name}``                 -- existence check
* ``PUT  /collections/{name}``                 -- create (size + distance)
* ``PUT  /collections/{name}/points``          -- upsert
* ``POST /collections/{name}/points/search``   -- nearest-neighbour search
* ``POST /collections/{name}/points/count``    -- exact point count

Points carry a single unnamed vector and a JSON payload.  Search results
are filtered by the ``doc_id`` payload key when a document id is given.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from sectionrag.config.settings import Settings
from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider
from sectionrag.models.rag import IndexRecord, QueryResult
from sectionrag.utils.errors import (
    CollectionProvisioningError,
    ProviderUnavailableError,
    VectorStoreError,
)

logger = structlog.get_logger(logger_name=__name__)

_ERROR_BODY_LIMIT = 500


def _doc_filter(doc_id: str) -> dict[str, Any]:
    return {"must": [{"key": "doc_id", "match": {"value": doc_id}}]}


class QdrantVectorStoreProvider(IVectorStoreProvider):
    """Vector store backed by a Qdrant server.

    Parameters
    ----------
    settings:
        Supplies ``qdrant_url`` and ``http_timeout``.
    client:
        Optional pre-built ``httpx.AsyncClient`` (tests inject one with a
        mock transport).  When omitted a client is created on first use.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = settings.qdrant_url.rstrip("/")
        self._timeout = settings.http_timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _request(self, method: str, path: str, body: dict[str, Any] | None = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            return await self._get_client().request(method, url, json=body)
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"Qdrant request {method} {url} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    @staticmethod
    def _describe(response: httpx.Response) -> str:
        return f"HTTP {response.status_code}: {response.text[:_ERROR_BODY_LIMIT]}"

    def _result(self, response: httpx.Response) -> Any:
        """Return the ``result`` member of a successful response body."""
        try:
            return response.json().get("result")
        except (ValueError, AttributeError) as exc:
            raise VectorStoreError(
                message=f"Unreadable Qdrant response: {self._describe(response)}",
                provider_name=self.get_provider_name(),
            ) from exc

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        """Create the collection on a 404; any other non-2xx status is an error."""
        existing = await self._request("GET", f"/collections/{name}")
        if existing.is_success:
            logger.debug("collection_exists", collection=name)
            return False
        if existing.status_code != 404:
            raise CollectionProvisioningError(
                message=f"Collection lookup for '{name}' failed: {self._describe(existing)}",
                provider_name=self.get_provider_name(),
            )

        created = await self._request(
            "PUT",
            f"/collections/{name}",
            {"vectors": {"size": dimension, "distance": distance}},
        )
        if not created.is_success:
            raise CollectionProvisioningError(
                message=f"Collection creation for '{name}' failed: {self._describe(created)}",
                provider_name=self.get_provider_name(),
            )

        logger.info("collection_created", collection=name, dimension=dimension, distance=distance)
        return True

    async def upsert(self, collection: str, records: list[IndexRecord]) -> int:
        if not records:
            return 0
        response = await self._request(
            "PUT",
            f"/collections/{collection}/points",
            {"points": [record.to_point() for record in records]},
        )
        if not response.is_success:
            raise VectorStoreError(
                message=f"Upsert into '{collection}' failed: {self._describe(response)}",
                provider_name=self.get_provider_name(),
            )
        return len(records)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 5,
        doc_id: str | None = None,
        hnsw_ef: int | None = None,
    ) -> list[QueryResult]:
        body: dict[str, Any] = {"vector": vector, "limit": limit, "with_payload": True}
        if doc_id is not None:
            body["filter"] = _doc_filter(doc_id)
        if hnsw_ef is not None:
            body["params"] = {"hnsw_ef": hnsw_ef}

        response = await self._request("POST", f"/collections/{collection}/points/search", body)
        if not response.is_success:
            raise VectorStoreError(
                message=f"Search in '{collection}' failed: {self._describe(response)}",
                provider_name=self.get_provider_name(),
            )

        hits = self._result(response) or []
        return [
            QueryResult(
                id=hit.get("id", ""),
                score=hit.get("score") or 0.0,
                payload=hit.get("payload") or {},
            )
            for hit in hits
        ]

    async def count(self, collection: str) -> int:
        response = await self._request(
            "POST", f"/collections/{collection}/points/count", {"exact": True}
        )
        if not response.is_success:
            raise VectorStoreError(
                message=f"Count in '{collection}' failed: {self._describe(response)}",
                provider_name=self.get_provider_name(),
            )
        result = self._result(response) or {}
        return int(result.get("count", 0))

    def get_provider_name(self) -> str:
        return "qdrant"

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
