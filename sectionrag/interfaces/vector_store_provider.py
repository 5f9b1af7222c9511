"""Abstract base class for vector-store service providers.

Defines the contract for provisioning a collection, upserting points and
running nearest-neighbour search.  The concrete Qdrant adapter talks to the
REST API; other stores can be swapped in behind the same interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sectionrag.models.rag import IndexRecord, QueryResult


# Concrete implementation: QdrantVectorStoreProvider (sectionrag/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for vector-store services used by the indexing and query services.

    All network-backed methods are async.  Upserts are idempotent: writing
    a record whose id already exists replaces the stored point.
    """

    @abstractmethod
    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        """Create collection *name* if it does not exist.

        Parameters
        ----------
        name:
            Collection name.
        dimension:
            Vector size used when the collection has to be created.
        distance:
            Similarity metric used on creation (``"Cosine"`` by default).

        Returns
        -------
        bool
            ``True`` if the collection was created, ``False`` if it already
            existed.

        Raises
        ------
        sectionrag.utils.errors.CollectionProvisioningError
            If existence cannot be determined or creation fails.
        """

    @abstractmethod
    async def upsert(self, collection: str, records: list[IndexRecord]) -> int:
        """Insert or replace *records* in *collection*; return how many were sent."""

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 5,
        doc_id: str | None = None,
        hnsw_ef: int | None = None,
    ) -> list[QueryResult]:
        """Return up to *limit* nearest points, best first.

        Parameters
        ----------
        collection:
            Collection to search.
        vector:
            Query embedding.
        limit:
            Maximum number of results.
        doc_id:
            When given, only points whose payload ``doc_id`` equals it match.
        hnsw_ef:
            Optional search-time HNSW beam width.
        """

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Return the exact number of points stored in *collection*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this vector-store provider."""

    async def aclose(self) -> None:
        """Release network resources.  The default holds none."""

    async def __aenter__(self) -> IVectorStoreProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
