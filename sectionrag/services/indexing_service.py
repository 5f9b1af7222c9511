"""Orchestrator for the embed-and-upsert phase.

Pipeline stages: **read -> ensure collection -> (embed -> check -> upsert)***.

The :class:`IndexingService` implements the **Orchestrator pattern**: it
coordinates the chunk store, an embedding provider and a vector store
without either provider knowing about the other.  All dependencies are
injected via constructor, so providers can be swapped (e.g. Ollama ->
OpenAI-compatible) without changing this class.

Every chunk costs exactly two sequential network round trips, one
embedding call and one upsert, in file order.  Nothing is retried: the
first failure propagates and already-upserted points stay in the store.
Re-running is safe because point ids are derived deterministically from
chunk ids, so a second run overwrites instead of duplicating.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from sectionrag.models.chunk import Chunk
from sectionrag.models.rag import EmbeddingInfo, IndexingResult, IndexRecord, PointPayload
from sectionrag.services.ingestion.chunk_store import read_chunks
from sectionrag.utils.errors import DimensionMismatchError

if TYPE_CHECKING:
    from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
    from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider

logger = structlog.get_logger(logger_name=__name__)

ProgressCallback = Callable[[int, int], None]


def point_id_for(chunk_id: str) -> str:
    """Return the name-based (version 3, MD5) UUID string for *chunk_id*.

    The id depends only on the UTF-8 bytes of *chunk_id*, so it is stable
    across runs, processes and machines.
    """
    digest = hashlib.md5(chunk_id.encode("utf-8")).digest()
    return str(uuid.UUID(bytes=digest, version=3))


class IndexingService:
    """Embeds chunk records and upserts them into a vector-store collection.

    Parameters
    ----------
    embedding_provider:
        Generates one vector per chunk text.
    vector_store:
        Receives one point per chunk.
    collection:
        Target collection name.
    dimension:
        Expected vector length; also used to create the collection.
    distance:
        Similarity metric used if the collection has to be created.
    progress_interval:
        Report progress after every this many successful upserts.
    progress_callback:
        Optional ``callback(upserted, total)`` invoked at each report.
    """

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        collection: str,
        dimension: int,
        distance: str = "Cosine",
        progress_interval: int = 50,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be positive, got {progress_interval}")
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._collection = collection
        self._dimension = dimension
        self._distance = distance
        self._progress_interval = progress_interval
        self._progress_callback = progress_callback

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def index_file(self, chunks_path: str | Path, doc_id: str) -> IndexingResult:
        """Embed and upsert every chunk in *chunks_path* under *doc_id*.

        The whole file is parsed before the first network call, so a
        malformed record aborts the run without touching the store.

        Raises
        ------
        ChunkRecordError
            A line of the chunk file is malformed.
        CollectionProvisioningError
            The collection cannot be checked or created.
        DimensionMismatchError
            An embedding's length differs from *dimension*.
        EmbeddingError, VectorStoreError, ProviderUnavailableError
            A network call failed.
        """
        start = time.monotonic()
        chunks = read_chunks(chunks_path)
        total = len(chunks)

        logger.info(
            "index_started",
            doc_id=doc_id,
            collection=self._collection,
            chunks=total,
            provider=self._embedding_provider.get_provider_name(),
            model=self._embedding_provider.get_model_name(),
        )

        await self._vector_store.ensure_collection(
            self._collection, self._dimension, self._distance
        )

        upserted = 0
        for chunk in chunks:
            vector = await self._embedding_provider.embed_single(chunk.text)
            if len(vector) != self._dimension:
                raise DimensionMismatchError(
                    chunk_id=chunk.id,
                    got=len(vector),
                    expected=self._dimension,
                    provider_name=self._embedding_provider.get_provider_name(),
                )
            record = self.build_record(chunk, doc_id, vector)
            upserted += await self._vector_store.upsert(self._collection, [record])

            if upserted % self._progress_interval == 0:
                self._report_progress(upserted, total)

        elapsed = time.monotonic() - start
        result = IndexingResult(
            doc_id=doc_id,
            collection=self._collection,
            chunks_read=total,
            points_upserted=upserted,
            elapsed_seconds=round(elapsed, 2),
        )

        logger.info(
            "index_complete",
            doc_id=doc_id,
            collection=self._collection,
            points=upserted,
            time_s=result.elapsed_seconds,
        )
        return result

    def build_record(self, chunk: Chunk, doc_id: str, vector: list[float]) -> IndexRecord:
        """Build the vector-store point for *chunk*."""
        payload = PointPayload(
            doc_id=doc_id,
            text=chunk.text,
            source=chunk.source,
            section=chunk.section,
            chunk=chunk.chunk_index,
            char_start=chunk.char_start,
            char_end=chunk.char_end,
            embed=EmbeddingInfo(
                provider=self._embedding_provider.get_provider_name(),
                model=self._embedding_provider.get_model_name(),
                dims=self._dimension,
                normalized=True,
            ),
        )
        return IndexRecord(id=point_id_for(chunk.id), vector=vector, payload=payload)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _report_progress(self, upserted: int, total: int) -> None:
        logger.info("index_progress", upserted=upserted, total=total)
        if self._progress_callback is not None:
            self._progress_callback(upserted, total)
