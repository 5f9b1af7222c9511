"""Shared pytest fixtures for the sectionrag test suite."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider
from sectionrag.models.chunk import Chunk
from sectionrag.models.rag import IndexRecord, QueryResult
from sectionrag.services.ingestion.chunk_store import write_chunks
from sectionrag.utils.errors import EmbeddingError, VectorStoreError


def numbered_sentence(i: int) -> str:
    """Return a 50-character sentence that never merges with its neighbours."""
    return f"Sentence number {i:02d} describes a distinct fact here."


# ---------------------------------------------------------------------------
# Fake providers
# ---------------------------------------------------------------------------


class FakeEmbeddingProvider(IEmbeddingProvider):
    """Deterministic embedding provider: the vector is derived from a SHA-256 of the text."""

    def __init__(self, dimension: int = 8, model: str = "fake-model") -> None:
        self._dimension = dimension
        self._model = model
        self.calls: list[str] = []
        self.closed = False

    async def embed_single(self, text: str) -> list[float]:
        prompt = text.strip()
        if not prompt:
            raise EmbeddingError("Cannot embed blank text", provider_name="fake")
        self.calls.append(prompt)
        digest = hashlib.sha256(prompt.encode("utf-8")).digest()
        return [digest[i % len(digest)] / 255.0 for i in range(self._dimension)]

    def get_dimension(self) -> int:
        return self._dimension

    def get_model_name(self) -> str:
        return self._model

    def get_provider_name(self) -> str:
        return "fake"

    async def aclose(self) -> None:
        self.closed = True


class InMemoryVectorStore(IVectorStoreProvider):
    """Dict-backed vector store with dot-product search."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, IndexRecord]] = {}
        self.dimensions: dict[str, int] = {}
        self.upsert_calls = 0
        self.closed = False

    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        if name in self.collections:
            return False
        self.collections[name] = {}
        self.dimensions[name] = dimension
        return True

    async def upsert(self, collection: str, records: list[IndexRecord]) -> int:
        if collection not in self.collections:
            raise VectorStoreError(f"Collection '{collection}' not found", provider_name="memory")
        self.upsert_calls += 1
        for record in records:
            self.collections[collection][record.id] = record
        return len(records)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 5,
        doc_id: str | None = None,
        hnsw_ef: int | None = None,
    ) -> list[QueryResult]:
        points = list(self.collections.get(collection, {}).values())
        if doc_id is not None:
            points = [p for p in points if p.payload.doc_id == doc_id]
        scored = sorted(
            ((sum(a * b for a, b in zip(vector, p.vector)), p) for p in points),
            key=lambda pair: pair[0],
            reverse=True,
        )
        return [
            QueryResult(id=p.id, score=score, payload=p.payload.to_payload())
            for score, p in scored[:limit]
        ]

    async def count(self, collection: str) -> int:
        return len(self.collections.get(collection, {}))

    def get_provider_name(self) -> str:
        return "memory"

    async def aclose(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def in_memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def sample_document() -> str:
    """A small document with two headed sections."""
    intro = " ".join(numbered_sentence(i) for i in range(4))
    methods = " ".join(numbered_sentence(i) for i in range(4, 8))
    return f"Introduction Overview\n\n{intro}\n\nMethods and Materials\n\n{methods}\n"


@pytest.fixture
def sample_chunks() -> list[Chunk]:
    return [
        Chunk(
            id="doc-00000",
            text="Introduction Overview\nSentence number 00 describes a distinct fact here.",
            source="doc.txt",
            section="Introduction Overview",
            chunk_index=0,
            char_start=0,
            char_end=73,
        ),
        Chunk(
            id="doc-00001",
            text="Sentence number 01 describes a distinct fact here.",
            source="doc.txt",
            section="Introduction Overview",
            chunk_index=1,
            char_start=74,
            char_end=124,
        ),
        Chunk(
            id="doc-00002",
            text="Sentence number 04 describes a distinct fact here.",
            source="doc.txt",
            section=None,
            chunk_index=2,
            char_start=251,
            char_end=301,
        ),
    ]


@pytest.fixture
def chunks_file(tmp_path: Path, sample_chunks: list[Chunk]) -> Path:
    path = tmp_path / "chunks.jsonl"
    write_chunks(path, sample_chunks)
    return path
