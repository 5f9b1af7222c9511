"""Vector-store data models for the embed and search phases.

Defines Pydantic v2 models for the payload stored alongside each vector,
the point sent to the store, search hits and the per-run summaries the CLI
reports.  All models use frozen config so nothing downstream mutates a
record after it has been built.

Pipeline overview:

    1. CHUNK: a document is split into ``Chunk`` records (see ``chunk.py``)
       and written to a JSONL file.  No network access.
    2. EMBED: each chunk's text becomes a dense vector via the embedding
       provider.
    3. UPSERT: the vector and a ``PointPayload`` are written to the vector
       store under a deterministic id (``IndexRecord``).
    4. SEARCH: a query is embedded the same way and the store returns the
       nearest points as ``QueryResult`` objects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# EmbeddingInfo: provenance of the vector stored with each point.
# ---------------------------------------------------------------------------
class EmbeddingInfo(BaseModel):
    """Which provider and model produced a stored vector."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(description='Embedding backend, e.g. "ollama".')
    model: str = Field(description='Embedding model name, e.g. "bge-m3".')
    dims: int = Field(ge=1, description="Length of the embedding vector.")
    normalized: bool = Field(
        default=True,
        description="Whether the input text was normalized before embedding.",
    )


# ---------------------------------------------------------------------------
# PointPayload: metadata stored alongside each vector.
# ---------------------------------------------------------------------------
class PointPayload(BaseModel):
    """Payload attached to a vector-store point.

    Optional chunk attributes are omitted from the serialized payload when
    absent (see :meth:`to_payload`) rather than stored as nulls.
    """

    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(description="Document identifier used for filtered search.")
    text: str = Field(description="The chunk text.")
    source: str | None = Field(default=None, description="Source label of the chunk.")
    section: str | None = Field(default=None, description="Section heading, if any.")
    chunk: int | None = Field(default=None, ge=0, description="Chunk sequence number.")
    char_start: int | None = Field(default=None, ge=0)
    char_end: int | None = Field(default=None, ge=0)
    embed: EmbeddingInfo

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# IndexRecord: one point ready for upsert.
# ---------------------------------------------------------------------------
class IndexRecord(BaseModel):
    """A vector-store point: deterministic id, vector and payload."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Name-based UUID derived from the chunk id.")
    vector: list[float] = Field(min_length=1)
    payload: PointPayload

    def to_point(self) -> dict[str, Any]:
        """Return the point in the vector store's wire shape."""
        return {"id": self.id, "vector": list(self.vector), "payload": self.payload.to_payload()}


# ---------------------------------------------------------------------------
# QueryResult: a search hit returned by the vector store.
# ---------------------------------------------------------------------------
class QueryResult(BaseModel):
    """A single nearest-neighbour hit.

    The payload is kept as the raw mapping returned by the store; the
    convenience properties read the fields the CLI displays.
    """

    model_config = ConfigDict(frozen=True)

    id: str | int = Field(description="Point id as returned by the store.")
    score: float = Field(description="Similarity score reported by the store.")
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def doc_id(self) -> str | None:
        return self.payload.get("doc_id")

    @property
    def section(self) -> str | None:
        return self.payload.get("section")

    @property
    def text(self) -> str:
        return self.payload.get("text") or ""


# ---------------------------------------------------------------------------
# Run summaries reported by the CLI.
# ---------------------------------------------------------------------------
class ChunkingResult(BaseModel):
    """Summary of a single chunking run."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    chunks_written: int = Field(default=0, ge=0)
    output_path: str
    elapsed_seconds: float = Field(default=0.0, ge=0.0)


class IndexingResult(BaseModel):
    """Summary of a single embed-and-upsert run."""

    model_config = ConfigDict(frozen=True)

    doc_id: str
    collection: str
    chunks_read: int = Field(default=0, ge=0)
    points_upserted: int = Field(default=0, ge=0)
    elapsed_seconds: float = Field(default=0.0, ge=0.0)
