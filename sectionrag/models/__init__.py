"""sectionrag domain models: re-exports all public model classes.

The models are organized across two submodules by pipeline phase:
    - chunk.py: Chunk records plus the internal Sentence/SectionMarker values
    - rag.py: Vector-store payloads, search hits and run summaries
"""

from __future__ import annotations

from sectionrag.models.chunk import Chunk, SectionMarker, Sentence
from sectionrag.models.rag import (
    ChunkingResult,
    EmbeddingInfo,
    IndexingResult,
    IndexRecord,
    PointPayload,
    QueryResult,
)

__all__ = [
    "Chunk",
    "ChunkingResult",
    "EmbeddingInfo",
    "IndexRecord",
    "IndexingResult",
    "PointPayload",
    "QueryResult",
    "SectionMarker",
    "Sentence",
]
