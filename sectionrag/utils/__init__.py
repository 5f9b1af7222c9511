"""Utility modules for sectionrag.

- **errors** -- Domain-specific exception hierarchy rooted at SectionRagError;
  each pipeline stage raises its own subclass so the CLI can report failures
  precisely without broad ``except Exception`` blocks.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Unicode/whitespace normalization, paragraph
  splitting and canonical-text construction for the chunker.
"""

# -- Domain exception hierarchy --------------------------------------------
from sectionrag.utils.errors import (
    ChunkRecordError,
    CollectionProvisioningError,
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingError,
    ProviderUnavailableError,
    QueryError,
    RAGError,
    SectionRagError,
    VectorStoreError,
)

# -- Structured logging ----------------------------------------------------
from sectionrag.utils.logging import configure_logging

# -- Text normalization ----------------------------------------------------
from sectionrag.utils.text_normalizer import (
    build_canonical_text,
    normalize_text,
    split_paragraphs,
)

__all__ = [
    "ChunkRecordError",
    "CollectionProvisioningError",
    "ConfigurationError",
    "DimensionMismatchError",
    "EmbeddingError",
    "ProviderUnavailableError",
    "QueryError",
    "RAGError",
    "SectionRagError",
    "VectorStoreError",
    "build_canonical_text",
    "configure_logging",
    "normalize_text",
    "split_paragraphs",
]
