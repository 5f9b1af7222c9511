"""Offline chunking pipeline for plain-text documents.

Pipeline stages: **normalize -> sentences -> sections -> chunks -> JSONL**.

1. **Normalize** (utils/text_normalizer.py) -- NFKC, line endings, control
   characters and whitespace; paragraphs re-joined into the canonical text.

2. **Sentences** (sentence_segmenter.py) -- punctuation/newline boundaries
   with offsets into the canonical text, short neighbours merged.

3. **Sections** (section_detector.py) -- heading-like paragraph openers
   recorded as (offset, heading) markers.

4. **Chunks** (chunker.py / TextChunker) -- sentences packed into
   overlapping windows of ~1000 characters, each labelled with its section.

5. **Store** (chunk_store.py) -- one JSON record per line.

The ChunkingService class runs all five stages for one input file.
"""

from sectionrag.services.ingestion.chunk_store import iter_chunks, read_chunks, write_chunks
from sectionrag.services.ingestion.chunker import TextChunker, assemble_chunks
from sectionrag.services.ingestion.chunking_service import ChunkingService
from sectionrag.services.ingestion.section_detector import SectionDetector, current_section
from sectionrag.services.ingestion.sentence_segmenter import (
    merge_short_sentences,
    split_sentences,
)

__all__ = [
    "ChunkingService",
    "SectionDetector",
    "TextChunker",
    "assemble_chunks",
    "current_section",
    "iter_chunks",
    "merge_short_sentences",
    "read_chunks",
    "split_sentences",
    "write_chunks",
]
