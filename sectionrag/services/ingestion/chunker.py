"""Text chunking with overlapping sentence windows and section attribution.

Splits a plain-text document into :class:`~sectionrag.models.chunk.Chunk`
objects sized for embedding models (~1000 characters each with ~150
characters of overlap).

The chunking strategy has three key design goals:

1. **Sentence-preserving** -- Chunks are built from whole sentence units
   (see ``sentence_segmenter.py``) joined by newlines, so no chunk starts
   or ends mid-sentence.

2. **Overlapping windows** -- Consecutive chunks share trailing/leading
   sentences so that a fact spanning a boundary is captured whole in at
   least one chunk.

3. **Section-aware** -- Each chunk is labelled with the heading of the
   section its first sentence falls in (see ``section_detector.py``), which
   ends up in the vector-store payload for display and filtering.

Every chunk records ``char_start`` / ``char_end`` offsets into the canonical
text produced by :func:`~sectionrag.utils.text_normalizer.build_canonical_text`.
"""

from __future__ import annotations

import structlog

from sectionrag.models.chunk import Chunk, SectionMarker, Sentence
from sectionrag.services.ingestion.section_detector import SectionDetector, current_section
from sectionrag.services.ingestion.sentence_segmenter import (
    DEFAULT_SHORT_SENTENCE_THRESHOLD,
    merge_short_sentences,
    split_sentences,
)
from sectionrag.utils.text_normalizer import build_canonical_text

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TARGET_LEN = 1000
DEFAULT_OVERLAP = 150


def chunk_id_for(doc_id: str, sequence: int) -> str:
    """Return the chunk identifier ``"<doc_id>-<sequence:05d>"``."""
    return f"{doc_id}-{sequence:05d}"


def assemble_chunks(
    sentences: list[Sentence],
    markers: list[SectionMarker],
    doc_id: str,
    target_len: int = DEFAULT_TARGET_LEN,
    overlap: int = DEFAULT_OVERLAP,
    source: str | None = None,
) -> list[Chunk]:
    """Greedily pack *sentences* into overlapping chunks.

    Each chunk takes sentences from cursor ``i`` while the newline-joined
    text stays within *target_len*; the first sentence is always taken,
    even when it alone is longer.  The next chunk re-starts a few sentences
    back: the walk goes backward from the last sentence taken, adding
    ``len(sentence) + 1`` until *overlap* characters are covered, and the
    new cursor is ``max(reseed + 1, i + 1)`` so the loop always advances.

    Args:
        sentences: Merged sentence units in document order.
        markers: Section markers in increasing offset order.
        doc_id: Document identifier used to build chunk ids.
        target_len: Maximum characters per chunk (>= 1).
        overlap: Desired characters of trailing overlap (>= 0).
        source: Source label stored on every chunk.

    Returns:
        Chunks in document order with sequence numbers from 0.

    Raises:
        ValueError: If *target_len* < 1 or *overlap* < 0.
    """
    if target_len < 1:
        raise ValueError(f"target_len must be positive, got {target_len}")
    if overlap < 0:
        raise ValueError(f"overlap must be non-negative, got {overlap}")

    chunks: list[Chunk] = []
    sequence = 0
    i = 0

    while i < len(sentences):
        parts: list[str] = []
        length = 0
        start = sentences[i].start
        end = start
        j = i

        while j < len(sentences):
            sentence = sentences[j]
            if parts and length + 1 + len(sentence.text) > target_len:
                break
            length += len(sentence.text) + (1 if parts else 0)
            parts.append(sentence.text)
            end = sentence.end
            j += 1

        text = "\n".join(parts).strip()
        if text:
            chunks.append(
                Chunk(
                    id=chunk_id_for(doc_id, sequence),
                    text=text,
                    source=source,
                    section=current_section(start, markers),
                    chunk_index=sequence,
                    char_start=start,
                    char_end=end,
                )
            )
            sequence += 1

        if j >= len(sentences):
            break

        covered = 0
        k = j - 1
        while k >= i and covered < overlap:
            covered += len(sentences[k].text) + 1
            k -= 1
        i = max(k + 1, i + 1)

    return chunks


class TextChunker:
    """Runs the full chunking pipeline on raw document text.

    normalize -> paragraphs -> sentences (+ short-sentence merge)
    -> section markers -> overlapping chunks.

    Parameters
    ----------
    target_len:
        Maximum characters per chunk (default 1000).
    overlap:
        Desired characters of overlap between consecutive chunks (default 150).
    short_sentence_threshold:
        Sentence units are merged up to this many characters (default 60).
    section_detector:
        Heading detector; a default :class:`SectionDetector` when omitted.
    """

    def __init__(
        self,
        target_len: int = DEFAULT_TARGET_LEN,
        overlap: int = DEFAULT_OVERLAP,
        short_sentence_threshold: int = DEFAULT_SHORT_SENTENCE_THRESHOLD,
        section_detector: SectionDetector | None = None,
    ) -> None:
        if target_len < 1:
            raise ValueError(f"target_len must be positive, got {target_len}")
        if overlap < 0:
            raise ValueError(f"overlap must be non-negative, got {overlap}")
        self._target_len = target_len
        self._overlap = overlap
        self._short_sentence_threshold = short_sentence_threshold
        self._section_detector = section_detector or SectionDetector()

    def chunk(self, text: str, doc_id: str, source: str | None = None) -> list[Chunk]:
        """Split raw *text* into chunks for *doc_id*.

        Parameters
        ----------
        text:
            Raw document text (any line endings, unnormalized).
        doc_id:
            Document identifier; chunk ids are ``"<doc_id>-00000"`` onwards.
        source:
            Source label stored on each chunk; ``"<doc_id>.txt"`` when omitted.

        Returns
        -------
        list[Chunk]
            Chunks in document order.  Blank input returns an empty list.
        """
        canonical, paragraphs = build_canonical_text(text)
        if not canonical:
            return []

        sentences = merge_short_sentences(
            split_sentences(canonical), threshold=self._short_sentence_threshold
        )
        markers = self._section_detector.detect(paragraphs)

        chunks = assemble_chunks(
            sentences,
            markers,
            doc_id=doc_id,
            target_len=self._target_len,
            overlap=self._overlap,
            source=source if source is not None else f"{doc_id}.txt",
        )

        logger.debug(
            "chunking_complete",
            doc_id=doc_id,
            num_sentences=len(sentences),
            num_sections=len(markers),
            num_chunks=len(chunks),
        )
        return chunks
