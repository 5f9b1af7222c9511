"""Offline chunking phase: text file in, chunk record file out.

No network access happens here; the output JSONL file is the only input the
embed phase needs.
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog

from sectionrag.models.rag import ChunkingResult
from sectionrag.services.ingestion.chunk_store import write_chunks
from sectionrag.services.ingestion.chunker import TextChunker
from sectionrag.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)


class ChunkingService:
    """Reads a UTF-8 document, chunks it and writes the chunk records.

    Parameters
    ----------
    chunker:
        Configured :class:`TextChunker` (target length, overlap, thresholds).
    """

    def __init__(self, chunker: TextChunker) -> None:
        self._chunker = chunker

    def chunk_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        doc_id: str,
    ) -> ChunkingResult:
        """Chunk *input_path* and write JSONL records to *output_path*.

        Returns
        -------
        ChunkingResult
            Document id, number of records written, output path and elapsed time.

        Raises
        ------
        ConfigurationError
            The input file is not valid UTF-8.
        """
        start = time.monotonic()

        try:
            text = Path(input_path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigurationError(
                f"Input file {input_path} is not valid UTF-8 "
                f"(byte offset {exc.start}: {exc.reason})"
            ) from exc
        chunks = self._chunker.chunk(text, doc_id=doc_id)
        written = write_chunks(output_path, chunks)

        elapsed = time.monotonic() - start
        result = ChunkingResult(
            doc_id=doc_id,
            chunks_written=written,
            output_path=str(output_path),
            elapsed_seconds=round(elapsed, 3),
        )

        logger.info(
            "chunking_file_complete",
            doc_id=doc_id,
            input_path=str(input_path),
            output_path=str(output_path),
            chunks=written,
            input_chars=len(text),
            time_s=result.elapsed_seconds,
        )
        return result
