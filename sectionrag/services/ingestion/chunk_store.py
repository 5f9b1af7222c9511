"""JSONL persistence for chunk records.

The chunk record file is the hand-off between the offline chunking phase
and the network-bound embed phase: one JSON object per line with the keys
``id, text, source, section, chunk, char_start, char_end``.  Absent values
are written as ``null``; on read, optional keys may be missing entirely.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog
from pydantic import ValidationError

from sectionrag.models.chunk import Chunk
from sectionrag.utils.errors import ChunkRecordError

logger = structlog.get_logger(logger_name=__name__)


def write_chunks(path: str | Path, chunks: Iterable[Chunk]) -> int:
    """Write *chunks* to *path* as UTF-8 JSONL, creating parent directories.

    Returns the number of records written.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with out_path.open("w", encoding="utf-8") as fh:
        for chunk in chunks:
            fh.write(json.dumps(chunk.to_record(), ensure_ascii=False))
            fh.write("\n")
            count += 1

    logger.debug("chunks_written", path=str(out_path), count=count)
    return count


def iter_chunks(path: str | Path) -> Iterator[Chunk]:
    """Yield chunks from a JSONL file in file order.

    Blank lines are skipped.  The first line that is not valid UTF-8, not
    valid JSON, not an object, or fails validation raises
    :class:`ChunkRecordError` with its 1-based line number and raw content.
    """
    # Binary mode so a bad byte is reported against its own line.
    with Path(path).open("rb") as fh:
        for line_number, raw in enumerate(fh, start=1):
            raw = raw.rstrip(b"\r\n")
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ChunkRecordError(
                    line_number, raw.decode("utf-8", "replace"), "invalid UTF-8"
                ) from exc
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ChunkRecordError(line_number, line, exc.msg) from exc
            if not isinstance(record, dict):
                raise ChunkRecordError(line_number, line, "expected a JSON object")
            try:
                yield Chunk.model_validate(record)
            except ValidationError as exc:
                reason = "; ".join(
                    f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
                    for err in exc.errors()
                )
                raise ChunkRecordError(line_number, line, reason) from exc


def read_chunks(path: str | Path) -> list[Chunk]:
    """Read every chunk from *path*; see :func:`iter_chunks` for error rules."""
    return list(iter_chunks(path))
