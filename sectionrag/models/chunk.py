"""Chunking data models.

``Chunk`` is the unit persisted to the chunk record file and later embedded.
It is a frozen Pydantic model so that a record read back from disk goes
through the same validation as one produced by the chunker.

``Sentence`` and ``SectionMarker`` are internal values that never leave the
chunking stage, so they are plain frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True)
class Sentence:
    """A sentence (or merged sentence unit) located in the canonical text.

    ``start`` is the offset of the first character, ``end`` is exclusive.
    """

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class SectionMarker:
    """A detected heading and the canonical-text offset of its paragraph."""

    offset: int
    text: str


class Chunk(BaseModel):
    """A contiguous span of sentences ready for embedding.

    Serialized one-per-line in the chunk record file with the keys
    ``id, text, source, section, chunk, char_start, char_end``.  The
    ``chunk_index`` attribute is written under the shorter ``chunk`` key.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description='Chunk identifier, e.g. "myDocument-00003".')
    text: str = Field(min_length=1, description="Newline-joined sentence units.")
    source: str | None = Field(default=None, description="Source label, e.g. the input file name.")
    section: str | None = Field(
        default=None,
        description="Heading of the section the chunk starts in, if any.",
    )
    chunk_index: int | None = Field(
        default=None,
        ge=0,
        alias="chunk",
        description="Zero-based sequence number within the document.",
    )
    char_start: int | None = Field(
        default=None,
        ge=0,
        description="Offset of the chunk's first character in the canonical text.",
    )
    char_end: int | None = Field(
        default=None,
        ge=0,
        description="Exclusive end offset of the chunk's last sentence.",
    )

    @model_validator(mode="after")
    def _check_span(self) -> Chunk:
        if self.char_start is not None and self.char_end is not None:
            if self.char_start >= self.char_end:
                raise ValueError(
                    f"char_start ({self.char_start}) must be less than "
                    f"char_end ({self.char_end})"
                )
        return self

    def to_record(self) -> dict:
        """Return the JSON-ready record dict (``chunk`` key, nulls kept)."""
        return self.model_dump(by_alias=True)
