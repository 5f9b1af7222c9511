"""Per-command option models, validated once at the CLI boundary.

Each CLI subcommand builds one of these frozen models from its parsed
arguments plus :class:`~sectionrag.config.settings.Settings` defaults.
Construction fails with :class:`~sectionrag.utils.errors.ConfigurationError`
before any core logic runs, so services can trust their inputs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sectionrag.utils.errors import ConfigurationError


def validate_file_path(path: str) -> Path:
    """Reject empty paths, NUL bytes and ``..`` components; return the resolved path."""
    if not path or not path.strip():
        raise ValueError("path must not be empty")
    if "\x00" in path:
        raise ValueError(f"path contains a NUL byte: {path!r}")
    if ".." in path:
        raise ValueError(f"path must not contain '..': {path}")
    return Path(path).expanduser().resolve()


def _require_file(path: Path) -> Path:
    if not path.is_file():
        raise ValueError(f"file does not exist: {path}")
    return path


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(cls, **values: Any):
        """Validate *values*, turning pydantic errors into ``ConfigurationError``."""
        try:
            return cls(**values)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or cls.__name__}: "
                f"{err['msg'].removeprefix('Value error, ')}"
                for err in exc.errors()
            )
            raise ConfigurationError(f"Invalid options: {details}") from exc


class ChunkOptions(_Options):
    """Options for ``sectionrag chunk``."""

    input_path: Path = Field(description="UTF-8 plain-text document to chunk.")
    output_path: Path = Field(description="Destination JSONL chunk record file.")
    doc_id: str = Field(min_length=1)
    target_len: int = Field(ge=1, description="Maximum characters per chunk.")
    overlap: int = Field(ge=0, description="Desired overlap characters between chunks.")

    @field_validator("input_path", mode="before")
    @classmethod
    def _check_input(cls, value: Any) -> Path:
        return _require_file(validate_file_path(str(value)))

    @field_validator("output_path", mode="before")
    @classmethod
    def _check_output(cls, value: Any) -> Path:
        return validate_file_path(str(value))


class EmbedOptions(_Options):
    """Options for ``sectionrag embed``."""

    chunks_path: Path = Field(description="JSONL chunk record file produced by ``chunk``.")
    doc_id: str = Field(min_length=1)
    collection: str = Field(min_length=1)

    @field_validator("chunks_path", mode="before")
    @classmethod
    def _check_chunks(cls, value: Any) -> Path:
        return _require_file(validate_file_path(str(value)))


class SearchOptions(_Options):
    """Options for ``sectionrag search``."""

    query: str = Field(min_length=1)
    doc_id: str | None = None
    top_k: int = Field(default=5, ge=1)
    collection: str = Field(min_length=1)
    hnsw_ef: int | None = Field(default=None, ge=1)

    @field_validator("query")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value
