"""Application settings loaded from environment variables via pydantic-settings.

Values come from, in priority order:

  1. Environment variables, e.g. ``QDRANT_URL=http://qdrant:6333``
  2. A ``.env`` file in the working directory
  3. An optional YAML file passed to :func:`sectionrag.config.loader.load_settings`
  4. The defaults below

Field ``qdrant_url`` maps to the env var ``QDRANT_URL`` (case-insensitive).
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """sectionrag settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Embedding ===
    embedding_provider: str = "ollama"  # "ollama" or "openai"
    embedding_model: str = "bge-m3"
    embedding_dimension: int = 1024
    ollama_base_url: str = "http://localhost:11434"
    # Only used when embedding_provider == "openai".
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs

    # === Vector store ===
    qdrant_url: str = "http://localhost:6333"
    qdrant_collection: str = "docs"
    qdrant_distance: str = "Cosine"

    # Seconds per HTTP request (embedding or vector store).
    http_timeout: float = 60.0

    # === Chunking ===
    chunk_target_len: int = 1000
    chunk_overlap: int = 150
    short_sentence_threshold: int = 60
    default_doc_id: str = "myDocument"

    # === Indexing / query ===
    progress_interval: int = 50
    query_max_chars: int = 2000

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    @field_validator("ollama_base_url", "qdrant_url", "openai_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("embedding_provider")
    @classmethod
    def _lower_provider(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("qdrant_distance")
    @classmethod
    def _check_distance(cls, value: str) -> str:
        allowed = {"Cosine", "Dot", "Euclid", "Manhattan"}
        if value not in allowed:
            raise ValueError(f"qdrant_distance must be one of {sorted(allowed)}, got {value!r}")
        return value

    @field_validator(
        "embedding_dimension",
        "chunk_target_len",
        "short_sentence_threshold",
        "progress_interval",
        "query_max_chars",
    )
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"must be positive, got {value}")
        return value

    @field_validator("chunk_overlap")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"must be non-negative, got {value}")
        return value
