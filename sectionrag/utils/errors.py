"""Custom exception hierarchy for sectionrag.

All application exceptions inherit from :class:`SectionRagError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "ollama", "qdrant") caused the failure.

The hierarchy is organized by pipeline concern:

    SectionRagError  (base -- catch-all for any sectionrag error)
    +-- ConfigurationError          (bad settings / CLI arguments)
    +-- ChunkRecordError            (malformed line in a chunk record file)
    +-- ProviderUnavailableError    (external service unreachable)
    +-- RAGError                    (embedding, vector-store or query failure)
        +-- EmbeddingError          (embedding provider contract violation)
        |   +-- DimensionMismatchError
        +-- VectorStoreError        (non-success response from the store)
        |   +-- CollectionProvisioningError
        +-- QueryError              (unusable query)

Nothing in the pipeline retries.  Every error propagates to the CLI, which
reports it once and exits non-zero.  Re-running is safe because point
identifiers are deterministic.
"""


class SectionRagError(Exception):
    """Base exception for all sectionrag errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[qdrant] Upsert failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class ConfigurationError(SectionRagError):
    """Raised when configuration or command-line input is invalid or missing."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ChunkRecordError(SectionRagError):
    """Raised when a line of a chunk record file cannot be parsed.

    Carries the 1-based physical line number and the raw line so the
    operator can locate the offending record.
    """

    def __init__(self, line_number: int, line: str, reason: str = "") -> None:
        self._line_number = line_number
        self._line = line
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Malformed chunk record at line {line_number}{detail}\nContent: {line}",
        )

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def line(self) -> str:
        return self._line


# ---------------------------------------------------------------------------
# External service errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(SectionRagError):
    """Raised when an external service cannot be reached at all."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RAGError(SectionRagError):
    """Raised when a RAG operation fails (embedding, vector store or query)."""

    def __init__(
        self,
        message: str = "RAG pipeline operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingError(RAGError):
    """Raised when the embedding provider violates its contract.

    Covers non-success HTTP statuses, missing or empty vectors and attempts
    to embed blank text.
    """

    def __init__(
        self,
        message: str = "Embedding request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DimensionMismatchError(EmbeddingError):
    """Raised when an embedding's length differs from the expected dimension."""

    def __init__(
        self,
        chunk_id: str,
        got: int,
        expected: int,
        provider_name: str | None = None,
    ) -> None:
        self._chunk_id = chunk_id
        self._got = got
        self._expected = expected
        super().__init__(
            message=(
                f"Embedding dimension mismatch: got {got}, expected {expected} "
                f"(chunk id={chunk_id})"
            ),
            provider_name=provider_name,
        )

    @property
    def chunk_id(self) -> str:
        return self._chunk_id

    @property
    def got(self) -> int:
        return self._got

    @property
    def expected(self) -> int:
        return self._expected


class VectorStoreError(RAGError):
    """Raised when the vector store answers with a non-success status."""

    def __init__(
        self,
        message: str = "Vector store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CollectionProvisioningError(VectorStoreError):
    """Raised when a collection cannot be checked or created."""

    def __init__(
        self,
        message: str = "Collection provisioning failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class QueryError(RAGError):
    """Raised when a similarity query cannot be executed (e.g. blank text)."""

    def __init__(
        self,
        message: str = "Invalid query",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
