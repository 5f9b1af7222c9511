"""Abstract base class for text-embedding service providers.

Defines the contract for turning one text into one embedding vector.
Implementations may wrap Ollama's native ``/api/embeddings`` endpoint, any
OpenAI-compatible ``/v1/embeddings`` endpoint, or another backend; the
indexing and query services only see this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations:
#   OllamaEmbeddingProvider : bge-m3 via Ollama's /api/embeddings (default)
#   OpenAIEmbeddingProvider : any OpenAI-compatible embeddings endpoint
# Located in: sectionrag/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services used by the indexing pipeline.

    Embeddings are consumed by
    :class:`~sectionrag.interfaces.vector_store_provider.IVectorStoreProvider`
    for indexing and query-time similarity search.  One call embeds one
    text; there is no batching.

    Providers that hold network clients release them in :meth:`aclose`, and
    can be used as ``async with`` context managers.
    """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string.

        Parameters
        ----------
        text:
            The text to embed.  Leading/trailing whitespace is ignored.

        Returns
        -------
        list[float]
            The embedding vector.  Its length is expected to equal
            :meth:`get_dimension`; callers verify this.

        Raises
        ------
        sectionrag.utils.errors.EmbeddingError
            If the text is blank, the endpoint answers with a non-success
            status, or the response carries no vector.
        sectionrag.utils.errors.ProviderUnavailableError
            If the endpoint cannot be reached.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the expected dimensionality of the embedding vectors.

        Must match the dimension the vector-store collection was created
        with, e.g. ``1024`` for ``bge-m3``.
        """

    @abstractmethod
    def get_model_name(self) -> str:
        """Return the embedding model name, e.g. ``"bge-m3"``."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the backend identifier stored in point payloads, e.g. ``"ollama"``."""

    async def aclose(self) -> None:
        """Release network resources.  The default holds none."""

    async def __aenter__(self) -> IEmbeddingProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
