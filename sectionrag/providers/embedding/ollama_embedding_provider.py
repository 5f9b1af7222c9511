"""Ollama embedding provider adapter (local/free).

Calls Ollama's native ``/api/embeddings`` endpoint with ``httpx`` to
implement :class:`IEmbeddingProvider`.  Defaults to ``bge-m3``
(1024 dimensions).  Runs locally with no API key required.
"""

from __future__ import annotations

import httpx
import structlog

from sectionrag.config.settings import Settings
from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.utils.errors import EmbeddingError, ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_ERROR_BODY_LIMIT = 500


class OllamaEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by a model served via Ollama.

    Sends one ``POST /api/embeddings`` request per text with the body
    ``{"model": ..., "prompt": ...}`` and reads ``{"embedding": [...]}``.

    Parameters
    ----------
    settings:
        Supplies ``ollama_base_url``, ``embedding_model``,
        ``embedding_dimension`` and ``http_timeout``.
    client:
        Optional pre-built ``httpx.AsyncClient`` (tests inject one with a
        mock transport).  When omitted a client is created on first use.
    max_chars:
        When set, input text is cut to this many characters after trimming.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        max_chars: int | None = None,
    ) -> None:
        self._base_url = settings.ollama_base_url.rstrip("/")
        self._model = settings.embedding_model
        self._dimension = settings.embedding_dimension
        self._timeout = settings.http_timeout
        self._max_chars = max_chars
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed_single(self, text: str) -> list[float]:
        """Embed *text* with one request; see the interface for error rules."""
        prompt = text.strip()
        if self._max_chars is not None:
            prompt = prompt[: self._max_chars]
        if not prompt:
            raise EmbeddingError(
                message="Cannot embed blank text",
                provider_name=self.get_provider_name(),
            )

        url = f"{self._base_url}/api/embeddings"
        try:
            response = await self._get_client().post(
                url, json={"model": self._model, "prompt": prompt}
            )
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"Ollama request to {url} failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.is_success:
            raise EmbeddingError(
                message=(
                    f"Ollama embeddings returned HTTP {response.status_code}: "
                    f"{response.text[:_ERROR_BODY_LIMIT]}"
                ),
                provider_name=self.get_provider_name(),
            )

        try:
            vector = response.json().get("embedding")
        except (ValueError, AttributeError) as exc:
            raise EmbeddingError(
                message=f"Ollama embeddings returned an unreadable body: {response.text[:_ERROR_BODY_LIMIT]}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not vector:
            raise EmbeddingError(
                message=f"Ollama returned no embedding for model {self._model}",
                provider_name=self.get_provider_name(),
            )

        logger.debug("ollama_embedding", model=self._model, chars=len(prompt), dims=len(vector))
        return [float(v) for v in vector]

    def get_dimension(self) -> int:
        return self._dimension

    def get_model_name(self) -> str:
        return self._model

    def get_provider_name(self) -> str:
        return "ollama"

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
