"""OpenAI-compatible embedding provider adapter.

Wraps the ``openai`` async client to implement :class:`IEmbeddingProvider`.
Supports both real OpenAI and OpenAI-compatible servers (TogetherAI,
vLLM, Ollama's own ``/v1`` endpoint) via a custom ``openai_base_url``.
"""

from __future__ import annotations

import openai
import structlog

from sectionrag.config.settings import Settings
from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.utils.errors import EmbeddingError, ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by an OpenAI-compatible embeddings API.

    The model name and expected dimension come from ``embedding_model`` and
    ``embedding_dimension``.  When ``openai_base_url`` is configured the
    client points at that URL; self-hosted servers usually accept any key.
    """

    def __init__(self, settings: Settings, max_chars: int | None = None) -> None:
        self._api_key = settings.openai_api_key
        self._base_url = settings.openai_base_url
        self._timeout = settings.http_timeout
        self._model = settings.embedding_model
        self._dimension = settings.embedding_dimension
        self._max_chars = max_chars
        self._provider_label = "openai-compatible" if self._base_url else "openai"
        self._client: openai.AsyncOpenAI | None = None

    def _get_client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            # base_url only when configured.
            client_kwargs: dict = {
                "api_key": self._api_key or "unused",
                "timeout": self._timeout,
                "max_retries": 0,
            }
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
        return self._client

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed_single(self, text: str) -> list[float]:
        """Embed *text* with one ``embeddings.create`` call."""
        prompt = text.strip()
        if self._max_chars is not None:
            prompt = prompt[: self._max_chars]
        if not prompt:
            raise EmbeddingError(
                message="Cannot embed blank text",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._get_client().embeddings.create(
                input=[prompt],
                model=self._model,
            )
        except openai.APIConnectionError as exc:
            raise ProviderUnavailableError(
                message=f"{self._provider_label} endpoint unreachable: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise EmbeddingError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.data or not response.data[0].embedding:
            raise EmbeddingError(
                message=f"{self._provider_label} returned no embedding for model {self._model}",
                provider_name=self.get_provider_name(),
            )

        logger.debug(
            "openai_embedding",
            model=self._model,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return list(response.data[0].embedding)

    def get_dimension(self) -> int:
        return self._dimension

    def get_model_name(self) -> str:
        return self._model

    def get_provider_name(self) -> str:
        return self._provider_label

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
