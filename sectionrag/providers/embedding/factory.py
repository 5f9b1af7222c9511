"""Selects the embedding provider named in the settings."""

from __future__ import annotations

from sectionrag.config.settings import Settings
from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from sectionrag.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from sectionrag.utils.errors import ConfigurationError

SUPPORTED_PROVIDERS = ("ollama", "openai")


def build_embedding_provider(
    settings: Settings,
    max_chars: int | None = None,
) -> IEmbeddingProvider:
    """Return the provider selected by ``settings.embedding_provider``.

    Raises:
        ConfigurationError: For an unknown provider name, or ``"openai"``
            with neither an API key nor a custom base URL.
    """
    name = settings.embedding_provider
    if name == "ollama":
        return OllamaEmbeddingProvider(settings, max_chars=max_chars)
    if name == "openai":
        if not (settings.openai_api_key or settings.openai_base_url):
            raise ConfigurationError(
                "embedding_provider 'openai' requires OPENAI_API_KEY or OPENAI_BASE_URL",
                provider_name="openai",
            )
        return OpenAIEmbeddingProvider(settings, max_chars=max_chars)
    raise ConfigurationError(
        f"Unknown embedding provider {name!r}; expected one of {', '.join(SUPPORTED_PROVIDERS)}"
    )
