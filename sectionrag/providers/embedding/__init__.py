"""Embedding provider implementations.

Embeddings convert text into numeric vectors that capture semantic meaning.
These vectors are stored in Qdrant and used for similarity search.

Two implementations of IEmbeddingProvider:
    1. OllamaEmbeddingProvider : native Ollama API, bge-m3 (1024 dims).
       Default. Free and local, but requires a running Ollama server.
    2. OpenAIEmbeddingProvider : any OpenAI-compatible embeddings endpoint.
       Selected with EMBEDDING_PROVIDER=openai.
"""

from sectionrag.providers.embedding.factory import build_embedding_provider
from sectionrag.providers.embedding.ollama_embedding_provider import OllamaEmbeddingProvider
from sectionrag.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OllamaEmbeddingProvider", "OpenAIEmbeddingProvider", "build_embedding_provider"]
