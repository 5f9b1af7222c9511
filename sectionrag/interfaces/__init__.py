"""Public interface definitions for the external services sectionrag depends on.

Both network collaborators are accessed exclusively through the abstract
base classes defined here.  Concrete adapters live in
``sectionrag/providers/`` and are wired up by the CLI; unit tests inject
fakes instead.

CONCRETE PROVIDER MAP:
    IEmbeddingProvider    →  OllamaEmbeddingProvider, OpenAIEmbeddingProvider
    IVectorStoreProvider  →  QdrantVectorStoreProvider
"""

from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "IVectorStoreProvider",
]
