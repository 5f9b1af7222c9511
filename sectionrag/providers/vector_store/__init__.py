"""Vector store provider implementations.

Qdrant is the sole vector store implementation, reached over its REST API.
To swap Qdrant for another vector database, create a new class implementing
IVectorStoreProvider and wire it up in ``sectionrag/cli/main.py``.
"""

from sectionrag.providers.vector_store.qdrant_provider import QdrantVectorStoreProvider

__all__ = ["QdrantVectorStoreProvider"]
