"""Similarity search over an indexed collection.

The query text is embedded with the same provider used at indexing time and
handed to the vector store's top-K search, optionally restricted to one
document id.  Ranking is entirely the store's; results are returned and
rendered in the order received.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from sectionrag.models.rag import QueryResult
from sectionrag.utils.errors import QueryError

if TYPE_CHECKING:
    from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
    from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider

logger = structlog.get_logger(logger_name=__name__)

PREVIEW_CHARS = 200


def format_result(result: QueryResult) -> str:
    """Render one hit as a header line followed by a text preview."""
    header = (
        f"id={result.id}  score={result.score:.4f}  "
        f"doc_id={result.doc_id or ''}  section={result.section or ''}"
    )
    text = result.text
    preview = text[:PREVIEW_CHARS] + "..." if len(text) > PREVIEW_CHARS else text
    return f"{header}\n{preview}"


def render_results(query: str, results: list[QueryResult], top_k: int) -> str:
    """Render a full search response for terminal output."""
    lines = [f"Query: {query}"]
    if not results:
        lines.append("No results.")
        return "\n".join(lines)

    lines.append(f"Top {top_k} results:")
    for index, result in enumerate(results):
        lines.append(f"[{index}]\n{format_result(result)}\n")
    return "\n".join(lines)


class QueryService:
    """Embeds a query and runs a top-K search against one collection.

    Parameters
    ----------
    embedding_provider:
        Must be the provider/model the collection was indexed with.
    vector_store:
        Store holding the indexed points.
    collection:
        Collection to search.
    max_query_chars:
        Queries longer than this are cut before embedding (default 2000).
    """

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        collection: str,
        max_query_chars: int = 2000,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._collection = collection
        self._max_query_chars = max_query_chars

    async def search(
        self,
        query: str,
        doc_id: str | None = None,
        top_k: int = 5,
        hnsw_ef: int | None = None,
    ) -> list[QueryResult]:
        """Return up to *top_k* hits for *query*, best first.

        An empty result list is a normal outcome.

        Raises
        ------
        QueryError
            If *query* is blank after trimming (no network call is made).
        ValueError
            If *top_k* < 1.
        """
        text = query.strip()[: self._max_query_chars]
        if not text:
            raise QueryError("Query must not be blank")
        if top_k < 1:
            raise ValueError(f"top_k must be positive, got {top_k}")

        start = time.monotonic()
        vector = await self._embedding_provider.embed_single(text)
        results = await self._vector_store.search(
            self._collection,
            vector,
            limit=top_k,
            doc_id=doc_id,
            hnsw_ef=hnsw_ef,
        )

        logger.info(
            "search_complete",
            collection=self._collection,
            doc_id=doc_id,
            top_k=top_k,
            hits=len(results),
            time_s=round(time.monotonic() - start, 3),
        )
        return results
