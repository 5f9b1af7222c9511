"""Unit tests for sectionrag.services.query_service."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider
from sectionrag.models.rag import QueryResult
from sectionrag.services.query_service import QueryService, format_result, render_results
from sectionrag.utils.errors import QueryError


def _hit(text: str = "Body text.", **payload) -> QueryResult:
    return QueryResult(id="p1", score=0.87654, payload={"doc_id": "d", "text": text, **payload})


@pytest.fixture()
def mock_store() -> MagicMock:
    store = MagicMock(spec=IVectorStoreProvider)
    store.search = AsyncMock(return_value=[_hit(section="Intro")])
    return store


class TestQueryService:
    @pytest.mark.asyncio
    async def test_blank_query_makes_no_calls(self, fake_embedding_provider, mock_store) -> None:
        service = QueryService(fake_embedding_provider, mock_store, collection="docs")

        with pytest.raises(QueryError):
            await service.search("   \n ")

        assert fake_embedding_provider.calls == []
        mock_store.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_positive_top_k(self, fake_embedding_provider, mock_store) -> None:
        service = QueryService(fake_embedding_provider, mock_store, collection="docs")
        with pytest.raises(ValueError):
            await service.search("query", top_k=0)

    @pytest.mark.asyncio
    async def test_query_trimmed_and_capped(self, fake_embedding_provider, mock_store) -> None:
        service = QueryService(fake_embedding_provider, mock_store, collection="docs", max_query_chars=5)

        await service.search("   abcdefgh  ")

        assert fake_embedding_provider.calls == ["abcde"]

    @pytest.mark.asyncio
    async def test_arguments_passed_to_store(self, fake_embedding_provider, mock_store) -> None:
        service = QueryService(fake_embedding_provider, mock_store, collection="docs")

        results = await service.search("what is it", doc_id="d", top_k=3, hnsw_ef=64)

        assert results[0].section == "Intro"
        vector = await fake_embedding_provider.embed_single("what is it")
        mock_store.search.assert_awaited_once_with("docs", vector, limit=3, doc_id="d", hnsw_ef=64)

    @pytest.mark.asyncio
    async def test_empty_results_are_normal(self, fake_embedding_provider, mock_store) -> None:
        mock_store.search = AsyncMock(return_value=[])
        service = QueryService(fake_embedding_provider, mock_store, collection="docs")
        assert await service.search("anything") == []

    @pytest.mark.asyncio
    async def test_round_trip_through_in_memory_store(
        self, fake_embedding_provider, in_memory_store, chunks_file
    ) -> None:
        from sectionrag.services.indexing_service import IndexingService

        await IndexingService(fake_embedding_provider, in_memory_store, "docs", 8).index_file(
            chunks_file, "paper"
        )
        service = QueryService(fake_embedding_provider, in_memory_store, collection="docs")

        assert len(await service.search("fact", doc_id="paper", top_k=2)) == 2
        assert await service.search("fact", doc_id="other") == []


class TestRendering:
    def test_format_result(self) -> None:
        rendered = format_result(_hit(section="Intro"))
        assert rendered == "id=p1  score=0.8765  doc_id=d  section=Intro\nBody text."

    def test_missing_fields_render_empty(self) -> None:
        rendered = format_result(QueryResult(id=3, score=1.0, payload={}))
        assert rendered == "id=3  score=1.0000  doc_id=  section=\n"

    def test_long_text_preview_truncated(self) -> None:
        preview = format_result(_hit(text="x" * 250)).split("\n", 1)[1]
        assert preview == "x" * 200 + "..."

    def test_text_at_limit_not_truncated(self) -> None:
        preview = format_result(_hit(text="y" * 200)).split("\n", 1)[1]
        assert preview == "y" * 200

    def test_render_no_results(self) -> None:
        assert render_results("hello", [], top_k=5) == "Query: hello\nNo results."

    def test_render_results(self) -> None:
        rendered = render_results("hello", [_hit(), _hit(text="Second.")], top_k=5)
        lines = rendered.split("\n")
        assert lines[0] == "Query: hello"
        assert lines[1] == "Top 5 results:"
        assert lines[2] == "[0]"
        assert "[1]" in lines
        assert rendered.endswith("Second.\n")
