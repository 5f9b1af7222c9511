"""Command-line interface for the sectionrag pipeline.

Usage::

    sectionrag chunk --input book.txt --output chunks.jsonl --doc-id book
    sectionrag embed --chunks chunks.jsonl --doc-id book
    sectionrag search --query "what does chapter 2 say" --doc-id book --top-k 5
    sectionrag stats

Every subcommand reads settings from the environment / ``.env`` file and an
optional ``--config`` YAML file; command-line flags override both.  Results
go to stdout, logs to stderr.  Any validation failure or pipeline error is
reported once as ``Error: ...`` and exits with status 1.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from contextlib import AsyncExitStack

import structlog

from sectionrag.config.loader import load_settings
from sectionrag.config.options import ChunkOptions, EmbedOptions, SearchOptions
from sectionrag.config.settings import LOG_LEVELS, Settings
from sectionrag.interfaces.embedding_provider import IEmbeddingProvider
from sectionrag.interfaces.vector_store_provider import IVectorStoreProvider
from sectionrag.providers.embedding.factory import build_embedding_provider
from sectionrag.providers.vector_store.qdrant_provider import QdrantVectorStoreProvider
from sectionrag.services.indexing_service import IndexingService
from sectionrag.services.ingestion.chunker import TextChunker
from sectionrag.services.ingestion.chunking_service import ChunkingService
from sectionrag.services.query_service import QueryService, render_results
from sectionrag.utils.errors import ConfigurationError, SectionRagError
from sectionrag.utils.logging import configure_logging

logger = structlog.get_logger(logger_name=__name__)


def _build_embedding_provider(settings: Settings, max_chars: int | None = None) -> IEmbeddingProvider:
    return build_embedding_provider(settings, max_chars=max_chars)


def _build_vector_store(settings: Settings) -> IVectorStoreProvider:
    return QdrantVectorStoreProvider(settings)


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _handle_chunk(args: argparse.Namespace, settings: Settings) -> int:
    """Chunk a text file into a JSONL record file (no network access)."""
    options = ChunkOptions.build(
        input_path=args.input,
        output_path=args.output,
        doc_id=args.doc_id or settings.default_doc_id,
        target_len=args.target_len if args.target_len is not None else settings.chunk_target_len,
        overlap=args.overlap if args.overlap is not None else settings.chunk_overlap,
    )

    chunker = TextChunker(
        target_len=options.target_len,
        overlap=options.overlap,
        short_sentence_threshold=settings.short_sentence_threshold,
    )
    result = ChunkingService(chunker).chunk_file(
        options.input_path, options.output_path, options.doc_id
    )

    print(f"Chunks: {result.chunks_written} → {result.output_path}")
    return 0


async def _handle_embed(args: argparse.Namespace, settings: Settings) -> int:
    """Embed every chunk record and upsert it into the vector store."""
    options = EmbedOptions.build(
        chunks_path=args.chunks,
        doc_id=args.doc_id,
        collection=args.collection or settings.qdrant_collection,
    )

    def _print_progress(upserted: int, total: int) -> None:
        print(f"Upserted {upserted} / {total}", flush=True)

    async with AsyncExitStack() as stack:
        embedding_provider = await stack.enter_async_context(_build_embedding_provider(settings))
        vector_store = await stack.enter_async_context(_build_vector_store(settings))

        service = IndexingService(
            embedding_provider=embedding_provider,
            vector_store=vector_store,
            collection=options.collection,
            dimension=embedding_provider.get_dimension(),
            distance=settings.qdrant_distance,
            progress_interval=settings.progress_interval,
            progress_callback=_print_progress,
        )
        result = await service.index_file(options.chunks_path, options.doc_id)

    print(
        f"Done. Upserted {result.points_upserted} points into "
        f"'{result.collection}' for doc_id='{result.doc_id}'."
    )
    return 0


async def _handle_search(args: argparse.Namespace, settings: Settings) -> int:
    """Run a similarity query and print the rendered hits."""
    options = SearchOptions.build(
        query=args.query,
        doc_id=args.doc_id,
        top_k=args.top_k,
        collection=args.collection or settings.qdrant_collection,
        hnsw_ef=args.hnsw_ef,
    )

    async with AsyncExitStack() as stack:
        embedding_provider = await stack.enter_async_context(
            _build_embedding_provider(settings, max_chars=settings.query_max_chars)
        )
        vector_store = await stack.enter_async_context(_build_vector_store(settings))

        service = QueryService(
            embedding_provider=embedding_provider,
            vector_store=vector_store,
            collection=options.collection,
            max_query_chars=settings.query_max_chars,
        )
        results = await service.search(
            options.query,
            doc_id=options.doc_id,
            top_k=options.top_k,
            hnsw_ef=options.hnsw_ef,
        )

    print(render_results(options.query, results, options.top_k))
    return 0


async def _handle_stats(args: argparse.Namespace, settings: Settings) -> int:
    """Print the number of points stored in a collection."""
    collection = args.collection or settings.qdrant_collection
    async with _build_vector_store(settings) as vector_store:
        total = await vector_store.count(collection)

    print(f"Collection '{collection}': {total} points")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the sectionrag CLI."""
    parser = argparse.ArgumentParser(
        prog="sectionrag",
        description="Chunk plain-text documents, index them in Qdrant and search them.",
    )
    parser.add_argument("--config", default=None, help="Optional YAML configuration file")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override LOG_LEVEL",
    )
    parser.add_argument(
        "--json-logs",
        dest="json_logs",
        action="store_true",
        help="Emit JSON log lines on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Pipeline commands")

    # -- chunk --
    chunk_parser = subparsers.add_parser("chunk", help="Split a text file into chunk records")
    chunk_parser.add_argument("--input", required=True, help="UTF-8 text file to chunk")
    chunk_parser.add_argument("--output", required=True, help="Destination JSONL file")
    chunk_parser.add_argument("--doc-id", dest="doc_id", default=None, help="Document id")
    chunk_parser.add_argument(
        "--target-len", dest="target_len", type=int, default=None,
        help="Maximum characters per chunk (default 1000)",
    )
    chunk_parser.add_argument(
        "--overlap", type=int, default=None,
        help="Overlap characters between chunks (default 150)",
    )

    # -- embed --
    embed_parser = subparsers.add_parser("embed", help="Embed chunk records and upsert them")
    embed_parser.add_argument("--chunks", required=True, help="JSONL file written by 'chunk'")
    embed_parser.add_argument("--doc-id", dest="doc_id", required=True, help="Document id")
    embed_parser.add_argument("--collection", default=None, help="Qdrant collection")

    # -- search --
    search_parser = subparsers.add_parser("search", help="Similarity search")
    search_parser.add_argument("--query", required=True, help="Query text")
    search_parser.add_argument("--doc-id", dest="doc_id", default=None, help="Restrict to one document")
    search_parser.add_argument("--top-k", dest="top_k", type=int, default=5, help="Result count")
    search_parser.add_argument("--collection", default=None, help="Qdrant collection")
    search_parser.add_argument(
        "--hnsw-ef", dest="hnsw_ef", type=int, default=None, help="Search-time HNSW ef"
    )

    # -- stats --
    stats_parser = subparsers.add_parser("stats", help="Show the point count of a collection")
    stats_parser.add_argument("--collection", default=None, help="Qdrant collection")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _dispatch(args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "chunk":
        return _handle_chunk(args, settings)
    if args.command == "embed":
        return asyncio.run(_handle_embed(args, settings))
    if args.command == "search":
        return asyncio.run(_handle_search(args, settings))
    return asyncio.run(_handle_stats(args, settings))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses the subcommand, loads settings, configures logging and runs the
    handler.  Exits with the handler's status, or 1 on any error.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        settings = load_settings(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(
        log_level=args.log_level or settings.log_level,
        json_output=args.json_logs or settings.app_env == "production",
    )

    try:
        exit_code = _dispatch(args, settings)
    except (SectionRagError, OSError) as exc:
        logger.debug("command_failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
