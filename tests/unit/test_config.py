"""Unit tests for settings, the YAML loader and per-command options."""

from __future__ import annotations

from pathlib import Path

import pytest

from sectionrag.config.loader import load_settings
from sectionrag.config.options import ChunkOptions, EmbedOptions, SearchOptions, validate_file_path
from sectionrag.config.settings import Settings
from sectionrag.utils.errors import ConfigurationError

_ENV_KEYS = (
    "EMBEDDING_PROVIDER",
    "EMBEDDING_MODEL",
    "EMBEDDING_DIMENSION",
    "QDRANT_URL",
    "QDRANT_COLLECTION",
    "QDRANT_DISTANCE",
    "CHUNK_TARGET_LEN",
    "CHUNK_OVERLAP",
    "LOG_LEVEL",
    "APP_ENV",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


# ======================================================================
# Settings
# ======================================================================


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.embedding_provider == "ollama"
        assert settings.embedding_model == "bge-m3"
        assert settings.embedding_dimension == 1024
        assert settings.qdrant_url == "http://localhost:6333"
        assert settings.qdrant_collection == "docs"
        assert settings.qdrant_distance == "Cosine"
        assert settings.chunk_target_len == 1000
        assert settings.chunk_overlap == 150
        assert settings.default_doc_id == "myDocument"
        assert settings.log_level == "INFO"

    def test_trailing_slash_removed(self) -> None:
        assert Settings(qdrant_url="http://q:6333/").qdrant_url == "http://q:6333"
        assert Settings(ollama_base_url="http://o:11434//").ollama_base_url == "http://o:11434"

    def test_env_variables_are_read(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QDRANT_COLLECTION", "papers")
        monkeypatch.setenv("EMBEDDING_PROVIDER", "OpenAI")
        settings = Settings()
        assert settings.qdrant_collection == "papers"
        assert settings.embedding_provider == "openai"

    def test_log_level_normalized(self) -> None:
        assert Settings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"qdrant_distance": "cosine"},
            {"log_level": "LOUD"},
            {"embedding_dimension": 0},
            {"chunk_target_len": 0},
            {"chunk_overlap": -1},
            {"progress_interval": 0},
        ],
    )
    def test_invalid_values(self, overrides: dict) -> None:
        with pytest.raises(ValueError):
            Settings(**overrides)


# ======================================================================
# load_settings
# ======================================================================


class TestLoadSettings:
    def test_no_file_uses_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHUNK_TARGET_LEN", "500")
        assert load_settings().chunk_target_len == 500

    def test_nested_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "qdrant:\n  url: http://qdrant:6333/\n  collection: papers\n"
            "chunk:\n  target_len: 800\n  overlap: 100\n",
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.qdrant_url == "http://qdrant:6333"
        assert settings.qdrant_collection == "papers"
        assert settings.chunk_target_len == 800
        assert settings.chunk_overlap == 100

    def test_flat_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("embedding_dimension: 768\nlog_level: warning\n", encoding="utf-8")
        settings = load_settings(path)
        assert settings.embedding_dimension == 768
        assert settings.log_level == "WARNING"

    def test_environment_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("qdrant:\n  collection: from_yaml\n  distance: Dot\n", encoding="utf-8")
        monkeypatch.setenv("QDRANT_COLLECTION", "from_env")

        settings = load_settings(path)

        assert settings.qdrant_collection == "from_env"
        assert settings.qdrant_distance == "Dot"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path).qdrant_collection == "docs"

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("qdrant:\n  colection: typo\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="qdrant_colection"):
            load_settings(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("chunk:\n  target_len: -3\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="chunk_target_len"):
            load_settings(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("qdrant: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings(path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(path)

    def test_invalid_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EMBEDDING_DIMENSION", "zero")
        with pytest.raises(ConfigurationError):
            load_settings()


# ======================================================================
# Options
# ======================================================================


class TestValidateFilePath:
    def test_resolves_path(self, tmp_path: Path) -> None:
        assert validate_file_path(str(tmp_path / "a.txt")) == (tmp_path / "a.txt").resolve()

    @pytest.mark.parametrize("path", ["", "   ", "bad\x00name", "../etc/passwd", "data/../secret"])
    def test_rejected_paths(self, path: str) -> None:
        with pytest.raises(ValueError):
            validate_file_path(path)


class TestOptions:
    def test_chunk_options(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.txt"
        source.write_text("text", encoding="utf-8")

        options = ChunkOptions.build(
            input_path=str(source),
            output_path=str(tmp_path / "out.jsonl"),
            doc_id="doc",
            target_len=500,
            overlap=0,
        )

        assert options.input_path == source.resolve()
        assert options.target_len == 500

    def test_chunk_options_missing_input(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="does not exist"):
            ChunkOptions.build(
                input_path=str(tmp_path / "nope.txt"),
                output_path=str(tmp_path / "out.jsonl"),
                doc_id="doc",
                target_len=500,
                overlap=0,
            )

    def test_chunk_options_bad_numbers(self, tmp_path: Path) -> None:
        source = tmp_path / "doc.txt"
        source.write_text("text", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid options"):
            ChunkOptions.build(
                input_path=str(source),
                output_path=str(tmp_path / "out.jsonl"),
                doc_id="doc",
                target_len=0,
                overlap=-1,
            )

    def test_embed_options(self, chunks_file: Path) -> None:
        options = EmbedOptions.build(chunks_path=str(chunks_file), doc_id="paper", collection="docs")
        assert options.chunks_path == chunks_file.resolve()

    def test_embed_options_require_doc_id(self, chunks_file: Path) -> None:
        with pytest.raises(ConfigurationError):
            EmbedOptions.build(chunks_path=str(chunks_file), doc_id="", collection="docs")

    def test_search_options(self) -> None:
        options = SearchOptions.build(query="what", collection="docs")
        assert options.top_k == 5
        assert options.doc_id is None
        assert options.hnsw_ef is None

    @pytest.mark.parametrize(
        "overrides",
        [{"query": "   "}, {"top_k": 0}, {"hnsw_ef": 0}, {"collection": ""}],
    )
    def test_search_options_invalid(self, overrides: dict) -> None:
        values = {"query": "what", "collection": "docs", **overrides}
        with pytest.raises(ConfigurationError):
            SearchOptions.build(**values)

    def test_options_are_frozen(self) -> None:
        options = SearchOptions.build(query="what", collection="docs")
        with pytest.raises(ValueError):
            options.top_k = 10
