"""Configuration: environment settings, YAML loading and per-command options."""

from sectionrag.config.loader import load_settings
from sectionrag.config.options import ChunkOptions, EmbedOptions, SearchOptions
from sectionrag.config.settings import Settings

__all__ = [
    "ChunkOptions",
    "EmbedOptions",
    "SearchOptions",
    "Settings",
    "load_settings",
]
