"""Concrete adapters for the interfaces in ``sectionrag.interfaces``."""
