"""sectionrag: section-aware chunking, Qdrant indexing and similarity search
for plain-text documents."""

__version__ = "0.1.0"
