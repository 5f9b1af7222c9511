"""Command-line entry points for sectionrag.

- ``sectionrag chunk``: split a text file into chunk records (offline)
- ``sectionrag embed``: embed chunk records and upsert them into Qdrant
- ``sectionrag search``: similarity search, optionally scoped to one document
- ``sectionrag stats``: point count of a collection

Also runnable as ``python -m sectionrag.cli``.
"""
