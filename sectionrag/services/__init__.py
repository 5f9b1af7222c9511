"""Business-logic services: chunking, indexing and querying.

Services depend only on interfaces (``sectionrag.interfaces``) and models;
concrete providers are injected by the CLI.
"""

from sectionrag.services.indexing_service import IndexingService, point_id_for
from sectionrag.services.query_service import QueryService, format_result, render_results

__all__ = [
    "IndexingService",
    "QueryService",
    "format_result",
    "point_id_for",
    "render_results",
]
