"""
Typed records shared by the OMDb client, the API and scripts.
"""

from omdb_backend.models.movies import (
    Category,
    DetailRecord,
    IdLookupRequest,
    MovieQuery,
    Rating,
    SearchRequest,
    SearchResponse,
    SearchResult,
    TitleLookupRequest,
)

__all__ = [
    "Category",
    "DetailRecord",
    "IdLookupRequest",
    "MovieQuery",
    "Rating",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "TitleLookupRequest",
]
