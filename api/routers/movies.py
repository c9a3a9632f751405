"""
Movie endpoints: greeting, title search and detail lookup by IMDb id.

Successful responses are plain text; failures are JSON `{"detail": ...}` with a non-2xx status.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from api.deps import OmdbApiClient, raise_for_omdb_error
from omdb_backend.integrations.omdb.client import OmdbClientError
from omdb_backend.models.movies import Category, MovieQuery, format_search_results

logger = logging.getLogger(__name__)

router = APIRouter(tags=["movies"])

GREETING = "Hello, world!\n"


# --- Pydantic models ---

class ErrorDetail(BaseModel):
    detail: str


ERROR_RESPONSES = {
    400: {"model": ErrorDetail, "description": "Missing or invalid query parameters"},
    404: {"model": ErrorDetail, "description": "OMDb found no matching title"},
    502: {"model": ErrorDetail, "description": "OMDb request failed"},
}


@router.get("/hello", response_class=PlainTextResponse)
def hello() -> str:
    return GREETING


@router.get("/search", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
def search_movies(
    omdb: OmdbApiClient,
    name: str | None = Query(default=None, description="Title to search for."),
    year: str | None = Query(default=None, description="Optional release year."),
) -> str:
    """Search movies by title (category fixed to movie)."""
    if not name or not name.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'name' is required")

    query = MovieQuery(title=name, year=year, category=Category.MOVIE)
    try:
        response = omdb.search(query)
    except OmdbClientError as exc:
        raise_for_omdb_error(exc, f"searching {name!r}")

    return format_search_results(response.results)


@router.get("/detail", response_class=PlainTextResponse, responses=ERROR_RESPONSES)
def movie_detail(
    omdb: OmdbApiClient,
    imdb_id: str | None = Query(default=None, alias="id", description="IMDb id, e.g. tt1049413."),
) -> str:
    """Look up a single title by IMDb id."""
    if not imdb_id or not imdb_id.strip():
        raise HTTPException(status_code=400, detail="Query parameter 'id' is required")

    try:
        record = omdb.lookup_by_id(imdb_id)
    except OmdbClientError as exc:
        raise_for_omdb_error(exc, f"looking up {imdb_id!r}")

    return str(record)
