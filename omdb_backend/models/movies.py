from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterable, Union

FULL_PLOT = "full"
INCLUDE_TOMATOES = "true"


class Category(str, Enum):
    """Media type filter accepted by OMDb `type=`."""

    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MovieQuery:
    """
    Caller-facing query shape.

    `category` may be a `Category`, one of its string values, or empty/None for no filter.
    """

    title: str = ""
    year: str | None = None
    imdb_id: str | None = None
    category: Category | str | None = None


@dataclass(frozen=True)
class SearchRequest:
    title: str
    year: str = ""
    category: Category | None = None

    def to_params(self) -> dict[str, str]:
        return {
            "s": self.title,
            "y": self.year,
            "type": self.category.value if self.category else "",
        }


@dataclass(frozen=True)
class TitleLookupRequest:
    title: str
    year: str = ""
    category: Category | None = None

    def to_params(self) -> dict[str, str]:
        return {
            "t": self.title,
            "y": self.year,
            "type": self.category.value if self.category else "",
            "plot": FULL_PLOT,
            "tomatoes": INCLUDE_TOMATOES,
        }


@dataclass(frozen=True)
class IdLookupRequest:
    imdb_id: str

    def to_params(self) -> dict[str, str]:
        return {
            "i": self.imdb_id,
            "plot": FULL_PLOT,
            "tomatoes": INCLUDE_TOMATOES,
        }


OmdbRequest = Union[SearchRequest, TitleLookupRequest, IdLookupRequest]


@dataclass(frozen=True)
class SearchResult:
    title: str
    year: str
    imdb_id: str
    type: str

    def __str__(self) -> str:
        return f"#{self.imdb_id}: {self.title} ({self.year}) Type: {self.type}"


@dataclass(frozen=True)
class SearchResponse:
    results: tuple[SearchResult, ...] = ()
    success: bool = True
    error: str | None = None
    total_results: int | None = None

    def __str__(self) -> str:
        return format_search_results(self.results)


@dataclass(frozen=True)
class Rating:
    source: str
    value: str


@dataclass(frozen=True)
class DetailRecord:
    """
    Full OMDb title record (`plot=full&tomatoes=true`).

    Every field is kept as the string OMDb returned (including "N/A"); only the
    success flag is converted at decode time.
    """

    title: str = ""
    year: str = ""
    rated: str = ""
    released: str = ""
    runtime: str = ""
    genre: str = ""
    director: str = ""
    writer: str = ""
    actors: str = ""
    plot: str = ""
    language: str = ""
    country: str = ""
    awards: str = ""
    poster: str = ""
    metascore: str = ""
    imdb_rating: str = ""
    imdb_votes: str = ""
    imdb_id: str = ""
    type: str = ""
    tomato_meter: str = ""
    tomato_image: str = ""
    tomato_rating: str = ""
    tomato_reviews: str = ""
    tomato_fresh: str = ""
    tomato_rotten: str = ""
    tomato_consensus: str = ""
    tomato_user_meter: str = ""
    tomato_user_rating: str = ""
    tomato_user_reviews: str = ""
    tomato_url: str = ""
    dvd: str = ""
    box_office: str = ""
    production: str = ""
    website: str = ""
    ratings: tuple[Rating, ...] = field(default_factory=tuple)
    success: bool = True
    error: str | None = None

    def __str__(self) -> str:
        return f"#{self.imdb_id}: {self.title} ({self.year})"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def format_search_results(results: Iterable[SearchResult]) -> str:
    """Render results as a bracketed, space-separated list: `[#tt1: A (2001) Type: movie #tt2: ...]`."""
    return "[" + " ".join(str(r) for r in results) + "]"
