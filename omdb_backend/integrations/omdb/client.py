from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from omdb_backend.config import OmdbConfig
from omdb_backend.models.movies import (
    Category,
    DetailRecord,
    IdLookupRequest,
    MovieQuery,
    OmdbRequest,
    Rating,
    SearchRequest,
    SearchResponse,
    SearchResult,
    TitleLookupRequest,
)

logger = logging.getLogger(__name__)

_BODY_SNIPPET_CHARS = 400

# (record attribute, OMDb payload key)
_DETAIL_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("year", "Year"),
    ("rated", "Rated"),
    ("released", "Released"),
    ("runtime", "Runtime"),
    ("genre", "Genre"),
    ("director", "Director"),
    ("writer", "Writer"),
    ("actors", "Actors"),
    ("plot", "Plot"),
    ("language", "Language"),
    ("country", "Country"),
    ("awards", "Awards"),
    ("poster", "Poster"),
    ("metascore", "Metascore"),
    ("imdb_rating", "imdbRating"),
    ("imdb_votes", "imdbVotes"),
    ("imdb_id", "imdbID"),
    ("type", "Type"),
    ("tomato_meter", "tomatoMeter"),
    ("tomato_image", "tomatoImage"),
    ("tomato_rating", "tomatoRating"),
    ("tomato_reviews", "tomatoReviews"),
    ("tomato_fresh", "tomatoFresh"),
    ("tomato_rotten", "tomatoRotten"),
    ("tomato_consensus", "tomatoConsensus"),
    ("tomato_user_meter", "tomatoUserMeter"),
    ("tomato_user_rating", "tomatoUserRating"),
    ("tomato_user_reviews", "tomatoUserReviews"),
    ("tomato_url", "tomatoURL"),
    ("dvd", "DVD"),
    ("box_office", "BoxOffice"),
    ("production", "Production"),
    ("website", "Website"),
)


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class OmdbValidationError(OmdbClientError):
    """Caller input rejected before any request was sent."""


class InvalidCategoryError(OmdbValidationError):
    def __init__(self, category: str) -> None:
        super().__init__(f"Invalid search category: {category!r} (expected movie, series or episode).")
        self.category = category


class OmdbNetworkError(OmdbClientError):
    pass


class OmdbHTTPStatusError(OmdbClientError):
    pass


class OmdbDecodeError(OmdbClientError):
    pass


class OmdbUpstreamError(OmdbClientError):
    """OMDb answered with `"Response": "False"`; the message is OMDb's `Error` string."""


def parse_category(value: Category | str | None) -> Category | None:
    """
    Resolve a category filter. Empty/None means "no filter".

    Raises InvalidCategoryError for anything other than movie, series or episode.
    """

    if value is None or isinstance(value, Category):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        return Category(raw)
    except ValueError:
        raise InvalidCategoryError(raw) from None


def _require_text(value: str | None, field_name: str) -> str:
    raw = (value or "").strip()
    if not raw:
        raise OmdbValidationError(f"{field_name} is required.")
    return raw


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if raw.isdigit():
            return int(raw)
    return None


def _as_success(payload: Mapping[str, Any]) -> bool:
    value = payload.get("Response")
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise OmdbDecodeError(f"OMDb response has no usable Response flag: {value!r}.")


def _raise_for_upstream_failure(payload: Mapping[str, Any]) -> None:
    if not _as_success(payload):
        message = _as_str(payload.get("Error")).strip() or "OMDb returned an unsuccessful response."
        raise OmdbUpstreamError(message)


def decode_search_response(payload: Mapping[str, Any]) -> SearchResponse:
    _raise_for_upstream_failure(payload)

    items = payload.get("Search")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise OmdbDecodeError("OMDb search response has a non-list `Search` field.")

    results: list[SearchResult] = []
    for item in items:
        if not isinstance(item, Mapping):
            raise OmdbDecodeError("OMDb search result is not an object.")
        results.append(
            SearchResult(
                title=_as_str(item.get("Title")),
                year=_as_str(item.get("Year")),
                imdb_id=_as_str(item.get("imdbID")),
                type=_as_str(item.get("Type")),
            )
        )

    return SearchResponse(
        results=tuple(results),
        success=True,
        error=None,
        total_results=_as_int(payload.get("totalResults")),
    )


def _decode_ratings(value: Any) -> tuple[Rating, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise OmdbDecodeError("OMDb detail response has a non-list `Ratings` field.")
    ratings: list[Rating] = []
    for item in value:
        if not isinstance(item, Mapping):
            raise OmdbDecodeError("OMDb rating entry is not an object.")
        ratings.append(Rating(source=_as_str(item.get("Source")), value=_as_str(item.get("Value"))))
    return tuple(ratings)


def decode_detail_record(payload: Mapping[str, Any]) -> DetailRecord:
    _raise_for_upstream_failure(payload)

    fields = {attr: _as_str(payload.get(key)) for attr, key in _DETAIL_FIELDS}
    return DetailRecord(
        **fields,
        ratings=_decode_ratings(payload.get("Ratings")),
        success=True,
        error=None,
    )


class OmdbClient:
    """
    Synchronous OMDb client.

    One GET per call, no retries. Failures surface as `OmdbClientError` subclasses:
    validation problems are raised before any request is sent, and a well-formed
    `"Response": "False"` payload raises `OmdbUpstreamError` rather than returning data.
    """

    def __init__(self, config: OmdbConfig, *, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def config(self) -> OmdbConfig:
        return self._config

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "OmdbClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def search(self, query: MovieQuery) -> SearchResponse:
        request = SearchRequest(
            title=_require_text(query.title, "title"),
            year=query.year or "",
            category=parse_category(query.category),
        )
        return decode_search_response(self._request_json(request))

    def lookup_by_title(self, query: MovieQuery) -> DetailRecord:
        request = TitleLookupRequest(
            title=_require_text(query.title, "title"),
            year=query.year or "",
            category=parse_category(query.category),
        )
        return decode_detail_record(self._request_json(request))

    def lookup_by_id(self, imdb_id: MovieQuery | str) -> DetailRecord:
        if isinstance(imdb_id, MovieQuery):
            imdb_id = imdb_id.imdb_id or ""
        request = IdLookupRequest(imdb_id=_require_text(imdb_id, "imdb_id"))
        return decode_detail_record(self._request_json(request))

    def build_params(self, request: OmdbRequest) -> dict[str, str]:
        return {"apikey": self._config.api_key, **request.to_params()}

    def build_url(self, request: OmdbRequest) -> str:
        """Return the fully encoded request URL (includes the API key)."""
        prepared = requests.Request("GET", self._config.base_url, params=self.build_params(request)).prepare()
        return str(prepared.url)

    def _request_json(self, request: OmdbRequest) -> dict[str, Any]:
        params = self.build_params(request)
        logger.debug(
            "OMDb GET %s params=%s",
            self._config.base_url,
            {**params, "apikey": "***"},
        )

        try:
            resp = self._session.get(
                self._config.base_url,
                params=params,
                headers={"accept": "application/json"},
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise OmdbNetworkError(f"OMDb request failed: {exc}") from exc

        if resp.status_code != 200:
            raise OmdbHTTPStatusError(
                f"OMDb request failed with HTTP {resp.status_code}.",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:_BODY_SNIPPET_CHARS],
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise OmdbDecodeError(
                "OMDb returned non-JSON response.",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:_BODY_SNIPPET_CHARS],
            ) from exc

        if not isinstance(payload, dict):
            raise OmdbDecodeError("OMDb returned unexpected JSON shape (not an object).", status_code=resp.status_code)
        return payload
