"""
Smoke tests for the OMDb Backend API.

These tests verify routing and error translation without calling OMDb: the
per-request client dependency is replaced with a MagicMock, or with a real
OmdbClient over a stubbed session.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api import deps
from api.main import app
from api.routers.movies import ErrorDetail
from omdb_backend.config import OmdbConfig
from omdb_backend.integrations.omdb.client import (
    InvalidCategoryError,
    OmdbClient,
    OmdbDecodeError,
    OmdbHTTPStatusError,
    OmdbNetworkError,
    OmdbUpstreamError,
)
from omdb_backend.models.movies import Category, DetailRecord, SearchResponse, SearchResult

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def mock_omdb():
    """Create a mock OMDb client."""
    mock_client = MagicMock(spec=OmdbClient)
    mock_client.search.return_value = SearchResponse(
        results=(
            SearchResult(title="Up", year="2009", imdb_id="tt1049413", type="movie"),
            SearchResult(title="Up in the Air", year="2009", imdb_id="tt1193138", type="movie"),
        ),
        total_results=2,
    )
    mock_client.lookup_by_id.return_value = DetailRecord(title="Up", year="2009", imdb_id="tt1049413")
    return mock_client


@pytest.fixture
def client(mock_omdb):
    """Create a test client with a mocked OMDb dependency."""
    app.dependency_overrides[deps.get_omdb_client] = lambda: mock_omdb
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test greeting and health endpoints."""

    def test_hello_returns_greeting(self, client: TestClient):
        response = client.get("/hello")
        assert response.status_code == 200
        assert response.text == "Hello, world!\n"
        assert response.headers["content-type"].startswith("text/plain")

    def test_health_returns_healthy(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSearchEndpoint:
    """Test /search with a mocked OMDb client."""

    def test_search_renders_result_list(self, client: TestClient, mock_omdb: MagicMock):
        response = client.get("/search", params={"name": "Up", "year": "2009"})

        assert response.status_code == 200
        assert response.text == "[#tt1049413: Up (2009) Type: movie #tt1193138: Up in the Air (2009) Type: movie]"

        (query,), _ = mock_omdb.search.call_args
        assert query.title == "Up"
        assert query.year == "2009"
        assert query.category == Category.MOVIE

    def test_search_without_year_passes_none(self, client: TestClient, mock_omdb: MagicMock):
        response = client.get("/search", params={"name": "Up"})

        assert response.status_code == 200
        (query,), _ = mock_omdb.search.call_args
        assert query.year is None

    @pytest.mark.parametrize("params", [{}, {"name": ""}, {"name": "   "}, {"year": "2009"}])
    def test_search_requires_name(self, client: TestClient, mock_omdb: MagicMock, params: dict):
        response = client.get("/search", params=params)

        assert response.status_code == 400
        assert "name" in response.json()["detail"]
        mock_omdb.search.assert_not_called()

    def test_search_upstream_not_found_returns_404(self, client: TestClient, mock_omdb: MagicMock):
        mock_omdb.search.side_effect = OmdbUpstreamError("Movie not found!")

        response = client.get("/search", params={"name": "zzzzqqq"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Movie not found!"}

    def test_search_other_upstream_error_returns_502(self, client: TestClient, mock_omdb: MagicMock):
        mock_omdb.search.side_effect = OmdbUpstreamError("Too many results.")

        response = client.get("/search", params={"name": "a"})

        assert response.status_code == 502
        assert response.json() == {"detail": "Too many results."}

    def test_search_validation_error_returns_400(self, client: TestClient, mock_omdb: MagicMock):
        mock_omdb.search.side_effect = InvalidCategoryError("film")

        response = client.get("/search", params={"name": "Up"})

        assert response.status_code == 400
        assert "film" in response.json()["detail"]


class TestDetailEndpoint:
    """Test /detail with a mocked OMDb client."""

    def test_detail_renders_record(self, client: TestClient, mock_omdb: MagicMock):
        response = client.get("/detail", params={"id": "tt1049413"})

        assert response.status_code == 200
        assert response.text == "#tt1049413: Up (2009)"
        mock_omdb.lookup_by_id.assert_called_once_with("tt1049413")

    def test_detail_requires_id(self, client: TestClient, mock_omdb: MagicMock):
        response = client.get("/detail")

        assert response.status_code == 400
        assert "id" in response.json()["detail"]
        mock_omdb.lookup_by_id.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            OmdbNetworkError("OMDb request failed: connection refused"),
            OmdbHTTPStatusError("OMDb request failed with HTTP 503.", status_code=503),
            OmdbDecodeError("OMDb returned non-JSON response."),
        ],
    )
    def test_detail_transport_failures_return_502(self, client: TestClient, mock_omdb: MagicMock, error):
        mock_omdb.lookup_by_id.side_effect = error

        response = client.get("/detail", params={"id": "tt1049413"})

        assert response.status_code == 502
        assert str(error) in response.json()["detail"]


def test_detail_against_stubbed_upstream_renders_title_and_year():
    """End-to-end through a real OmdbClient with only the HTTP session stubbed."""
    payload = json.loads((REPO_ROOT / "tests" / "fixtures" / "omdb" / "detail_up.json").read_text(encoding="utf-8"))
    upstream = MagicMock()
    upstream.status_code = 200
    upstream.json.return_value = payload
    session = MagicMock()
    session.get.return_value = upstream

    omdb = OmdbClient(OmdbConfig(api_key="test-key"), session=session)
    app.dependency_overrides[deps.get_omdb_client] = lambda: omdb
    try:
        response = TestClient(app).get("/detail", params={"id": "tt1049413"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.text == "#tt1049413: Up (2009)"
    _, kwargs = session.get.call_args
    assert kwargs["params"]["i"] == "tt1049413"
    assert kwargs["params"]["apikey"] == "test-key"


def test_startup_fails_without_api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    monkeypatch.setattr(deps, "load_env", lambda: None)
    deps.get_omdb_config.cache_clear()
    try:
        with pytest.raises(RuntimeError, match="OMDB_API_KEY"):
            with TestClient(app):
                pass
    finally:
        deps.get_omdb_config.cache_clear()


def test_startup_succeeds_with_api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OMDB_API_KEY", "test-key")
    monkeypatch.setattr(deps, "load_env", lambda: None)
    deps.get_omdb_config.cache_clear()
    try:
        with TestClient(app) as client:
            assert client.get("/hello").status_code == 200
    finally:
        deps.get_omdb_config.cache_clear()


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("Movie not found!", True),
        ("Series or episode not found!", True),
        ("Incorrect IMDb ID.", False),
        ("Too many results.", False),
    ],
)
def test_is_not_found_message(message: str, expected: bool):
    assert deps.is_not_found_message(message) is expected


def test_series_not_found_returns_404(client: TestClient, mock_omdb: MagicMock):
    mock_omdb.lookup_by_id.side_effect = OmdbUpstreamError("Series or episode not found!")

    response = client.get("/detail", params={"id": "tt9999999"})

    assert response.status_code == 404
    assert ErrorDetail.model_validate(response.json()).detail == "Series or episode not found!"


def test_openapi_documents_error_bodies(client: TestClient):
    schema = client.get("/openapi.json").json()

    assert "ErrorDetail" in schema["components"]["schemas"]
    for path in ("/search", "/detail"):
        responses = schema["paths"][path]["get"]["responses"]
        for status in ("400", "404", "502"):
            refs = [body["schema"].get("$ref", "") for body in responses[status]["content"].values()]
            assert any(ref.endswith("/ErrorDetail") for ref in refs)
