"""
OMDb integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from omdb_backend.integrations.omdb.client import (
        InvalidCategoryError,
        OmdbClient,
        OmdbClientError,
        OmdbDecodeError,
        OmdbHTTPStatusError,
        OmdbNetworkError,
        OmdbUpstreamError,
        OmdbValidationError,
        parse_category,
    )

__all__ = [
    "InvalidCategoryError",
    "OmdbClient",
    "OmdbClientError",
    "OmdbDecodeError",
    "OmdbHTTPStatusError",
    "OmdbNetworkError",
    "OmdbUpstreamError",
    "OmdbValidationError",
    "parse_category",
]


def __getattr__(name: str):
    if name in __all__:
        from omdb_backend.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
