"""
Dependency injection for the OMDb client and shared error translation.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Iterator, NoReturn

from fastapi import Depends, HTTPException

from omdb_backend.config import OmdbConfig
from omdb_backend.integrations.omdb.client import (
    OmdbClient,
    OmdbClientError,
    OmdbUpstreamError,
    OmdbValidationError,
)
from omdb_backend.utils.env import load_env

logger = logging.getLogger(__name__)


@lru_cache
def get_omdb_config() -> OmdbConfig:
    """
    Resolve the OMDb configuration once per process.

    Raises RuntimeError when OMDB_API_KEY is missing.
    """
    load_env()
    return OmdbConfig.from_env()


def get_omdb_client() -> Iterator[OmdbClient]:
    """
    Returns a fresh OMDb client for the current request; its session is closed afterwards.
    """
    client = OmdbClient(get_omdb_config())
    try:
        yield client
    finally:
        client.close()


# OMDb reports missing titles as "Movie not found!" or "Series or episode not found!".
OMDB_NOT_FOUND_MARKER = "not found"


def is_not_found_message(message: str) -> bool:
    return OMDB_NOT_FOUND_MARKER in message.lower()


# Type alias for dependency injection
OmdbApiClient = Annotated[OmdbClient, Depends(get_omdb_client)]


def raise_for_omdb_error(exc: OmdbClientError, context: str = "OMDb request") -> NoReturn:
    """
    Translate an OMDb client error into an HTTP exception.

    Args:
        exc: The error raised by OmdbClient
        context: Description of the operation for error messages

    Raises:
        HTTPException: 400 for rejected input, 404 when OMDb reports nothing found,
            502 for upstream, transport and decoding failures
    """
    if isinstance(exc, OmdbValidationError):
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if isinstance(exc, OmdbUpstreamError):
        message = str(exc)
        logger.warning(f"OMDb error during {context}: {message}")
        status_code = 404 if is_not_found_message(message) else 502
        raise HTTPException(status_code=status_code, detail=message) from exc

    logger.error(f"OMDb failure during {context}: {exc}")
    raise HTTPException(status_code=502, detail=f"Upstream error during {context}: {exc}") from exc
