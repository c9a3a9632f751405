"""
OMDb client configuration.

The credential is read once (from the process environment, optionally seeded from a
`.env` file) and handed to `OmdbClient` explicitly; nothing in the client reads the
environment on its own.
"""
from __future__ import annotations

from dataclasses import dataclass

from omdb_backend.utils.env import env_float, env_str

OMDB_API_BASE_URL = "http://www.omdbapi.com/"
DEFAULT_TIMEOUT_SECONDS = 20.0


def resolve_api_key(api_key: str | None = None) -> str | None:
    """
    Best-effort API key resolution for callers that want to continue when the key is missing.
    """

    resolved = (api_key or env_str("OMDB_API_KEY") or "").strip()
    return resolved or None


@dataclass(frozen=True)
class OmdbConfig:
    api_key: str
    base_url: str = OMDB_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not (self.api_key or "").strip():
            raise RuntimeError("OMDB_API_KEY is not set.")

    def __repr__(self) -> str:
        return f"OmdbConfig(api_key='***', base_url={self.base_url!r}, timeout_seconds={self.timeout_seconds!r})"

    @classmethod
    def from_env(cls, api_key: str | None = None) -> "OmdbConfig":
        """
        Build a config from `OMDB_API_KEY`, `OMDB_BASE_URL` and `OMDB_TIMEOUT_SECONDS`.

        Raises RuntimeError when no API key can be resolved.
        """

        resolved = resolve_api_key(api_key)
        if not resolved:
            raise RuntimeError("OMDB_API_KEY is not set.")
        return cls(
            api_key=resolved,
            base_url=env_str("OMDB_BASE_URL", OMDB_API_BASE_URL) or OMDB_API_BASE_URL,
            timeout_seconds=env_float("OMDB_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        )
