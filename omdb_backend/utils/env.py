from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[2]


def find_env_file() -> Path | None:
    """Return the first `.env` found at the repo root, then the current working directory."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.is_file():
            return path
    return None


def load_env(*, override: bool = False) -> Path | None:
    path = find_env_file()
    if path is not None:
        load_dotenv(dotenv_path=path, override=override)
    return path


def env_str(name: str, default: str | None = None) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or default


def env_float(name: str, default: float) -> float:
    raw = env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from exc
