"""Runtime configuration helpers for the documentation server."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional


def _parse_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_int(value: str | None, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(name: str, *, default: bool = False) -> bool:
    return _parse_bool(os.getenv(name), default=default)


def _env_int(name: str, *, default: int) -> int:
    return _parse_int(os.getenv(name), default=default)


OPENAPI_VERSION: Final[str] = "3.0.1"
DOCUMENT_TITLE: Final[str] = "Identity Core"
DOCUMENT_VERSION: Final[str] = "0.1.0"
API_ROOT: Final[str] = "/api"

DEFAULT_PAGE_SIZE: Final[int] = _env_int("ROUTEDOC_DEFAULT_PAGE_SIZE", default=20)
MAX_PAGE_SIZE: Final[int] = _env_int("ROUTEDOC_MAX_PAGE_SIZE", default=100)
CACHE_DOCUMENT: Final[bool] = _env_bool("ROUTEDOC_CACHE_DOCUMENT", default=False)
ROUTES_TARGET: Final[str] = os.getenv("ROUTEDOC_ROUTES", "").strip()

_status_codes_env = os.getenv("ROUTEDOC_STATUS_CODES_PATH", "").strip()
STATUS_CODES_PATH: Final[Optional[Path]] = (
    Path(_status_codes_env).expanduser() if _status_codes_env else None
)


__all__ = [
    "API_ROOT",
    "CACHE_DOCUMENT",
    "DEFAULT_PAGE_SIZE",
    "DOCUMENT_TITLE",
    "DOCUMENT_VERSION",
    "MAX_PAGE_SIZE",
    "OPENAPI_VERSION",
    "ROUTES_TARGET",
    "STATUS_CODES_PATH",
]
