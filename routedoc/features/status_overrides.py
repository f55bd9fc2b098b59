"""Per-route success status codes declared outside the route table."""
from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from ..api.validators import validate_payload
from ..utils.config import STATUS_CODES_PATH
from ..utils.errors import OverrideSourceMalformed, OverrideSourceUnreadable

StatusOverrideMap = Dict[str, Dict[str, int]]
OverrideSource = str | Path | Traversable

DEFAULT_STATUS = 200

log = logging.getLogger(__name__)


def default_source() -> OverrideSource:
    """Return the configured override file, or the packaged empty one."""

    if STATUS_CODES_PATH is not None:
        return STATUS_CODES_PATH
    return resources.files("routedoc.api.data").joinpath("route-status-codes.yaml")


def read_source(source: OverrideSource) -> str:
    location = Path(source) if isinstance(source, str) else source
    try:
        return location.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise OverrideSourceUnreadable(f"Cannot read status overrides from {source}: {exc}") from exc


def parse_overrides(text: str, *, origin: str = "<string>") -> StatusOverrideMap:
    """Parse and validate the YAML text of an override source."""

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OverrideSourceMalformed(f"Invalid YAML in {origin}: {exc}") from exc

    if loaded is None:
        return {}
    if isinstance(loaded, dict):
        # Overrides are looked up by registered path, which is always a string.
        stray = [key for key in loaded if not isinstance(key, str)]
        if stray:
            raise OverrideSourceMalformed(
                f"Invalid status overrides in {origin}: route paths must be strings, got {stray!r}"
            )
    valid, errors = validate_payload("route_status_codes.v1.json", loaded)
    if not valid:
        raise OverrideSourceMalformed(f"Invalid status overrides in {origin}: {'; '.join(errors)}")

    overrides: StatusOverrideMap = {
        path: {method: int(status) for method, status in methods.items()}
        for path, methods in loaded.items()
    }
    log.debug("overrides.loaded", extra={"origin": origin, "paths": len(overrides)})
    return overrides


def load_overrides(source: Optional[OverrideSource] = None) -> StatusOverrideMap:
    """Read the override source once and return its status map."""

    resolved = source if source is not None else default_source()
    return parse_overrides(read_source(resolved), origin=str(resolved))


def lookup(overrides: Mapping[str, Mapping[str, int]], path: str, method: str) -> int:
    return overrides.get(path, {}).get(method.lower(), DEFAULT_STATUS)


__all__ = [
    "DEFAULT_STATUS",
    "OverrideSource",
    "StatusOverrideMap",
    "default_source",
    "load_overrides",
    "lookup",
    "parse_overrides",
    "read_source",
]
