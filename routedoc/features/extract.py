"""Flatten route groups into one descriptor per documented method."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..api.middleware import Middleware
from ..api.router import RouteGroup

# HEAD mirrors GET and has nothing of its own to document.
UNDOCUMENTED_METHODS = frozenset({"HEAD"})


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    path: str
    method: str
    stack: Tuple[Middleware, ...]


def extract(route_groups: Iterable[RouteGroup]) -> List[RouteDescriptor]:
    return [
        RouteDescriptor(path=route.path, method=method, stack=route.stack)
        for group in route_groups
        for route in group
        for method in route.methods
        if method not in UNDOCUMENTED_METHODS
    ]


__all__ = ["RouteDescriptor", "UNDOCUMENTED_METHODS", "extract"]
