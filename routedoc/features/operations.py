"""OpenAPI operation objects built from a route's middleware stack."""
from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..api.middleware import Guard, Middleware, MiddlewareRole
from ..schema import translate
from .parameters import build_parameters, pagination_parameters

OperationObject = Dict[str, Any]

FALLBACK_TAG = "General"
RESPONSE_DESCRIPTION = "OK"


def find_guard(stack: Sequence[Middleware]) -> Optional[Guard]:
    """Return the first guard in *stack*; later guards are not documented."""

    for middleware in stack:
        if middleware.role is MiddlewareRole.GUARD:
            return middleware
    return None


def has_pagination(stack: Sequence[Middleware]) -> bool:
    return any(middleware.role is MiddlewareRole.PAGINATION for middleware in stack)


def tag_for(path: str) -> str:
    segments = path.split("/")
    segment = segments[1] if len(segments) > 1 else ""
    if not segment:
        return FALLBACK_TAG
    return segment[:1].upper() + segment[1:]


def build_operation(stack: Sequence[Middleware], path: str, status: int) -> OperationObject:
    guard = find_guard(stack)

    path_parameters = build_parameters(guard.params if guard else None, "path")
    query_parameters = [
        *build_parameters(guard.query if guard else None, "query"),
        *(pagination_parameters() if has_pagination(stack) else []),
    ]

    operation: OperationObject = {
        "tags": [tag_for(path)],
        "parameters": [*path_parameters, *query_parameters],
    }
    if guard is not None and guard.body is not None:
        operation["requestBody"] = {
            "required": True,
            "content": {
                "application/json": {
                    "schema": translate(guard.body),
                },
            },
        }
    operation["responses"] = {
        str(status): {
            "description": RESPONSE_DESCRIPTION,
        },
    }
    return operation


__all__ = [
    "FALLBACK_TAG",
    "OperationObject",
    "build_operation",
    "find_guard",
    "has_pagination",
    "tag_for",
]
