"""Route middleware with a declared documentation role.

Every middleware in a route stack is classified when it is registered: a
:class:`Guard` carries validation schemas, :class:`Pagination` marks paginated
list routes, and anything else is wrapped in :class:`Plain`. The document
builder switches over :attr:`role` and never inspects middleware behaviour.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, ClassVar, Dict, Mapping, Optional, Sequence, Tuple

from starlette.requests import Request
from starlette.responses import Response

from ..schema import ObjectSchema, translate
from ..utils.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..utils.errors import ErrorCode
from ._shared import error_response
from .validators import validate_instance

CallNext = Callable[[Request], Awaitable[Response]]
MiddlewareFunc = Callable[[Request, CallNext], Awaitable[Response]]
Endpoint = Callable[[Request], Awaitable[Response]]

_INTEGER = re.compile(r"^[+-]?\d+$")


class MiddlewareRole(str, Enum):
    GUARD = "guard"
    PAGINATION = "pagination"
    PLAIN = "plain"


def _coerce(value: Any, schema: Mapping[str, Any]) -> Any:
    """Convert a raw path or query string to the declared primitive type."""

    if not isinstance(value, str):
        return value
    kind = schema.get("type")
    if kind == "integer" and _INTEGER.match(value):
        return int(value)
    if kind == "number":
        try:
            return float(value) if not _INTEGER.match(value) else int(value)
        except ValueError:
            return value
    if kind == "boolean" and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    return value


def _collect(
    schema: Mapping[str, Any], values: Mapping[str, Any], multi: Callable[[str], list] | None
) -> Dict[str, Any]:
    properties: Mapping[str, Mapping[str, Any]] = schema.get("properties", {})
    collected: Dict[str, Any] = {}
    for name, raw in values.items():
        prop = properties.get(name)
        if prop is None:
            collected[name] = raw
        elif prop.get("type") == "array" and multi is not None:
            items = prop.get("items", {})
            collected[name] = [_coerce(item, items) for item in multi(name)]
        else:
            collected[name] = _coerce(raw, prop)
    return collected


@dataclass(frozen=True, slots=True)
class Guard:
    """Declared request shapes for body, query string and path parameters."""

    body: Optional[ObjectSchema] = None
    query: Optional[ObjectSchema] = None
    params: Optional[ObjectSchema] = None

    role: ClassVar[MiddlewareRole] = MiddlewareRole.GUARD

    @property
    def fingerprint(self) -> str:
        return repr(self)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        guarded: Dict[str, Any] = {}
        errors: list[str] = []

        if self.params is not None:
            schema = translate(self.params)
            guarded["params"] = _collect(schema, dict(request.path_params), None)
            errors.extend(_prefixed("params", schema, guarded["params"]))
        if self.query is not None:
            schema = translate(self.query)
            guarded["query"] = _collect(
                schema, dict(request.query_params), request.query_params.getlist
            )
            errors.extend(_prefixed("query", schema, guarded["query"]))
        if self.body is not None:
            schema = translate(self.body)
            try:
                guarded["body"] = await request.json()
            except json.JSONDecodeError as exc:
                return error_response(
                    ErrorCode.INVALID_REQUEST, f"Invalid JSON payload: {exc.msg}"
                )
            errors.extend(_prefixed("body", schema, guarded["body"]))

        if errors:
            return error_response(ErrorCode.INVALID_REQUEST, "; ".join(errors))
        request.state.guarded = guarded
        return await call_next(request)


def _prefixed(location: str, schema: Mapping[str, Any], payload: Any) -> list[str]:
    _, errors = validate_instance(schema, payload)
    return [f"{location}: {message}" for message in errors]


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _positive_int(raw: str | None, *, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    if not _INTEGER.match(raw):
        raise ValueError(f"{name} must be an integer")
    value = int(raw)
    if value < 1:
        raise ValueError(f"{name} must be greater than or equal to 1")
    return value


@dataclass(frozen=True, slots=True)
class Pagination:
    """Marks a list route as accepting ``page`` and ``page_size``."""

    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    role: ClassVar[MiddlewareRole] = MiddlewareRole.PAGINATION

    @property
    def fingerprint(self) -> str:
        return repr(self)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        try:
            page = _positive_int(request.query_params.get("page"), name="page", default=1)
            page_size = _positive_int(
                request.query_params.get("page_size"),
                name="page_size",
                default=self.default_page_size,
            )
        except ValueError as exc:
            return error_response(ErrorCode.INVALID_REQUEST, str(exc))
        if page_size > self.max_page_size:
            return error_response(
                ErrorCode.INVALID_REQUEST,
                f"page_size must be less than or equal to {self.max_page_size}",
            )
        request.state.pagination = PageRequest(page, page_size)
        return await call_next(request)


@dataclass(frozen=True, slots=True)
class Plain:
    """Any middleware without documentation significance."""

    func: MiddlewareFunc

    role: ClassVar[MiddlewareRole] = MiddlewareRole.PLAIN

    @property
    def fingerprint(self) -> str:
        module = getattr(self.func, "__module__", "?")
        name = getattr(self.func, "__qualname__", type(self.func).__name__)
        return f"Plain({module}.{name})"

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        return await self.func(request, call_next)


Middleware = Guard | Pagination | Plain


def as_middleware(value: Any) -> Middleware:
    """Classify *value* for a route stack, wrapping bare callables as plain."""

    if isinstance(value, (Guard, Pagination, Plain)):
        return value
    if callable(value):
        return Plain(value)
    raise TypeError(f"Middleware must be callable, got {type(value).__name__}")


def compose(stack: Sequence[Middleware], endpoint: Endpoint) -> Endpoint:
    """Chain *stack* in order in front of *endpoint*."""

    chain: Tuple[Middleware, ...] = tuple(stack)

    async def dispatch(index: int, request: Request) -> Response:
        if index == len(chain):
            return await endpoint(request)
        return await chain[index](request, lambda next_request: dispatch(index + 1, next_request))

    async def handler(request: Request) -> Response:
        return await dispatch(0, request)

    return handler


__all__ = [
    "CallNext",
    "Endpoint",
    "Guard",
    "Middleware",
    "MiddlewareRole",
    "PageRequest",
    "Pagination",
    "Plain",
    "as_middleware",
    "compose",
]
