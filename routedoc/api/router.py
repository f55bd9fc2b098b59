"""Route groups that keep their declared middleware stacks inspectable."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from starlette.routing import Route

from .middleware import Endpoint, Middleware, as_middleware, compose

HTTP_METHODS: Tuple[str, ...] = ("GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE")


@dataclass(frozen=True, slots=True)
class RegisteredRoute:
    path: str
    methods: Tuple[str, ...]
    stack: Tuple[Middleware, ...]
    endpoint: Endpoint
    name: Optional[str] = None


def _normalize_methods(methods: Iterable[str]) -> Tuple[str, ...]:
    resolved: List[str] = []
    for method in methods:
        upper = method.upper()
        if upper not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        if upper == "GET" and "HEAD" not in resolved:
            # GET routes answer HEAD implicitly.
            resolved.append("HEAD")
        if upper not in resolved:
            resolved.append(upper)
    if not resolved:
        raise ValueError("A route needs at least one HTTP method")
    return tuple(resolved)


class RouteGroup:
    """An ordered collection of routes sharing a mount prefix.

    Routes are registered with their middleware stack, either directly::

        group.get("/users", Pagination(), endpoint=list_users)

    or as a decorator::

        @group.post("/users", Guard(body=obj({"name": string()})))
        async def create_user(request): ...
    """

    def __init__(self, prefix: str = "", *, name: Optional[str] = None) -> None:
        if prefix and not prefix.startswith("/"):
            raise ValueError("Route group prefix must start with '/'")
        self.prefix = prefix.rstrip("/")
        self.name = name
        self._registered: List[RegisteredRoute] = []

    def __iter__(self) -> Iterator[RegisteredRoute]:
        return iter(self._registered)

    def __len__(self) -> int:
        return len(self._registered)

    def __repr__(self) -> str:
        return f"RouteGroup(prefix={self.prefix!r}, name={self.name!r}, routes={len(self)})"

    def _full_path(self, path: str) -> str:
        if not path.startswith("/"):
            raise ValueError(f"Route path must start with '/': {path!r}")
        if self.prefix and path == "/":
            return self.prefix
        return f"{self.prefix}{path}"

    def add(
        self,
        path: str,
        methods: Sequence[str],
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        """Register *endpoint* for *methods*; returns a decorator when omitted."""

        full_path = self._full_path(path)
        resolved_methods = _normalize_methods(methods)
        stack = tuple(as_middleware(item) for item in middleware)

        def register(func: Endpoint) -> Endpoint:
            self._registered.append(
                RegisteredRoute(
                    path=full_path,
                    methods=resolved_methods,
                    stack=stack,
                    endpoint=func,
                    name=name or getattr(func, "__name__", None),
                )
            )
            return func

        if endpoint is None:
            return register
        register(endpoint)
        return endpoint

    def get(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["GET"], *middleware, endpoint=endpoint, name=name)

    def post(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["POST"], *middleware, endpoint=endpoint, name=name)

    def put(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["PUT"], *middleware, endpoint=endpoint, name=name)

    def patch(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["PATCH"], *middleware, endpoint=endpoint, name=name)

    def delete(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["DELETE"], *middleware, endpoint=endpoint, name=name)

    def options(
        self,
        path: str,
        *middleware: object,
        endpoint: Optional[Endpoint] = None,
        name: Optional[str] = None,
    ):
        return self.add(path, ["OPTIONS"], *middleware, endpoint=endpoint, name=name)

    def routes(self) -> List[Route]:
        """Return Starlette routes for every registered route."""

        routes: List[Route] = []
        for registered in self._registered:
            # Starlette adds HEAD for GET routes on its own.
            methods = [method for method in registered.methods if method != "HEAD"] or ["HEAD"]
            routes.append(
                Route(
                    registered.path,
                    compose(registered.stack, registered.endpoint),
                    methods=methods,
                    name=registered.name,
                )
            )
        return routes


__all__ = ["HTTP_METHODS", "RegisteredRoute", "RouteGroup"]
