"""Application wiring for the documentation server."""
from __future__ import annotations

import logging
from importlib import import_module
from typing import Iterable, List, Optional

from starlette.applications import Starlette
from starlette.routing import Mount

from .api.router import RouteGroup
from .api.routes import make_route_groups
from .error_handlers import install_error_handlers
from .features.status_overrides import OverrideSource
from .utils.cache import DocumentCache
from .utils.config import API_ROOT, CACHE_DOCUMENT, ROUTES_TARGET
from .utils.logging import configure_root

_CONFIGURED = False

log = logging.getLogger(__name__)


def configure() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    configure_root()
    _CONFIGURED = True


def load_route_groups(target: str) -> List[RouteGroup]:
    """Resolve ``package.module:attribute`` to a list of route groups.

    The attribute may be a :class:`RouteGroup`, an iterable of them, or a
    zero-argument callable returning either.
    """

    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Route target must look like 'module:attribute', got {target!r}")
    value = getattr(import_module(module_name), attribute)
    if callable(value) and not isinstance(value, RouteGroup):
        value = value()
    if isinstance(value, RouteGroup):
        return [value]
    groups = list(value)
    for group in groups:
        if not isinstance(group, RouteGroup):
            raise TypeError(f"{target} yielded {type(group).__name__}, expected RouteGroup")
    return groups


def build_api_app(
    route_groups: Iterable[RouteGroup] = (),
    *,
    status_source: Optional[OverrideSource] = None,
    cache: Optional[DocumentCache] = None,
    debug: bool = False,
) -> Starlette:
    """Mount every group under the API root next to the built-in routes."""

    configure()
    if cache is None and CACHE_DOCUMENT:
        cache = DocumentCache()
    groups = make_route_groups(route_groups, status_source=status_source, cache=cache)
    routes = [route for group in groups for route in group.routes()]
    log.info(
        "app.routes",
        extra={"groups": len(groups), "routes": len(routes), "cache_enabled": cache is not None},
    )

    app = Starlette(debug=debug, routes=[Mount(API_ROOT, routes=routes)])
    install_error_handlers(app)
    return app


def create_app() -> Starlette:
    """Factory compatible with ``uvicorn --factory``."""

    groups = load_route_groups(ROUTES_TARGET) if ROUTES_TARGET else []
    return build_api_app(groups)


__all__ = ["build_api_app", "configure", "create_app", "load_route_groups"]
