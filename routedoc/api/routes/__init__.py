from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ...features.status_overrides import OverrideSource
from ...utils.cache import DocumentCache
from ..router import RouteGroup
from ._common import RouteDependencies
from .status_routes import create_status_routes
from .swagger_routes import create_swagger_routes


def make_route_groups(
    route_groups: Iterable[RouteGroup],
    *,
    status_source: Optional[OverrideSource] = None,
    cache: Optional[DocumentCache] = None,
) -> List[RouteGroup]:
    """Return *route_groups* followed by the built-in anonymous group.

    The swagger route documents every group in the returned list, itself
    included.
    """

    groups: List[RouteGroup] = list(route_groups)
    anonymous = RouteGroup(name="anonymous")
    deps = RouteDependencies(
        logger=logging.getLogger("routedoc.api"),
        route_groups=lambda: groups,
        status_source=status_source,
        cache=cache,
    )
    create_status_routes(anonymous, deps)
    create_swagger_routes(anonymous, deps)
    groups.append(anonymous)
    return groups


__all__ = ["RouteDependencies", "make_route_groups"]
