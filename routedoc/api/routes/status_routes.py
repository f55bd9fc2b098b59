from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from ...utils.logging import request_scope
from .._shared import envelope_ok
from ..router import RouteGroup
from ._common import RouteDependencies


def create_status_routes(group: RouteGroup, deps: RouteDependencies) -> RouteGroup:
    @group.get("/status", name="status")
    async def status_route(request: Request) -> JSONResponse:
        with request_scope(
            "status",
            logger=deps.logger,
            extra={"path": request.url.path},
        ):
            groups = deps.route_groups()
            payload = {
                "service": "routedoc",
                "groups": len(groups),
                "routes": sum(len(item) for item in groups),
                "cache_enabled": deps.cache is not None,
            }
            return JSONResponse(envelope_ok(payload))

    return group
