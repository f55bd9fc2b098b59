from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from ...features.document import generate_document
from ...utils.logging import request_scope
from ..router import RouteGroup
from ._common import RouteDependencies


def create_swagger_routes(group: RouteGroup, deps: RouteDependencies) -> RouteGroup:
    @group.get("/swagger.json", name="swagger")
    async def swagger_route(request: Request) -> JSONResponse:
        with request_scope(
            "swagger",
            logger=deps.logger,
            extra={"path": request.url.path},
        ):
            document = generate_document(
                deps.route_groups(), deps.status_source, cache=deps.cache
            )
        return JSONResponse(document)

    return group
