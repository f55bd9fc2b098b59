from __future__ import annotations

from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from routedoc.api.middleware import Guard, MiddlewareRole, Pagination, Plain, compose
from routedoc.api.router import RouteGroup
from routedoc.schema import array, boolean, integer, number, obj, string
from routedoc.tests._routes import echo_state


def _client(group: RouteGroup) -> TestClient:
    return TestClient(Starlette(routes=group.routes()))


def test_roles_are_declared() -> None:
    async def passthrough(request, call_next):
        return await call_next(request)

    assert Guard().role is MiddlewareRole.GUARD
    assert Pagination().role is MiddlewareRole.PAGINATION
    assert Plain(passthrough).role is MiddlewareRole.PLAIN


def test_pagination_defaults() -> None:
    group = RouteGroup()
    group.get("/items", Pagination(default_page_size=20), endpoint=echo_state)

    with _client(group) as client:
        response = client.get("/items")

    assert response.status_code == 200
    assert response.json()["pagination"] == {"page": 1, "page_size": 20, "offset": 0}


def test_pagination_reads_query() -> None:
    group = RouteGroup()
    group.get("/items", Pagination(), endpoint=echo_state)

    with _client(group) as client:
        response = client.get("/items", params={"page": "3", "page_size": "10"})

    assert response.json()["pagination"] == {"page": 3, "page_size": 10, "offset": 20}


def test_pagination_rejects_invalid_values() -> None:
    group = RouteGroup()
    group.get("/items", Pagination(max_page_size=50), endpoint=echo_state)

    with _client(group) as client:
        for params in ({"page": "0"}, {"page": "abc"}, {"page_size": "51"}, {"page_size": "-1"}):
            response = client.get("/items", params=params)
            assert response.status_code == 400, params
            body = response.json()
            assert body["ok"] is False
            assert body["errors"][0]["code"] == "INVALID_REQUEST"


def test_guard_coerces_query_and_path_values() -> None:
    group = RouteGroup()
    guard = Guard(
        params=obj({"id": integer()}),
        query=obj(
            {
                "score": number().optional(),
                "active": boolean().optional(),
                "tags": array(string()).optional(),
            }
        ),
    )
    group.get("/users/{id}", guard, endpoint=echo_state)

    with _client(group) as client:
        response = client.get(
            "/users/7",
            params=[("score", "1.5"), ("active", "true"), ("tags", "a"), ("tags", "b")],
        )

    assert response.status_code == 200
    assert response.json()["guarded"] == {
        "params": {"id": 7},
        "query": {"score": 1.5, "active": True, "tags": ["a", "b"]},
    }


def test_guard_rejects_invalid_query() -> None:
    group = RouteGroup()
    group.get("/users", Guard(query=obj({"id": integer()})), endpoint=echo_state)

    with _client(group) as client:
        missing = client.get("/users")
        wrong = client.get("/users", params={"id": "abc"})

    assert missing.status_code == 400
    assert "query" in missing.json()["errors"][0]["message"]
    assert wrong.status_code == 400


def test_guard_validates_body() -> None:
    group = RouteGroup()
    group.post("/users", Guard(body=obj({"name": string(min_length=1)})), endpoint=echo_state)

    with _client(group) as client:
        ok = client.post("/users", json={"name": "alice"})
        empty = client.post("/users", json={"name": ""})
        missing = client.post("/users", json={})
        broken = client.post(
            "/users", content=b"{not json", headers={"content-type": "application/json"}
        )

    assert ok.status_code == 200
    assert ok.json()["guarded"] == {"body": {"name": "alice"}}
    assert empty.status_code == 400
    assert missing.status_code == 400
    assert broken.status_code == 400
    assert broken.json()["errors"][0]["message"].startswith("Invalid JSON payload")


def test_compose_runs_stack_in_order() -> None:
    calls: list[str] = []

    def recorder(name: str):
        async def middleware(request, call_next):
            calls.append(f"{name}:before")
            response = await call_next(request)
            calls.append(f"{name}:after")
            return response

        return Plain(middleware)

    group = RouteGroup()
    group.get("/mock", recorder("outer"), recorder("inner"), endpoint=echo_state)

    with _client(group) as client:
        assert client.get("/mock").status_code == 200

    assert calls == ["outer:before", "inner:before", "inner:after", "outer:after"]


def test_compose_without_stack_calls_endpoint() -> None:
    handler = compose((), echo_state)

    app = Starlette(routes=[Route("/mock", handler)])
    with TestClient(app) as client:
        assert client.get("/mock").json() == {"pagination": None, "guarded": None}
