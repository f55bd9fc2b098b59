from __future__ import annotations

import pytest

from routedoc.api.middleware import Guard, Pagination, Plain, as_middleware
from routedoc.features.operations import (
    FALLBACK_TAG,
    build_operation,
    find_guard,
    has_pagination,
    tag_for,
)
from routedoc.features.parameters import pagination_parameters
from routedoc.schema import UnsupportedSchema, array, number, obj, string
from routedoc.utils.errors import UnsupportedParameterSchema, UnsupportedSchemaKind


async def _logging_middleware(request, call_next):
    return await call_next(request)


def test_plain_route_has_no_parameters_or_body() -> None:
    operation = build_operation([as_middleware(_logging_middleware)], "/mock", 200)

    assert operation == {
        "tags": ["Mock"],
        "parameters": [],
        "responses": {"200": {"description": "OK"}},
    }
    assert "requestBody" not in operation


@pytest.mark.parametrize(
    ("path", "tag"),
    [
        ("/mock", "Mock"),
        ("/users/{userId}", "Users"),
        ("/sign-in-exp", "Sign-in-exp"),
        ("/", FALLBACK_TAG),
        ("", FALLBACK_TAG),
    ],
)
def test_tag_is_capitalized_first_segment(path: str, tag: str) -> None:
    assert tag_for(path) == tag


def test_parameters_are_ordered_path_query_pagination() -> None:
    guard = Guard(
        params=obj({"id": string()}),
        query=obj({"search": string().optional()}),
    )

    operation = build_operation([Pagination(), guard], "/users/{id}", 200)

    names = [(parameter["in"], parameter["name"]) for parameter in operation["parameters"]]
    assert names == [
        ("path", "id"),
        ("query", "search"),
        ("query", "page"),
        ("query", "page_size"),
    ]
    assert operation["parameters"][-2:] == pagination_parameters()


def test_pagination_alone_yields_pagination_parameters() -> None:
    operation = build_operation([Pagination()], "/mock", 200)

    assert operation["parameters"] == pagination_parameters()


def test_request_body_is_documented_as_json() -> None:
    operation = build_operation([Guard(body=obj({"name": string()}))], "/mock", 201)

    assert operation["requestBody"] == {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {"name": {"type": "string"}},
                },
            },
        },
    }
    assert operation["responses"] == {"201": {"description": "OK"}}


def test_first_guard_wins() -> None:
    first = Guard(query=obj({"first": string()}))
    second = Guard(query=obj({"second": string()}), body=obj({"ignored": string()}))

    operation = build_operation([first, second], "/mock", 200)

    assert [parameter["name"] for parameter in operation["parameters"]] == ["first"]
    assert "requestBody" not in operation
    assert find_guard([as_middleware(_logging_middleware), first, second]) is first


def test_role_scan_helpers() -> None:
    plain = Plain(_logging_middleware)

    assert find_guard([plain]) is None
    assert has_pagination([plain]) is False
    assert has_pagination([plain, Pagination()]) is True


def test_nested_query_schemas_are_rejected() -> None:
    with pytest.raises(UnsupportedParameterSchema):
        build_operation([Guard(query=array(string()))], "/mock", 200)  # type: ignore[arg-type]


def test_unsupported_body_property_aborts() -> None:
    guard = Guard(body=obj({"value": UnsupportedSchema("union")}))

    with pytest.raises(UnsupportedSchemaKind):
        build_operation([guard], "/mock", 200)


def test_query_guard_from_documented_example() -> None:
    guard = Guard(query=obj({"id": number(), "name": string().optional()}))

    assert build_operation([guard], "/mock", 200)["parameters"] == [
        {"name": "id", "in": "query", "required": True, "schema": {"type": "number"}},
        {"name": "name", "in": "query", "required": False, "schema": {"type": "string"}},
    ]
