from __future__ import annotations

import json

import pytest

from routedoc.api.middleware import Guard, Pagination
from routedoc.api.router import RouteGroup
from routedoc.features.document import (
    assemble,
    external_path,
    generate_document,
    normalize_path,
    route_table_digest,
)
from routedoc.features.extract import extract
from routedoc.schema import UnsupportedSchema, obj, string
from routedoc.tests._routes import mock_group, noop, options_group
from routedoc.utils.cache import DocumentCache
from routedoc.utils.errors import OverrideSourceMalformed, UnsupportedSchemaKind


def test_document_has_standard_fields() -> None:
    document = assemble(extract([mock_group()]), {})

    assert document["openapi"] == "3.0.1"
    assert document["info"] == {"title": "Identity Core", "version": "0.1.0"}
    assert isinstance(document["paths"], dict)


def test_paths_are_prefixed_and_grouped() -> None:
    document = assemble(extract([mock_group(), options_group()]), {})

    assert list(document["paths"]) == ["/api/mock", "/api/test"]
    assert list(document["paths"]["/api/mock"]) == ["get", "patch", "post", "delete"]
    assert list(document["paths"]["/api/test"]) == ["options", "put"]
    for operation in document["paths"]["/api/mock"].values():
        assert operation["tags"] == ["Mock"]


def test_methods_from_different_groups_merge() -> None:
    reader = RouteGroup()
    reader.get("/x", endpoint=noop)
    writer = RouteGroup()
    writer.post("/x", endpoint=noop)

    document = assemble(extract([reader, writer]), {})

    assert document["paths"] == {
        "/api/x": {
            "get": document["paths"]["/api/x"]["get"],
            "post": document["paths"]["/api/x"]["post"],
        }
    }


def test_duplicate_path_and_method_keeps_last_registration() -> None:
    first = RouteGroup()
    first.get("/x", endpoint=noop)
    second = RouteGroup()
    second.get("/x", Pagination(), endpoint=noop)

    document = assemble(extract([first, second]), {})

    operation = document["paths"]["/api/x"]["get"]
    assert [parameter["name"] for parameter in operation["parameters"]] == ["page", "page_size"]


def test_operation_count_matches_unique_registrations() -> None:
    groups = [mock_group(), options_group(), mock_group()]
    descriptors = extract(groups)

    document = assemble(descriptors, {})

    unique = {(item.path, item.method) for item in descriptors}
    assert len(descriptors) == 10
    assert sum(len(item) for item in document["paths"].values()) == len(unique) == 6
    assert set(document["paths"]) == {"/api/mock", "/api/test"}


def test_status_overrides_apply_per_method() -> None:
    document = assemble(extract([mock_group()]), {"/mock": {"get": 204}})

    operations = document["paths"]["/api/mock"]
    assert operations["get"]["responses"] == {"204": {"description": "OK"}}
    for method in ("patch", "post", "delete"):
        assert operations[method]["responses"] == {"200": {"description": "OK"}}


def test_status_overrides_use_the_raw_path() -> None:
    group = RouteGroup("/users")
    group.delete("/{userId}", endpoint=noop)

    document = assemble(extract([group]), {"/users/{userId}": {"delete": 204}})

    assert document["paths"]["/api/users/{userId}"]["delete"]["responses"] == {
        "204": {"description": "OK"}
    }


def test_path_convertors_are_normalized() -> None:
    assert normalize_path("/users/{userId:int}/roles/{roleId}") == "/users/{userId}/roles/{roleId}"
    assert external_path("/files/{path:path}") == "/api/files/{path}"
    assert external_path("/mock", "/v2") == "/v2/mock"


def test_generate_document_reads_source(write_overrides) -> None:
    source = write_overrides("/mock:\n  post: 201\n")

    document = generate_document([mock_group()], source)

    assert document["paths"]["/api/mock"]["post"]["responses"] == {"201": {"description": "OK"}}


def test_generate_document_has_no_partial_result(write_overrides, empty_overrides) -> None:
    group = mock_group()
    group.put("/broken", Guard(body=obj({"value": UnsupportedSchema()})), endpoint=noop)

    with pytest.raises(UnsupportedSchemaKind):
        generate_document([group], empty_overrides)

    with pytest.raises(OverrideSourceMalformed):
        generate_document([mock_group()], write_overrides("/mock: nope\n"))


def test_generate_document_builds_fresh_documents(empty_overrides) -> None:
    first = generate_document([mock_group()], empty_overrides)
    first["paths"].clear()

    second = generate_document([mock_group()], empty_overrides)

    assert "/api/mock" in second["paths"]


def test_cache_reuses_documents_until_inputs_change(write_overrides) -> None:
    cache = DocumentCache()
    group = mock_group()
    source = write_overrides("{}\n")

    first = generate_document([group], source, cache=cache)
    assert len(cache) == 1
    second = generate_document([group], source, cache=cache)
    assert json.dumps(second) == json.dumps(first)
    assert second is not first
    assert len(cache) == 1

    group.get("/added", endpoint=noop)
    third = generate_document([group], source, cache=cache)
    assert "/api/added" in third["paths"]
    assert len(cache) == 2

    source.write_text("/mock:\n  get: 204\n", encoding="utf-8")
    fourth = generate_document([group], source, cache=cache)
    assert fourth["paths"]["/api/mock"]["get"]["responses"] == {"204": {"description": "OK"}}
    assert len(cache) == 3


def test_route_table_digest_tracks_middleware() -> None:
    plain = RouteGroup()
    plain.get("/mock", endpoint=noop)
    guarded = RouteGroup()
    guarded.get("/mock", Guard(query=obj({"q": string()})), endpoint=noop)

    assert route_table_digest([plain], "{}") == route_table_digest([plain], "{}")
    assert route_table_digest([plain], "{}") != route_table_digest([guarded], "{}")
    assert route_table_digest([plain], "{}") != route_table_digest([plain], "/mock: {}")


def test_cache_hits_keep_registration_order(empty_overrides) -> None:
    cache = DocumentCache()
    group = RouteGroup()
    group.post("/zeta", Guard(body=obj({"b": string(), "a": string()})), endpoint=noop)
    group.get("/alpha", endpoint=noop)

    fresh = generate_document([group], empty_overrides, cache=cache)
    cached = generate_document([group], empty_overrides, cache=cache)

    assert list(cached["paths"]) == ["/api/zeta", "/api/alpha"]
    body = cached["paths"]["/api/zeta"]["post"]["requestBody"]["content"]["application/json"]
    assert list(body["schema"]["properties"]) == ["b", "a"]
    assert json.dumps(cached) == json.dumps(fresh)
