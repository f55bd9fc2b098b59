"""Assemble the OpenAPI document for a set of route groups."""
from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..api.router import RouteGroup
from ..utils.cache import DocumentCache
from ..utils.config import API_ROOT, DOCUMENT_TITLE, DOCUMENT_VERSION, OPENAPI_VERSION
from ..utils.logging import increment_counter, scoped_timer
from .extract import RouteDescriptor, extract
from .operations import OperationObject, build_operation
from .status_overrides import (
    OverrideSource,
    default_source,
    lookup,
    parse_overrides,
    read_source,
)

Document = Dict[str, Any]
PathMap = Dict[str, Dict[str, OperationObject]]

log = logging.getLogger(__name__)

_CONVERTOR = re.compile(r"\{([^{}:]+):[^{}]+\}")


def normalize_path(path: str) -> str:
    """Strip Starlette path convertors: ``/users/{id:int}`` -> ``/users/{id}``."""

    return _CONVERTOR.sub(r"{\1}", path)


def external_path(path: str, api_root: str = API_ROOT) -> str:
    return f"{api_root}{normalize_path(path)}"


def assemble(
    descriptors: Iterable[RouteDescriptor],
    overrides: Mapping[str, Mapping[str, int]],
    *,
    title: str = DOCUMENT_TITLE,
    version: str = DOCUMENT_VERSION,
    api_root: str = API_ROOT,
) -> Document:
    """Group operations by external path.

    Methods registered for the same path in different groups are merged into
    one path item; a repeated (path, method) pair keeps the last registration.
    """

    paths: PathMap = {}
    for descriptor in descriptors:
        status = lookup(overrides, descriptor.path, descriptor.method)
        operations = paths.setdefault(external_path(descriptor.path, api_root), {})
        operations[descriptor.method.lower()] = build_operation(
            descriptor.stack, descriptor.path, status
        )
        increment_counter("document.operations")

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": title,
            "version": version,
        },
        "paths": paths,
    }


def route_table_digest(route_groups: Sequence[RouteGroup], override_text: str) -> str:
    """Content digest of the route table and the raw override source."""

    digest = hashlib.sha256()
    for index, group in enumerate(route_groups):
        digest.update(f"group:{index}:{group.prefix}\n".encode("utf-8"))
        for route in group:
            stack = ";".join(middleware.fingerprint for middleware in route.stack)
            digest.update(f"{route.path}|{','.join(route.methods)}|{stack}\n".encode("utf-8"))
    digest.update(b"overrides\n")
    digest.update(override_text.encode("utf-8"))
    return digest.hexdigest()


def generate_document(
    route_groups: Iterable[RouteGroup],
    source: Optional[OverrideSource] = None,
    *,
    cache: Optional[DocumentCache] = None,
    title: str = DOCUMENT_TITLE,
    version: str = DOCUMENT_VERSION,
) -> Document:
    """Build the complete document or raise; there is no partial result."""

    groups: List[RouteGroup] = list(route_groups)
    resolved = source if source is not None else default_source()
    override_text = read_source(resolved)

    key: Optional[str] = None
    if cache is not None:
        key = route_table_digest(groups, f"{title}\n{version}\n{override_text}")
        cached = cache.get(key)
        if cached is not None:
            return cached

    overrides = parse_overrides(override_text, origin=str(resolved))
    with scoped_timer(log, "document.build.duration"):
        document = assemble(extract(groups), overrides, title=title, version=version)

    log.info(
        "document.build",
        extra={
            "groups": len(groups),
            "paths": len(document["paths"]),
            "operations": sum(len(item) for item in document["paths"].values()),
        },
    )
    if cache is not None and key is not None:
        cache.set(key, document)
    return document


__all__ = [
    "Document",
    "PathMap",
    "assemble",
    "external_path",
    "generate_document",
    "normalize_path",
    "route_table_digest",
]
