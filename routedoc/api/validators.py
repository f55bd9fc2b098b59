"""JSON schema validation helpers."""
from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Mapping, Tuple

from jsonschema import Draft202012Validator
from referencing import Registry, Resource


@lru_cache(maxsize=None)
def _schema_contents(name: str) -> Dict[str, Any]:
    with resources.files("routedoc.api.schemas").joinpath(name).open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=1)
def _registry() -> Registry:
    registry = Registry()
    package = resources.files("routedoc.api.schemas")
    for entry in package.iterdir():
        if entry.name.endswith(".json"):
            contents = _schema_contents(entry.name)
            schema_id = contents.get("$id")
            if schema_id:
                registry = registry.with_resource(schema_id, Resource.from_contents(contents))
    return registry


@lru_cache(maxsize=None)
def _load_schema(name: str) -> Draft202012Validator:
    schema = _schema_contents(name)
    return Draft202012Validator(schema, registry=_registry())


def _messages(validator: Draft202012Validator, payload: Any) -> List[str]:
    errors: List[str] = []
    # YAML mappings may mix int and str keys, so paths sort as text.
    ordered = sorted(validator.iter_errors(payload), key=lambda err: [str(part) for part in err.path])
    for error in ordered:
        location = "/".join(str(part) for part in error.path)
        errors.append(f"{location}: {error.message}" if location else error.message)
    return errors


def validate_payload(schema_name: str, payload: Any) -> Tuple[bool, List[str]]:
    """Validate *payload* against a packaged schema."""

    errors = _messages(_load_schema(schema_name), payload)
    return not errors, errors


def validate_instance(schema: Mapping[str, Any], payload: Any) -> Tuple[bool, List[str]]:
    """Validate *payload* against an inline schema produced by the translator."""

    errors = _messages(Draft202012Validator(dict(schema)), payload)
    return not errors, errors


__all__ = ["validate_instance", "validate_payload"]
