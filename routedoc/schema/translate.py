"""Translate validation schema nodes into OpenAPI schema objects."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from ..utils.errors import UnsupportedSchemaKind
from .nodes import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    IntegerSchema,
    NumberSchema,
    ObjectSchema,
    OptionalSchema,
    SchemaNode,
    StringSchema,
)

DocSchema = Dict[str, Any]


def _with_declared(schema: DocSchema, pairs: Iterable[Tuple[str, Any]]) -> DocSchema:
    for key, value in pairs:
        if value is not None:
            schema[key] = value
    return schema


def _enum_type(values: Tuple[Any, ...]) -> str | None:
    if all(isinstance(value, str) for value in values):
        return "string"
    if all(isinstance(value, int) and not isinstance(value, bool) for value in values):
        return "integer"
    if all(
        isinstance(value, (int, float)) and not isinstance(value, bool) for value in values
    ):
        return "number"
    return None


def translate(node: SchemaNode) -> DocSchema:
    """Return the OpenAPI schema equivalent of *node*.

    Optional wrappers are transparent here; whether a property is required is
    decided by the enclosing object's ``required`` set.
    """

    if isinstance(node, OptionalSchema):
        return translate(node.inner)
    if isinstance(node, ObjectSchema):
        schema: DocSchema = {"type": "object"}
        required = [name for name, _ in node.properties if name in node.required]
        if required:
            schema["required"] = required
        schema["properties"] = {name: translate(child) for name, child in node.properties}
        return schema
    if isinstance(node, ArraySchema):
        return _with_declared(
            {"type": "array", "items": translate(node.items)},
            (("minItems", node.min_items), ("maxItems", node.max_items)),
        )
    if isinstance(node, StringSchema):
        return _with_declared(
            {"type": "string"},
            (
                ("minLength", node.min_length),
                ("maxLength", node.max_length),
                ("pattern", node.pattern),
                ("format", node.format),
                ("default", node.default),
            ),
        )
    if isinstance(node, (NumberSchema, IntegerSchema)):
        return _with_declared(
            {"type": node.kind},
            (
                ("minimum", node.minimum),
                ("maximum", node.maximum),
                ("default", node.default),
            ),
        )
    if isinstance(node, BooleanSchema):
        return _with_declared({"type": "boolean"}, (("default", node.default),))
    if isinstance(node, EnumSchema):
        schema = {"enum": list(node.values)}
        enum_type = _enum_type(node.values)
        if enum_type is not None:
            schema = {"type": enum_type, **schema}
        return schema
    raise UnsupportedSchemaKind(getattr(node, "kind", type(node).__name__))


__all__ = ["DocSchema", "translate"]
