"""Validation schema algebra and its OpenAPI translation."""

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
    UnsupportedSchema,
    array,
    boolean,
    enum,
    integer,
    number,
    obj,
    optional,
    string,
)
from .translate import DocSchema, translate

__all__ = [
    "ArraySchema",
    "BooleanSchema",
    "DocSchema",
    "EnumSchema",
    "IntegerSchema",
    "NumberSchema",
    "ObjectSchema",
    "OptionalSchema",
    "SchemaNode",
    "StringSchema",
    "UnsupportedSchema",
    "array",
    "boolean",
    "enum",
    "integer",
    "number",
    "obj",
    "optional",
    "string",
    "translate",
]
