"""OpenAPI parameter objects built from guard schemas."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from ..schema import ObjectSchema, SchemaNode, translate
from ..utils.config import DEFAULT_PAGE_SIZE
from ..utils.errors import UnsupportedParameterSchema

ParameterObject = Dict[str, Any]
Location = Literal["path", "query"]


def pagination_parameters(default_page_size: int = DEFAULT_PAGE_SIZE) -> List[ParameterObject]:
    return [
        {
            "name": "page",
            "in": "query",
            "required": False,
            "schema": {"type": "integer", "minimum": 1, "default": 1},
        },
        {
            "name": "page_size",
            "in": "query",
            "required": False,
            "schema": {"type": "integer", "minimum": 1, "default": default_page_size},
        },
    ]


# Parameter serialization: https://swagger.io/docs/specification/serialization
def build_parameters(schema: Optional[SchemaNode], location: Location) -> List[ParameterObject]:
    """Return one parameter per property of an object *schema*, in declared order."""

    if schema is None:
        return []
    if not isinstance(schema, ObjectSchema):
        raise UnsupportedParameterSchema(location, getattr(schema, "kind", type(schema).__name__))

    return [
        {
            "name": name,
            "in": location,
            "required": name in schema.required,
            "schema": translate(node),
        }
        for name, node in schema.properties
    ]


__all__ = ["ParameterObject", "build_parameters", "pagination_parameters"]
