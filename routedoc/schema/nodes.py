"""Validation schema nodes attached to route guards.

Nodes are immutable and compare by value, so a guard's declared shape can be
fingerprinted and compared without executing a request. Use the lowercase
builders (:func:`obj`, :func:`string`, ...) rather than the classes directly.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple


class SchemaNode:
    """Base class for every validation schema node."""

    kind: str = "node"

    def optional(self) -> "OptionalSchema":
        return OptionalSchema(self)


@dataclass(frozen=True, slots=True)
class StringSchema(SchemaNode):
    kind = "string"

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    default: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NumberSchema(SchemaNode):
    kind = "number"

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    default: Optional[float] = None


@dataclass(frozen=True, slots=True)
class IntegerSchema(SchemaNode):
    kind = "integer"

    minimum: Optional[int] = None
    maximum: Optional[int] = None
    default: Optional[int] = None


@dataclass(frozen=True, slots=True)
class BooleanSchema(SchemaNode):
    kind = "boolean"

    default: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class EnumSchema(SchemaNode):
    kind = "enum"

    values: Tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class ArraySchema(SchemaNode):
    kind = "array"

    items: SchemaNode
    min_items: Optional[int] = None
    max_items: Optional[int] = None


@dataclass(frozen=True, slots=True)
class OptionalSchema(SchemaNode):
    kind = "optional"

    inner: SchemaNode


@dataclass(frozen=True, slots=True)
class ObjectSchema(SchemaNode):
    kind = "object"

    properties: Tuple[Tuple[str, SchemaNode], ...] = ()
    required: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        names = [name for name, _ in self.properties]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate property names in object schema: {names}")
        unknown = self.required.difference(names)
        if unknown:
            raise ValueError(f"Required names are not declared properties: {sorted(unknown)}")

    @property
    def shape(self) -> Dict[str, SchemaNode]:
        return dict(self.properties)


@dataclass(frozen=True, slots=True)
class UnsupportedSchema(SchemaNode):
    """Marker for a construct that has no documentation equivalent."""

    kind = "unsupported"

    description: str = "unknown"


def string(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    format: Optional[str] = None,
    default: Optional[str] = None,
) -> StringSchema:
    return StringSchema(min_length, max_length, pattern, format, default)


def number(
    *,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    default: Optional[float] = None,
) -> NumberSchema:
    return NumberSchema(minimum, maximum, default)


def integer(
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    default: Optional[int] = None,
) -> IntegerSchema:
    return IntegerSchema(minimum, maximum, default)


def boolean(*, default: Optional[bool] = None) -> BooleanSchema:
    return BooleanSchema(default)


def enum(values: Sequence[Any]) -> EnumSchema:
    if not values:
        raise ValueError("Enum schema requires at least one value")
    return EnumSchema(tuple(values))


def array(
    items: SchemaNode, *, min_items: Optional[int] = None, max_items: Optional[int] = None
) -> ArraySchema:
    return ArraySchema(items, min_items, max_items)


def optional(inner: SchemaNode) -> OptionalSchema:
    return OptionalSchema(inner)


def obj(
    properties: Mapping[str, SchemaNode], *, required: Optional[Iterable[str]] = None
) -> ObjectSchema:
    """Build an object schema.

    Without an explicit ``required`` set, every property not wrapped in
    :func:`optional` is required.
    """

    items = tuple(properties.items())
    if required is None:
        resolved = frozenset(
            name for name, node in items if not isinstance(node, OptionalSchema)
        )
    else:
        resolved = frozenset(required)
    return ObjectSchema(items, resolved)


__all__ = [
    "ArraySchema",
    "BooleanSchema",
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
]
