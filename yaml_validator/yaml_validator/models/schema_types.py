from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Pattern, Tuple, Union


@dataclass(frozen=True)
class StringType:
    KIND: ClassVar[str] = "string"

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Pattern[str]] = None


@dataclass(frozen=True)
class IntegerType:
    KIND: ClassVar[str] = "integer"


@dataclass(frozen=True)
class RealType:
    KIND: ClassVar[str] = "real"

    minimum: Optional[float] = None
    maximum: Optional[float] = None


@dataclass(frozen=True)
class ArrayType:
    KIND: ClassVar[str] = "array"

    # None means elements are accepted without inspection
    items: Optional["SchemaType"] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False
    # elements matching `contains` are counted against min_contains / max_contains
    contains: Optional["SchemaType"] = None
    min_contains: Optional[int] = None
    max_contains: Optional[int] = None


@dataclass(frozen=True)
class HashType:
    KIND: ClassVar[str] = "hash"

    items: Optional["SchemaType"] = None


@dataclass(frozen=True)
class ObjectType:
    KIND: ClassVar[str] = "object"

    items: Dict[str, "SchemaType"] = field(default_factory=dict)
    required: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OneOfType:
    KIND: ClassVar[str] = "oneOf"

    candidates: Tuple["SchemaType", ...] = ()


@dataclass(frozen=True)
class ReferenceType:
    """Reference to another schema by URI.

    Only the name is stored; the target is looked up in the context when the
    reference is validated, so it may be registered after this node is built.
    """

    KIND: ClassVar[str] = "$ref"

    uri: str = ""


SchemaType = Union[
    StringType,
    IntegerType,
    RealType,
    ArrayType,
    HashType,
    ObjectType,
    OneOfType,
    ReferenceType,
]

SCHEMA_TYPES: Tuple[type, ...] = (
    StringType,
    IntegerType,
    RealType,
    ArrayType,
    HashType,
    ObjectType,
    OneOfType,
    ReferenceType,
)


@dataclass(frozen=True)
class SchemaDocument:
    schema: SchemaType
    uri: Optional[str] = None
