"""In-memory model shared by the schema loader, the context and the validator.

This package holds pure data only and does not import the
loader or validator modules.
"""

from .path import ROOT, FieldSegment, IndexSegment, PathSegment, YamlPath
from .schema_types import (
    SCHEMA_TYPES,
    ArrayType,
    HashType,
    IntegerType,
    ObjectType,
    OneOfType,
    RealType,
    ReferenceType,
    SchemaDocument,
    SchemaType,
    StringType,
)
from .violation import Violation, ViolationKind

__all__ = [
    "ROOT",
    "FieldSegment",
    "IndexSegment",
    "PathSegment",
    "YamlPath",
    "SCHEMA_TYPES",
    "ArrayType",
    "HashType",
    "IntegerType",
    "ObjectType",
    "OneOfType",
    "RealType",
    "ReferenceType",
    "SchemaDocument",
    "SchemaType",
    "StringType",
    "Violation",
    "ViolationKind",
]
