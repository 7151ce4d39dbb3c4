"""Validate YAML documents against schemas that are themselves written in YAML."""

from .context import Context
from .exceptions import DocumentLoadError, SchemaError, SchemaResolutionError, YamlValidatorError
from .models import ROOT, SchemaDocument, Violation, ViolationKind, YamlPath
from .parsers import load_schema_document, load_schema_documents, load_schema_type, yaml_parser
from .validator import is_valid, validate, validate_document

__version__ = "0.1.0"

__all__ = [
    "Context",
    "DocumentLoadError",
    "SchemaError",
    "SchemaResolutionError",
    "YamlValidatorError",
    "ROOT",
    "SchemaDocument",
    "Violation",
    "ViolationKind",
    "YamlPath",
    "load_schema_document",
    "load_schema_documents",
    "load_schema_type",
    "yaml_parser",
    "is_valid",
    "validate",
    "validate_document",
]
