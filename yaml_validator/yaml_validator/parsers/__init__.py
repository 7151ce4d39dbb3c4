"""Parsing of YAML text and schema documents."""

from .schema_parser import load_schema_document, load_schema_documents, load_schema_type
from .yaml_parser import DocumentLoader, YamlParser, yaml_parser

__all__ = [
    "load_schema_document",
    "load_schema_documents",
    "load_schema_type",
    "DocumentLoader",
    "YamlParser",
    "yaml_parser",
]
