"""File I/O related utilities.

This package groups small modules that format file-backed diagnostics.
"""

from .source_location import SourceLocation, lookup_source, format_file, format_source

__all__ = [
    "SourceLocation",
    "lookup_source",
    "format_file",
    "format_source",
]
