"""Names for the kinds of values a parsed YAML document can contain."""

from typing import Any


def kind_of(value: Any) -> str:
    """Return the schema-language name of a parsed YAML value's kind.

    ``bool`` is checked before ``int`` since it is a subclass of it in Python.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "real"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "hash"
    return type(value).__name__


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_real(value: Any) -> bool:
    return isinstance(value, float)
