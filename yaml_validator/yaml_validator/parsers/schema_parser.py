# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Build schema types from parsed schema documents.

A schema document is a mapping with an optional ``uri`` and a required
``schema`` type node. A type node selects its variant with exactly one of
``$ref``, ``oneOf`` or ``type``.
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..exceptions import SchemaError
from ..models.path import ROOT, YamlPath
from ..models.schema_types import (
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
from ..utils.yaml_types import kind_of

logger = logging.getLogger(__name__)

_SELECTORS = ("$ref", "oneOf", "type")

_ALLOWED_KEYS: Dict[str, Tuple[str, ...]] = {
    "string": ("type", "min_length", "max_length", "pattern"),
    "integer": ("type",),
    "real": ("type", "minimum", "maximum"),
    "array": ("type", "items", "minItems", "maxItems", "uniqueItems", "contains", "minContains", "maxContains"),
    "hash": ("type", "items"),
    "object": ("type", "items", "required"),
    "oneOf": ("oneOf",),
    "$ref": ("$ref",),
}


def _warn_unknown_keys(node: Dict[Any, Any], kind: str, path: YamlPath) -> None:
    allowed = _ALLOWED_KEYS[kind]
    for key in node:
        if key not in allowed:
            location = str(path) or "<root>"
            logger.warning(f"Ignoring unknown key '{key}' in {kind} schema at {location}")


def _wrong_type(path: YamlPath, expected: str, value: Any) -> SchemaError:
    return SchemaError(f"wrong type, expected {expected} got {kind_of(value)}", path)


def _optional_count(node: Dict[Any, Any], key: str, path: YamlPath) -> Optional[int]:
    if key not in node:
        return None
    value = node[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise _wrong_type(path.child(key), "integer", value)
    if value < 0:
        raise SchemaError(f"malformed field: '{key}' must not be negative, got {value}", path.child(key))
    return value


def _optional_number(node: Dict[Any, Any], key: str, path: YamlPath) -> Optional[float]:
    if key not in node:
        return None
    value = node[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _wrong_type(path.child(key), "real", value)
    return value


def _check_range(
    low: Optional[float], high: Optional[float], low_key: str, high_key: str, path: YamlPath
) -> None:
    if low is not None and high is not None and low > high:
        raise SchemaError(f"malformed field: '{low_key}' ({low}) is greater than '{high_key}' ({high})", path)


def _optional_items(node: Dict[Any, Any], path: YamlPath) -> Optional[SchemaType]:
    if "items" not in node:
        return None
    return load_schema_type(node["items"], path.child("items"))


def _load_string(node: Dict[Any, Any], path: YamlPath) -> StringType:
    min_length = _optional_count(node, "min_length", path)
    max_length = _optional_count(node, "max_length", path)
    _check_range(min_length, max_length, "min_length", "max_length", path)

    pattern = None
    if "pattern" in node:
        raw = node["pattern"]
        if not isinstance(raw, str):
            raise _wrong_type(path.child("pattern"), "string", raw)
        try:
            pattern = re.compile(raw)
        except re.error as exc:
            raise SchemaError(f"malformed field: invalid pattern {raw!r}: {exc}", path.child("pattern"))

    return StringType(min_length=min_length, max_length=max_length, pattern=pattern)


def _load_integer(node: Dict[Any, Any], path: YamlPath) -> IntegerType:
    return IntegerType()


def _load_real(node: Dict[Any, Any], path: YamlPath) -> RealType:
    minimum = _optional_number(node, "minimum", path)
    maximum = _optional_number(node, "maximum", path)
    _check_range(minimum, maximum, "minimum", "maximum", path)
    return RealType(minimum=minimum, maximum=maximum)


def _load_array(node: Dict[Any, Any], path: YamlPath) -> ArrayType:
    min_items = _optional_count(node, "minItems", path)
    max_items = _optional_count(node, "maxItems", path)
    _check_range(min_items, max_items, "minItems", "maxItems", path)

    unique_items = node.get("uniqueItems", False)
    if not isinstance(unique_items, bool):
        raise _wrong_type(path.child("uniqueItems"), "boolean", unique_items)

    contains = None
    if "contains" in node:
        contains = load_schema_type(node["contains"], path.child("contains"))
    min_contains = _optional_count(node, "minContains", path)
    max_contains = _optional_count(node, "maxContains", path)
    if contains is None:
        for key in ("minContains", "maxContains"):
            if key in node:
                raise SchemaError(
                    f"malformed field: {key} requires 'contains' to specify a schema to validate against",
                    path.child(key),
                )
    _check_range(min_contains, max_contains, "minContains", "maxContains", path)

    return ArrayType(
        items=_optional_items(node, path),
        min_items=min_items,
        max_items=max_items,
        unique_items=unique_items,
        contains=contains,
        min_contains=min_contains,
        max_contains=max_contains,
    )


def _load_hash(node: Dict[Any, Any], path: YamlPath) -> HashType:
    return HashType(items=_optional_items(node, path))


def _load_object(node: Dict[Any, Any], path: YamlPath) -> ObjectType:
    if "items" not in node:
        raise SchemaError("field 'items' missing", path)
    raw_items = node["items"]
    items_path = path.child("items")
    if not isinstance(raw_items, dict):
        raise _wrong_type(items_path, "hash", raw_items)

    items: Dict[str, SchemaType] = {}
    errors: List[SchemaError] = []
    for name, raw_field in raw_items.items():
        if not isinstance(name, str):
            errors.append(_wrong_type(items_path, "string field name", name))
            continue
        try:
            items[name] = load_schema_type(raw_field, items_path.child(name))
        except SchemaError as exc:
            errors.append(exc)

    required: Tuple[str, ...] = ()
    if "required" in node:
        raw_required = node["required"]
        required_path = path.child("required")
        if not isinstance(raw_required, list):
            errors.append(_wrong_type(required_path, "array", raw_required))
        else:
            names = []
            for idx, name in enumerate(raw_required):
                if not isinstance(name, str):
                    errors.append(_wrong_type(required_path.index(idx), "string", name))
                elif name not in raw_items:
                    errors.append(
                        SchemaError(f"required field '{name}' is not declared in 'items'", required_path.index(idx))
                    )
                else:
                    names.append(name)
            required = tuple(names)

    if errors:
        raise SchemaError.combine(errors)
    return ObjectType(items=items, required=required)


_TYPE_LOADERS: Dict[str, Callable[[Dict[Any, Any], YamlPath], SchemaType]] = {
    "string": _load_string,
    "integer": _load_integer,
    "real": _load_real,
    "array": _load_array,
    "hash": _load_hash,
    "object": _load_object,
}


def _load_one_of(node: Dict[Any, Any], path: YamlPath) -> OneOfType:
    raw_candidates = node["oneOf"]
    candidates_path = path.child("oneOf")
    if not isinstance(raw_candidates, list):
        raise _wrong_type(candidates_path, "array", raw_candidates)
    if not raw_candidates:
        raise SchemaError(
            "malformed field: oneOf modifier requires an array of schemas to validate against",
            candidates_path,
        )

    candidates: List[SchemaType] = []
    errors: List[SchemaError] = []
    for idx, raw_candidate in enumerate(raw_candidates):
        try:
            candidates.append(load_schema_type(raw_candidate, candidates_path.index(idx)))
        except SchemaError as exc:
            errors.append(exc)

    if errors:
        raise SchemaError.combine(errors)
    return OneOfType(candidates=tuple(candidates))


def _load_reference(node: Dict[Any, Any], path: YamlPath) -> ReferenceType:
    uri = node["$ref"]
    if not isinstance(uri, str) or not uri:
        raise _wrong_type(path.child("$ref"), "non-empty string", uri)
    return ReferenceType(uri=uri)


def load_schema_type(node: Any, path: YamlPath = ROOT) -> SchemaType:
    """Build a schema type from a type node.

    Args:
        node: Parsed YAML type node (a mapping)
        path: Location of the node inside its schema document, used in errors

    Returns:
        The schema type described by the node

    Raises:
        SchemaError: If the node is not a well-formed type node
    """
    if not isinstance(node, dict):
        raise _wrong_type(path, "hash", node)

    selectors = [key for key in _SELECTORS if key in node]
    if len(selectors) > 1:
        found = ", ".join(f"'{key}'" for key in selectors)
        raise SchemaError(f"malformed field: '$ref', 'oneOf' and 'type' are mutually exclusive, found {found}", path)
    if not selectors:
        raise SchemaError("field 'type' missing", path)

    selector = selectors[0]
    if selector == "$ref":
        _warn_unknown_keys(node, "$ref", path)
        return _load_reference(node, path)
    if selector == "oneOf":
        _warn_unknown_keys(node, "oneOf", path)
        return _load_one_of(node, path)

    type_name = node["type"]
    if not isinstance(type_name, str):
        raise _wrong_type(path.child("type"), "string", type_name)
    loader = _TYPE_LOADERS.get(type_name)
    if loader is None:
        raise SchemaError(f"unknown type specified: {type_name}", path.child("type"))
    _warn_unknown_keys(node, type_name, path)
    return loader(node, path)


def load_schema_document(node: Any, path: YamlPath = ROOT) -> SchemaDocument:
    """Build a schema document (``uri`` + ``schema``) from a parsed YAML document.

    Raises:
        SchemaError: If the document or its type nodes are malformed
    """
    if not isinstance(node, dict):
        raise _wrong_type(path, "hash", node)

    for key in node:
        if key not in ("uri", "schema"):
            location = str(path) or "<root>"
            logger.warning(f"Ignoring unknown key '{key}' in schema document at {location}")

    uri = node.get("uri")
    if uri is not None and not isinstance(uri, str):
        raise _wrong_type(path.child("uri"), "string", uri)
    if "schema" not in node:
        raise SchemaError("field 'schema' missing", path)

    schema = load_schema_type(node["schema"], path.child("schema"))
    logger.debug(f"Loaded schema document uri={uri!r} ({schema.KIND})")
    return SchemaDocument(schema=schema, uri=uri)


def load_schema_documents(nodes: Iterable[Any]) -> List[SchemaDocument]:
    """Build schema documents from a stream of parsed YAML documents.

    Every document is loaded even if an earlier one fails, so that all problems
    are reported together. Error paths are prefixed with the document index.

    Raises:
        SchemaError: If any document is malformed
    """
    documents: List[SchemaDocument] = []
    errors: List[SchemaError] = []
    for idx, node in enumerate(nodes):
        try:
            documents.append(load_schema_document(node, ROOT.index(idx)))
        except SchemaError as exc:
            errors.append(exc)

    if errors:
        raise SchemaError.combine(errors)
    return documents
