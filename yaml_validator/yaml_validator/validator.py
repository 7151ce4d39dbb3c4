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

"""Validate parsed YAML documents against schema types.

The validator never stops at the first problem: every call returns the full
list of violations found below the given value. Each violation carries the
path of the offending value from the document root.
"""

import logging
from typing import Any, List, Optional, Tuple

from .context import Context
from .exceptions import SchemaResolutionError
from .models.path import ROOT, YamlPath
from .models.schema_types import (
    ArrayType,
    HashType,
    IntegerType,
    ObjectType,
    OneOfType,
    RealType,
    ReferenceType,
    SchemaType,
    StringType,
)
from .models.violation import Violation, ViolationKind, bound_violation, missing_field, type_mismatch
from .utils.yaml_types import is_integer, is_real, kind_of

logger = logging.getLogger(__name__)

# URIs followed through $ref at the current document location, outermost first
RefChain = Tuple[str, ...]


def _describe(schema: SchemaType) -> str:
    if isinstance(schema, ReferenceType):
        return f"$ref '{schema.uri}'"
    return schema.KIND


def _validate_string(schema: StringType, value: Any, path: YamlPath) -> List[Violation]:
    if not isinstance(value, str):
        return [type_mismatch(path, "string", kind_of(value))]

    violations: List[Violation] = []
    length = len(value)
    if schema.min_length is not None and length < schema.min_length:
        violations.append(
            bound_violation(path, f"string length {length} is less than min_length {schema.min_length}")
        )
    if schema.max_length is not None and length > schema.max_length:
        violations.append(
            bound_violation(path, f"string length {length} is greater than max_length {schema.max_length}")
        )
    if schema.pattern is not None and not schema.pattern.search(value):
        violations.append(
            Violation(
                kind=ViolationKind.PATTERN_MISMATCH,
                message=f"string {value!r} does not match pattern {schema.pattern.pattern!r}",
                path=path,
            )
        )
    return violations


def _validate_real(schema: RealType, value: Any, path: YamlPath) -> List[Violation]:
    if not is_real(value):
        return [type_mismatch(path, "real", kind_of(value))]

    violations: List[Violation] = []
    if schema.minimum is not None and value < schema.minimum:
        violations.append(bound_violation(path, f"value {value} is less than minimum {schema.minimum}"))
    if schema.maximum is not None and value > schema.maximum:
        violations.append(bound_violation(path, f"value {value} is greater than maximum {schema.maximum}"))
    return violations


def _canonical(value: Any) -> Tuple[str, Any]:
    """Kind-tagged comparison key; 1, 1.0 and true differ at every depth."""
    kind = kind_of(value)
    if isinstance(value, list):
        return kind, tuple(_canonical(item) for item in value)
    if isinstance(value, dict):
        # mapping equality ignores key order
        return kind, frozenset((_canonical(key), _canonical(item)) for key, item in value.items())
    return kind, value


def _duplicate_items(items: List[Any], path: YamlPath) -> List[Violation]:
    violations: List[Violation] = []
    seen: List[Tuple[str, Any]] = []
    for idx, item in enumerate(items):
        key = _canonical(item)
        if key in seen:
            first = seen.index(key)
            violations.append(
                Violation(
                    kind=ViolationKind.DUPLICATE_ITEM,
                    message=f"array contains duplicate item, first seen at index {first}",
                    path=path.index(idx),
                )
            )
        seen.append(key)
    return violations


def _validate_contains(context: Context, schema: ArrayType, items: List[Any], path: YamlPath) -> List[Violation]:
    contained = sum(
        1 for idx, item in enumerate(items) if not _validate(context, schema.contains, item, path.index(idx), ())
    )

    violations: List[Violation] = []
    if schema.min_contains is not None:
        if contained < schema.min_contains:
            violations.append(
                bound_violation(
                    path,
                    f"{contained} items match the 'contains' schema, fewer than minContains {schema.min_contains}",
                )
            )
    elif contained < 1:
        violations.append(bound_violation(path, "at least one item in the array must match the 'contains' schema"))
    if schema.max_contains is not None and contained > schema.max_contains:
        violations.append(
            bound_violation(
                path,
                f"{contained} items match the 'contains' schema, more than maxContains {schema.max_contains}",
            )
        )
    return violations


def _validate_array(context: Context, schema: ArrayType, value: Any, path: YamlPath) -> List[Violation]:
    if not isinstance(value, list):
        return [type_mismatch(path, "array", kind_of(value))]

    violations: List[Violation] = []
    count = len(value)
    if schema.min_items is not None and count < schema.min_items:
        violations.append(bound_violation(path, f"array contains {count} items, fewer than minItems {schema.min_items}"))
    if schema.max_items is not None and count > schema.max_items:
        violations.append(bound_violation(path, f"array contains {count} items, more than maxItems {schema.max_items}"))
    if schema.unique_items:
        violations.extend(_duplicate_items(value, path))
    if schema.contains is not None:
        violations.extend(_validate_contains(context, schema, value, path))

    if schema.items is not None:
        for idx, item in enumerate(value):
            violations.extend(_validate(context, schema.items, item, path.index(idx), ()))
    return violations


def _validate_hash(context: Context, schema: HashType, value: Any, path: YamlPath) -> List[Violation]:
    if not isinstance(value, dict):
        return [type_mismatch(path, "hash", kind_of(value))]

    violations: List[Violation] = []
    if schema.items is not None:
        for key, item in value.items():
            violations.extend(_validate(context, schema.items, item, path.child(key), ()))
    return violations


def _validate_object(context: Context, schema: ObjectType, value: Any, path: YamlPath) -> List[Violation]:
    if not isinstance(value, dict):
        return [type_mismatch(path, "hash", kind_of(value))]

    # Undeclared fields in the document are not inspected.
    violations: List[Violation] = []
    for field_name, field_schema in schema.items.items():
        if field_name in value:
            violations.extend(_validate(context, field_schema, value[field_name], path.child(field_name), ()))
        elif field_name in schema.required:
            violations.append(missing_field(path, field_name))
    return violations


def _validate_one_of(
    context: Context, schema: OneOfType, value: Any, path: YamlPath, chain: RefChain
) -> List[Violation]:
    causes: List[Tuple[Violation, ...]] = []
    for candidate in schema.candidates:
        candidate_violations = _validate(context, candidate, value, path, chain)
        if not candidate_violations:
            return []
        causes.append(tuple(candidate_violations))

    expected = ", ".join(_describe(candidate) for candidate in schema.candidates)
    return [
        Violation(
            kind=ViolationKind.NO_MATCHING_VARIANT,
            message=f"{kind_of(value)} value does not match any oneOf candidate (expected one of: {expected})",
            path=path,
            causes=tuple(causes),
        )
    ]


def _validate_reference(
    context: Context, schema: ReferenceType, value: Any, path: YamlPath, chain: RefChain
) -> List[Violation]:
    if schema.uri in chain:
        cycle = " -> ".join(chain[chain.index(schema.uri):] + (schema.uri,))
        return [
            Violation(
                kind=ViolationKind.CYCLIC_REFERENCE,
                message=f"reference cycle detected: {cycle}",
                path=path,
            )
        ]

    target = context.resolve(schema.uri)
    if target is None:
        return [
            Violation(
                kind=ViolationKind.UNRESOLVED_REFERENCE,
                message=f"schema '{schema.uri}' referenced was not found",
                path=path,
            )
        ]
    return _validate(context, target, value, path, chain + (schema.uri,))


def _validate(context: Context, schema: SchemaType, value: Any, path: YamlPath, chain: RefChain) -> List[Violation]:
    # Descending into a container passes an empty chain: only references
    # followed without consuming document structure can loop forever.
    if isinstance(schema, StringType):
        return _validate_string(schema, value, path)
    if isinstance(schema, IntegerType):
        if not is_integer(value):
            return [type_mismatch(path, "integer", kind_of(value))]
        return []
    if isinstance(schema, RealType):
        return _validate_real(schema, value, path)
    if isinstance(schema, ArrayType):
        return _validate_array(context, schema, value, path)
    if isinstance(schema, HashType):
        return _validate_hash(context, schema, value, path)
    if isinstance(schema, ObjectType):
        return _validate_object(context, schema, value, path)
    if isinstance(schema, OneOfType):
        return _validate_one_of(context, schema, value, path, chain)
    if isinstance(schema, ReferenceType):
        return _validate_reference(context, schema, value, path, chain)

    raise TypeError(f"Unsupported schema type: {type(schema).__name__}")


def validate(context: Context, schema: SchemaType, value: Any, path: YamlPath = ROOT) -> List[Violation]:
    """Validate a value against a schema type.

    Args:
        context: Context used to resolve ``$ref`` nodes
        schema: Schema type to apply
        value: Parsed YAML value
        path: Location of ``value`` in its document

    Returns:
        Every violation found, in document traversal order
    """
    return _validate(context, schema, value, path, ())


def validate_document(context: Context, document: Any, starting_uri: Optional[str] = None) -> List[Violation]:
    """Validate a whole document against a schema from the context.

    Args:
        context: Schemas available for this run
        document: Parsed YAML document
        starting_uri: URI of the schema to start from; the most recently
            inserted schema is used when omitted

    Returns:
        Every violation found in the document; empty if the document is valid

    Raises:
        SchemaResolutionError: If the starting schema cannot be found
    """
    if starting_uri is not None:
        schema = context.resolve(starting_uri)
        if schema is None:
            raise SchemaResolutionError(
                f"schema referenced by uri `{starting_uri}` not found in context", uri=starting_uri
            )
    else:
        schema = context.default_schema()
        if schema is None:
            raise SchemaResolutionError("no schemas in context to validate against")

    violations = validate(context, schema, document)
    logger.debug(f"Validated document against {starting_uri or 'default schema'}: {len(violations)} violation(s)")
    return violations


def is_valid(context: Context, document: Any, starting_uri: Optional[str] = None) -> bool:
    return not validate_document(context, document, starting_uri)
