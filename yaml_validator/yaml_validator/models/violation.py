from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .path import ROOT, YamlPath


class ViolationKind(str, Enum):
    TYPE_MISMATCH = "type-mismatch"
    BOUND_VIOLATION = "bound-violation"
    MISSING_FIELD = "missing-field"
    NO_MATCHING_VARIANT = "no-matching-variant"
    UNRESOLVED_REFERENCE = "unresolved-reference"
    PATTERN_MISMATCH = "pattern-mismatch"
    DUPLICATE_ITEM = "duplicate-item"
    CYCLIC_REFERENCE = "cyclic-reference"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Violation:
    """A single problem found in a document, located by ``path``.

    ``causes`` is only populated for ``no-matching-variant``: one tuple of
    violations per oneOf candidate, in declaration order.
    """

    kind: ViolationKind
    message: str
    path: YamlPath = ROOT
    causes: Tuple[Tuple[Violation, ...], ...] = ()

    def __str__(self) -> str:
        location = str(self.path)
        if not location:
            return self.message
        return f"{location}: {self.message}"


def type_mismatch(path: YamlPath, expected: str, actual: str) -> Violation:
    return Violation(
        kind=ViolationKind.TYPE_MISMATCH,
        message=f"wrong type, expected {expected} got {actual}",
        path=path,
    )


def bound_violation(path: YamlPath, message: str) -> Violation:
    return Violation(kind=ViolationKind.BOUND_VIOLATION, message=message, path=path)


def missing_field(path: YamlPath, field_name: str) -> Violation:
    return Violation(
        kind=ViolationKind.MISSING_FIELD,
        message=f"field '{field_name}' missing",
        path=path,
    )
