from __future__ import annotations

from yaml_validator.models.path import ROOT, FieldSegment, IndexSegment, YamlPath
from yaml_validator.models.violation import Violation, ViolationKind, missing_field, type_mismatch


def test_root_renders_empty() -> None:
    assert str(ROOT) == ""
    assert ROOT.is_root
    assert ROOT.to_pointer() == ""


def test_segments_concatenate_without_separators() -> None:
    assert str(ROOT.index(2).child("age")) == "[2].age"
    assert str(ROOT.child("customers").index(0).child("name")) == ".customers[0].name"


def test_child_does_not_mutate_parent() -> None:
    parent = ROOT.child("a")
    left = parent.child("b")
    right = parent.index(1)

    assert str(parent) == ".a"
    assert str(left) == ".a.b"
    assert str(right) == ".a[1]"
    assert list(left) == [FieldSegment("a"), FieldSegment("b")]
    assert list(right) == [FieldSegment("a"), IndexSegment(1)]


def test_child_stringifies_non_string_keys() -> None:
    assert str(ROOT.child(42)) == ".42"


def test_to_pointer_escapes_tokens() -> None:
    path = ROOT.child("a/b").child("c~d").index(3)
    assert path.to_pointer() == "/a~1b/c~0d/3"


def test_paths_compare_by_value() -> None:
    assert ROOT.child("x").index(1) == YamlPath((FieldSegment("x"), IndexSegment(1)))
    assert len(ROOT.child("x").index(1)) == 2


def test_violation_rendering() -> None:
    nested = type_mismatch(ROOT.index(1).child("age"), "integer", "real")
    assert nested.kind is ViolationKind.TYPE_MISMATCH
    assert str(nested) == "[1].age: wrong type, expected integer got real"

    at_root = missing_field(ROOT, "firstname")
    assert str(at_root) == "field 'firstname' missing"


def test_violation_kind_values() -> None:
    assert str(ViolationKind.NO_MATCHING_VARIANT) == "no-matching-variant"
    assert ViolationKind("unresolved-reference") is ViolationKind.UNRESOLVED_REFERENCE


def test_violation_defaults() -> None:
    violation = Violation(kind=ViolationKind.BOUND_VIOLATION, message="too long")
    assert violation.path == ROOT
    assert violation.causes == ()
