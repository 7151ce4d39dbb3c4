from __future__ import annotations

from yaml_validator.context import Context
from yaml_validator.models.schema_types import IntegerType, ReferenceType, SchemaDocument, StringType


def test_empty_context() -> None:
    context = Context()
    assert len(context) == 0
    assert context.default_schema() is None
    assert context.resolve("anything") is None
    assert "anything" not in context


def test_default_schema_is_last_inserted() -> None:
    context = Context()
    context.insert(SchemaDocument(uri="a", schema=StringType()))
    context.insert(SchemaDocument(uri=None, schema=IntegerType()))
    assert context.default_schema() == IntegerType()


def test_later_insert_shadows_same_uri() -> None:
    context = Context.from_documents(
        [
            SchemaDocument(uri="person", schema=StringType()),
            SchemaDocument(uri="other", schema=IntegerType()),
            SchemaDocument(uri="person", schema=IntegerType()),
        ]
    )
    assert context.resolve("person") == IntegerType()
    assert context.uris() == ["person", "other"]
    assert len(context) == 3


def test_insert_does_not_resolve_references() -> None:
    context = Context()
    context.insert(SchemaDocument(uri="phonebook", schema=ReferenceType(uri="person")))
    assert "phonebook" in context
    assert "person" not in context
    assert context.resolve("phonebook") == ReferenceType(uri="person")
