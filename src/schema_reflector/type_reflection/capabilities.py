"""Optional hooks a reflected type may provide as classmethods."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from schema_reflector.schema_model import Schema
from schema_reflector.type_inspection import record_type


@runtime_checkable
class ProvidesSchema(Protocol):
    """The type supplies its complete schema."""

    def json_schema(self) -> Schema: ...


@runtime_checkable
class ExtendsSchema(Protocol):
    """The type adjusts the generated schema in place."""

    def json_schema_extend(self, schema: Schema) -> None: ...


@runtime_checkable
class AliasesType(Protocol):
    """The type is reflected as another type."""

    def json_schema_alias(self) -> Any: ...


@runtime_checkable
class AliasesProperty(Protocol):
    """The type substitutes the type of individual properties."""

    def json_schema_property(self, name: str) -> Any: ...


@runtime_checkable
class DocumentsFields(Protocol):
    """The type documents its own fields."""

    def get_field_doc_string(self, field_name: str) -> str: ...


def provided_schema(tp: Any) -> Schema | None:
    tp = record_type(tp)
    if isinstance(tp, type) and isinstance(tp, ProvidesSchema):
        return tp.json_schema()
    return None


def extend_schema(tp: Any, schema: Schema) -> bool:
    tp = record_type(tp)
    if isinstance(tp, type) and isinstance(tp, ExtendsSchema):
        tp.json_schema_extend(schema)
        return True
    return False


def alias_type(tp: Any) -> Any | None:
    tp = record_type(tp)
    if isinstance(tp, type) and isinstance(tp, AliasesType):
        return tp.json_schema_alias()
    return None


def property_alias(tp: Any, name: str) -> Any | None:
    tp = record_type(tp)
    if isinstance(tp, type) and isinstance(tp, AliasesProperty):
        return tp.json_schema_property(name)
    return None


def field_doc_string(tp: Any, field_name: str) -> str | None:
    """Return the documented text of a field, or None when the type documents nothing."""
    tp = record_type(tp)
    if isinstance(tp, type) and isinstance(tp, DocumentsFields):
        return tp.get_field_doc_string(field_name) or ""
    return None
