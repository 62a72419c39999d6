"""Conversion between schema node trees and JSON documents."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .ordered_properties import Properties
from .schema_nodes import Schema


class SchemaDecodeError(Exception):
    """Raised when a JSON document cannot be decoded into a schema tree."""


class _Shape(str, Enum):
    SCHEMA = "schema"
    SCHEMA_LIST = "schema_list"
    SCHEMA_MAP = "schema_map"
    PROPERTIES = "properties"
    NUMBER = "number"
    VALUE = "value"


# (attribute, keyword, shape) in output order
_KEYWORDS: tuple[tuple[str, str, _Shape], ...] = (
    ("version", "$schema", _Shape.VALUE),
    ("id", "$id", _Shape.VALUE),
    ("anchor", "$anchor", _Shape.VALUE),
    ("ref", "$ref", _Shape.VALUE),
    ("dynamic_ref", "$dynamicRef", _Shape.VALUE),
    ("definitions", "$defs", _Shape.SCHEMA_MAP),
    ("comments", "$comment", _Shape.VALUE),
    ("all_of", "allOf", _Shape.SCHEMA_LIST),
    ("any_of", "anyOf", _Shape.SCHEMA_LIST),
    ("one_of", "oneOf", _Shape.SCHEMA_LIST),
    ("not_", "not", _Shape.SCHEMA),
    ("if_", "if", _Shape.SCHEMA),
    ("then", "then", _Shape.SCHEMA),
    ("else_", "else", _Shape.SCHEMA),
    ("dependent_schemas", "dependentSchemas", _Shape.SCHEMA_MAP),
    ("prefix_items", "prefixItems", _Shape.SCHEMA_LIST),
    ("items", "items", _Shape.SCHEMA),
    ("contains", "contains", _Shape.SCHEMA),
    ("properties", "properties", _Shape.PROPERTIES),
    ("pattern_properties", "patternProperties", _Shape.SCHEMA_MAP),
    ("additional_properties", "additionalProperties", _Shape.SCHEMA),
    ("property_names", "propertyNames", _Shape.SCHEMA),
    ("type", "type", _Shape.VALUE),
    ("enum", "enum", _Shape.VALUE),
    ("const", "const", _Shape.NUMBER),
    ("multiple_of", "multipleOf", _Shape.NUMBER),
    ("maximum", "maximum", _Shape.NUMBER),
    ("exclusive_maximum", "exclusiveMaximum", _Shape.NUMBER),
    ("minimum", "minimum", _Shape.NUMBER),
    ("exclusive_minimum", "exclusiveMinimum", _Shape.NUMBER),
    ("max_length", "maxLength", _Shape.NUMBER),
    ("min_length", "minLength", _Shape.NUMBER),
    ("pattern", "pattern", _Shape.VALUE),
    ("max_items", "maxItems", _Shape.NUMBER),
    ("min_items", "minItems", _Shape.NUMBER),
    ("unique_items", "uniqueItems", _Shape.VALUE),
    ("max_contains", "maxContains", _Shape.NUMBER),
    ("min_contains", "minContains", _Shape.NUMBER),
    ("max_properties", "maxProperties", _Shape.NUMBER),
    ("min_properties", "minProperties", _Shape.NUMBER),
    ("required", "required", _Shape.VALUE),
    ("dependent_required", "dependentRequired", _Shape.VALUE),
    ("format", "format", _Shape.VALUE),
    ("content_encoding", "contentEncoding", _Shape.VALUE),
    ("content_media_type", "contentMediaType", _Shape.VALUE),
    ("content_schema", "contentSchema", _Shape.SCHEMA),
    ("title", "title", _Shape.VALUE),
    ("description", "description", _Shape.VALUE),
    ("default", "default", _Shape.NUMBER),
    ("deprecated", "deprecated", _Shape.VALUE),
    ("read_only", "readOnly", _Shape.VALUE),
    ("write_only", "writeOnly", _Shape.VALUE),
    ("examples", "examples", _Shape.VALUE),
)

_ATTRIBUTES_BY_KEYWORD = {keyword: (attribute, shape) for attribute, keyword, shape in _KEYWORDS}


def schema_to_dict(schema: Schema) -> bool | dict[str, Any]:
    """Return the JSON-compatible form of a schema node.

    Boolean literal schemas and nodes without any keyword become ``True`` or
    ``False``. Extension keywords are emitted after the standard ones.
    """
    if schema.boolean is not None:
        return schema.boolean
    if schema.is_empty():
        return True

    document: dict[str, Any] = {}
    for attribute, keyword, shape in _KEYWORDS:
        value = getattr(schema, attribute)
        if shape is _Shape.NUMBER:
            # zero is a meaningful bound, only None means unset
            if value is not None:
                document[keyword] = value
            continue
        if shape is _Shape.PROPERTIES:
            # object nodes always carry their property map, even when empty
            if value is not None:
                document[keyword] = {key: schema_to_dict(item) for key, item in value.items()}
            continue
        if not value:
            continue
        if shape is _Shape.SCHEMA:
            document[keyword] = schema_to_dict(value)
        elif shape is _Shape.SCHEMA_LIST:
            document[keyword] = [schema_to_dict(item) for item in value]
        elif shape is _Shape.SCHEMA_MAP:
            document[keyword] = {key: schema_to_dict(item) for key, item in value.items()}
        else:
            document[keyword] = value
    if schema.extras:
        document.update(schema.extras)
    return document


def schema_from_dict(document: Any) -> Schema:
    """Build a schema tree from a decoded JSON value."""
    if isinstance(document, bool):
        return Schema.from_bool(document)
    if not isinstance(document, Mapping):
        raise SchemaDecodeError("Schema documents must be objects or booleans.")

    schema = Schema()
    for keyword, value in document.items():
        known = _ATTRIBUTES_BY_KEYWORD.get(keyword)
        if known is None:
            if schema.extras is None:
                schema.extras = {}
            schema.extras[keyword] = value
            continue
        attribute, shape = known
        setattr(schema, attribute, _decode_keyword(keyword, value, shape))
    return schema


def dump_schema(schema: Schema, *, indent: int | None = 2) -> str:
    """Serialize a schema tree to JSON text."""
    return json.dumps(schema_to_dict(schema), indent=indent, ensure_ascii=False)


def load_schema(text: str) -> Schema:
    """Parse JSON text into a schema tree."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaDecodeError(f"Invalid schema JSON: {exc}") from exc
    return schema_from_dict(document)


def _decode_keyword(keyword: str, value: Any, shape: _Shape) -> Any:
    if shape is _Shape.SCHEMA:
        return schema_from_dict(value)
    if shape is _Shape.SCHEMA_LIST:
        if not isinstance(value, list):
            raise SchemaDecodeError(f"'{keyword}' must be an array of schemas.")
        return [schema_from_dict(item) for item in value]
    if shape in (_Shape.SCHEMA_MAP, _Shape.PROPERTIES):
        if not isinstance(value, Mapping):
            raise SchemaDecodeError(f"'{keyword}' must be an object of schemas.")
        if shape is _Shape.PROPERTIES:
            return Properties.from_items(
                (key, schema_from_dict(item)) for key, item in value.items()
            )
        return {key: schema_from_dict(item) for key, item in value.items()}
    return value
