"""Apply ``jsonschema`` and ``jsonschema_extras`` annotation tokens to schema nodes."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

from schema_reflector.schema_model import Schema

from .tag_parsing import FieldTags

_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_TOKEN = re.compile(r"[0-9]+")
_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_UINT64_MAX = 2**64 - 1


def parse_number(token: str) -> int | float | None:
    """Parse an integer, else a finite float; anything else yields None."""
    if _INTEGER_TOKEN.fullmatch(token):
        return int(token)
    if not token or token != token.strip() or "_" in token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_uint(token: str) -> int | None:
    if not _UNSIGNED_TOKEN.fullmatch(token):
        return None
    value = int(token)
    return value if value <= _UINT64_MAX else None


def parse_bool(token: str) -> bool:
    """Read a boolean flag; unrecognized spellings read as False."""
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    return False


def apply_struct_keywords(
    schema: Schema,
    tags: FieldTags,
    parent: Schema,
    property_name: str,
) -> None:
    """Apply the annotation keywords of one field to its property node.

    Generic keywords come first; what they leave over is read according to
    the node's type. Extension tokens are merged last.
    """
    if tags.description:
        schema.description = tags.description
    remaining = _apply_generic_keywords(schema, tags.schema_tags, parent, property_name)
    _apply_kind_keywords(schema, remaining)
    apply_extra_keywords(schema, tags.extra_tags)


def apply_extra_keywords(schema: Schema, tokens: Iterable[str]) -> None:
    for token in tokens:
        key, separator, value = token.partition("=")
        if separator:
            set_extra(schema, key, value)


def set_extra(schema: Schema, key: str, value: str) -> None:
    """Merge one extension keyword into the open keyword map.

    A repeated key turns a text value into a list or appends to an existing
    list, while integers and booleans are re-read from the new token. The key
    ``minimum`` is always stored as an integer.
    """
    if schema.extras is None:
        schema.extras = {}
    extras = schema.extras
    if key not in extras:
        if key == "minimum":
            extras[key] = _atoi(value)
        elif value == "true":
            extras[key] = True
        elif value == "false":
            extras[key] = False
        else:
            extras[key] = value
        return

    existing = extras[key]
    if isinstance(existing, str):
        extras[key] = [existing, value]
    elif isinstance(existing, list):
        existing.append(value)
    elif isinstance(existing, bool):
        extras[key] = value in ("true", "t")
    elif isinstance(existing, int):
        extras[key] = _atoi(value)


def _apply_generic_keywords(
    schema: Schema,
    tokens: Iterable[str],
    parent: Schema,
    property_name: str,
) -> list[str]:
    # pylint: disable=too-many-branches
    unprocessed: list[str] = []
    for token in tokens:
        name, separator, value = token.partition("=")
        if not separator:
            continue
        if name == "title":
            schema.title = value
        elif name == "description":
            schema.description = value
        elif name == "type":
            schema.type = value
        elif name == "anchor":
            schema.anchor = value
        elif name == "oneof_required":
            if parent.one_of is None:
                parent.one_of = []
            _required_alternative(parent.one_of, value).required.append(property_name)
        elif name == "anyof_required":
            if parent.any_of is None:
                parent.any_of = []
            _required_alternative(parent.any_of, value).required.append(property_name)
        elif name == "oneof_ref":
            target = schema.items if schema.items is not None else schema
            target.ref = ""
            target.one_of = (target.one_of or []) + _split_alternatives(value, "ref")
        elif name == "anyof_ref":
            target = schema.items if schema.items is not None else schema
            target.ref = ""
            target.any_of = (target.any_of or []) + _split_alternatives(value, "ref")
        elif name == "oneof_type":
            schema.type = ""
            schema.one_of = (schema.one_of or []) + _split_alternatives(value, "type")
        elif name == "anyof_type":
            schema.type = ""
            schema.any_of = (schema.any_of or []) + _split_alternatives(value, "type")
        else:
            unprocessed.append(token)
    return unprocessed


def _required_alternative(alternatives: list[Schema], title: str) -> Schema:
    found = None
    for alternative in alternatives:
        if alternative.title == title:
            found = alternative
    if found is None:
        found = Schema(title=title, required=[])
        alternatives.append(found)
    elif found.required is None:
        found.required = []
    return found


def _split_alternatives(value: str, keyword: str) -> list[Schema]:
    return [Schema(**{keyword: part}) for part in value.split(";")]


def _apply_kind_keywords(schema: Schema, tokens: list[str]) -> None:
    if schema.type == "string":
        _apply_string_keywords(schema, tokens)
    elif schema.type in ("number", "integer"):
        _apply_numeric_keywords(schema, tokens)
    elif schema.type == "array":
        _apply_array_keywords(schema, tokens)
    elif schema.type == "boolean":
        _apply_boolean_keywords(schema, tokens)


def _apply_string_keywords(schema: Schema, tokens: Iterable[str]) -> None:
    for token in tokens:
        name, separator, value = token.partition("=")
        if not separator:
            continue
        if name == "minLength":
            schema.min_length = parse_uint(value)
        elif name == "maxLength":
            schema.max_length = parse_uint(value)
        elif name == "pattern":
            schema.pattern = value
        elif name == "format":
            schema.format = value
        elif name == "readOnly":
            schema.read_only = parse_bool(value)
        elif name == "writeOnly":
            schema.write_only = parse_bool(value)
        elif name == "default":
            schema.default = value
        elif name == "example":
            schema.examples = (schema.examples or []) + [value]
        elif name == "enum":
            schema.enum = (schema.enum or []) + [value]


def _apply_numeric_keywords(schema: Schema, tokens: Iterable[str]) -> None:
    for token in tokens:
        name, separator, value = token.partition("=")
        if not separator:
            continue
        if name == "multipleOf":
            schema.multiple_of = parse_number(value)
        elif name == "minimum":
            schema.minimum = parse_number(value)
        elif name == "maximum":
            schema.maximum = parse_number(value)
        elif name == "exclusiveMaximum":
            schema.exclusive_maximum = parse_number(value)
        elif name == "exclusiveMinimum":
            schema.exclusive_minimum = parse_number(value)
        elif name in ("default", "example", "enum"):
            number = parse_number(value)
            if number is None:
                continue
            if name == "default":
                schema.default = number
            elif name == "example":
                schema.examples = (schema.examples or []) + [number]
            else:
                schema.enum = (schema.enum or []) + [number]


def _apply_array_keywords(schema: Schema, tokens: Iterable[str]) -> None:
    defaults: list[Any] = []
    unprocessed: list[str] = []
    items = schema.items
    for token in tokens:
        name, separator, value = token.partition("=")
        if not separator:
            continue
        if name == "minItems":
            schema.min_items = parse_uint(value)
        elif name == "maxItems":
            schema.max_items = parse_uint(value)
        elif name == "uniqueItems":
            schema.unique_items = True
        elif name == "default":
            defaults.append(value)
        elif name == "format":
            if items is not None:
                items.format = value
        elif name == "pattern":
            if items is not None:
                items.pattern = value
        else:
            unprocessed.append(token)
    if defaults:
        schema.default = defaults
    # nested arrays are not traversed, it is unclear which level a token targets
    if unprocessed and items is not None and items.type != "array":
        _apply_kind_keywords(items, unprocessed)


def _apply_boolean_keywords(schema: Schema, tokens: Iterable[str]) -> None:
    for token in tokens:
        name, separator, value = token.partition("=")
        if separator and name == "default" and value in ("true", "false"):
            schema.default = value == "true"


def _atoi(token: str) -> int:
    return int(token) if _INTEGER_TOKEN.fullmatch(token) else 0
