"""Field annotation parsing and name/requiredness resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from schema_reflector.type_inspection import dereference, is_struct_type

from .struct_fields import StructField, struct_fields

DEFAULT_NAME_TAG = "json"
SCHEMA_TAG = "jsonschema"
EXTRAS_TAG = "jsonschema_extras"
DESCRIPTION_TAG = "jsonschema_description"

_OPTIONAL_MARKERS = frozenset({"omitempty", "omitzero"})


@dataclass(frozen=True)
class FieldTags:
    """Parsed annotation tokens of one field.

    ``name_tags[0]`` is the property name override (possibly empty, or ``-``
    to ignore the field); the remaining name tokens are markers such as
    ``omitempty`` and ``inline``.
    """

    name_tags: tuple[str, ...]
    schema_tags: tuple[str, ...]
    extra_tags: tuple[str, ...]
    description: str = ""

    @property
    def ignored(self) -> bool:
        return self.name_tags[0] == "-" or self.schema_tags[0] == "-"

    @property
    def inlined(self) -> bool:
        return "inline" in self.name_tags[1:]

    @property
    def nullable(self) -> bool:
        return self.schema_tags[0] != "-" and "nullable" in self.schema_tags


@dataclass(frozen=True)
class FieldNaming:
    """Resolved property name and flags for one field."""

    name: str
    embed: bool = False
    required: bool = False
    nullable: bool = False


_IGNORED_FIELD = FieldNaming(name="")
_EMBEDDED_FIELD = FieldNaming(name="", embed=True)

# (record type, name tag) -> tags per declared field; append-only, racing writers
# store identical values
_FIELD_TAGS_CACHE: dict[tuple[Any, str], tuple[FieldTags, ...]] = {}


def split_on_unescaped_commas(text: str) -> list[str]:
    """Split on commas that are not preceded by a backslash.

    The escaping backslash is dropped, any other backslash is kept, and an
    empty input yields a single empty token so position 0 always exists.
    """
    if not text:
        return [""]
    parts: list[str] = []
    buffer: list[str] = []
    escaped = False
    for char in text:
        if char == ",":
            if escaped:
                buffer[-1] = ","
            else:
                parts.append("".join(buffer))
                buffer.clear()
            escaped = False
            continue
        buffer.append(char)
        escaped = char == "\\"
    parts.append("".join(buffer))
    return parts


def parse_field_tags(struct_field: StructField, name_tag: str = DEFAULT_NAME_TAG) -> FieldTags:
    """Parse the raw annotation strings of a field."""
    return FieldTags(
        name_tags=tuple(struct_field.tag(name_tag or DEFAULT_NAME_TAG).split(",")),
        schema_tags=tuple(split_on_unescaped_commas(struct_field.tag(SCHEMA_TAG))),
        extra_tags=tuple(struct_field.tag(EXTRAS_TAG).split(",")),
        description=struct_field.tag(DESCRIPTION_TAG),
    )


def field_tags_for_type(tp: Any, name_tag: str = DEFAULT_NAME_TAG) -> tuple[FieldTags, ...]:
    """Return parsed tags for every declared field of a record type, memoized."""
    key = (tp, name_tag or DEFAULT_NAME_TAG)
    cached = _FIELD_TAGS_CACHE.get(key)
    if cached is not None:
        return cached
    tags = tuple(parse_field_tags(declared, key[1]) for declared in struct_fields(tp))
    _FIELD_TAGS_CACHE[key] = tags
    return tags


def clear_field_tags_cache() -> None:
    """Drop every memoized entry."""
    _FIELD_TAGS_CACHE.clear()


def resolve_field_naming(
    struct_field: StructField,
    tags: FieldTags,
    *,
    required_from_jsonschema_tags: bool = False,
    key_namer: Callable[[str], str] | None = None,
) -> FieldNaming:
    """Derive property name, embedding and requiredness from a field's tags."""
    if tags.ignored:
        return _IGNORED_FIELD

    required = False
    if not required_from_jsonschema_tags:
        required = not any(marker in _OPTIONAL_MARKERS for marker in tags.name_tags[1:])
    if "required" in tags.schema_tags:
        required = True

    # anonymous record fields are inherited, as are fields marked inline
    embedded_record = is_struct_type(dereference(struct_field.type))
    if struct_field.embedded and not tags.name_tags[0] and embedded_record:
        return _EMBEDDED_FIELD
    if tags.inlined:
        return _EMBEDDED_FIELD

    name = tags.name_tags[0] or struct_field.name
    if not struct_field.embedded and not struct_field.exported:
        name = ""
    elif key_namer is not None:
        name = key_namer(name)
    return FieldNaming(name=name, required=required, nullable=tags.nullable)
