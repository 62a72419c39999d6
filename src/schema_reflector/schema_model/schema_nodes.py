"""JSON Schema node model (draft 2020-12)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from .ordered_properties import Properties

VERSION = "https://json-schema.org/draft/2020-12/schema"


@dataclass(eq=True)
class Schema:  # pylint: disable=too-many-instance-attributes
    """One node of a JSON Schema document.

    A node is either a boolean literal schema (``boolean`` set) or a structured
    node carrying keywords. Unset keywords keep their empty default and are
    omitted on serialization.
    """

    # core vocabulary
    version: str = ""
    id: str = ""
    anchor: str = ""
    ref: str = ""
    dynamic_ref: str = ""
    definitions: dict[str, Schema] | None = None
    comments: str = ""
    # applicators
    all_of: list[Schema] | None = None
    any_of: list[Schema] | None = None
    one_of: list[Schema] | None = None
    not_: Schema | None = None
    if_: Schema | None = None
    then: Schema | None = None
    else_: Schema | None = None
    dependent_schemas: dict[str, Schema] | None = None
    prefix_items: list[Schema] | None = None
    items: Schema | None = None
    contains: Schema | None = None
    properties: Properties | None = None
    pattern_properties: dict[str, Schema] | None = None
    additional_properties: Schema | None = None
    property_names: Schema | None = None
    # validation
    type: str | list[str] = ""
    enum: list[Any] | None = None
    const: Any = None
    multiple_of: int | float | None = None
    maximum: int | float | None = None
    exclusive_maximum: int | float | None = None
    minimum: int | float | None = None
    exclusive_minimum: int | float | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str = ""
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False
    max_contains: int | None = None
    min_contains: int | None = None
    max_properties: int | None = None
    min_properties: int | None = None
    required: list[str] | None = None
    dependent_required: dict[str, list[str]] | None = None
    format: str = ""
    content_encoding: str = ""
    content_media_type: str = ""
    content_schema: Schema | None = None
    # meta-data
    title: str = ""
    description: str = ""
    default: Any = None
    deprecated: bool = False
    read_only: bool = False
    write_only: bool = False
    examples: list[Any] | None = None

    extras: dict[str, Any] | None = None
    boolean: bool | None = field(default=None, repr=False)

    @classmethod
    def from_bool(cls, value: bool) -> Schema:
        """Return a fresh ``true`` or ``false`` literal schema."""
        return cls(boolean=value)

    @property
    def is_boolean(self) -> bool:
        return self.boolean is not None

    def is_empty(self) -> bool:
        """Return True when no keyword is set on a structured node."""
        return self.boolean is None and self == _EMPTY

    def clone(self) -> Schema:
        """Return a deep copy that shares no mutable state with this node."""
        cloned = Schema()
        for schema_field in fields(self):
            value = getattr(self, schema_field.name)
            if value is not None:
                setattr(cloned, schema_field.name, _clone_value(value))
        return cloned


Definitions = dict[str, Schema]

_EMPTY = Schema()

TRUE_SCHEMA = Schema(boolean=True)
FALSE_SCHEMA = Schema(boolean=False)


def _clone_value(value: Any) -> Any:
    if isinstance(value, Schema | Properties):
        return value.clone()
    if isinstance(value, list):
        return [_clone_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _clone_value(item) for key, item in value.items()}
    return value
