"""Struct field discovery for dataclass record types."""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cache
from typing import Any

from schema_reflector.type_inspection import (
    record_type,
    substitute_type_parameters,
    type_parameter_map,
)

EMBEDDED_METADATA_KEY = "embedded"


class StructFieldError(Exception):
    """Raised when the field types of a record cannot be resolved."""


@dataclass(frozen=True)
class StructField:
    """One field of a record type together with its annotation tags.

    ``tags`` maps a tag name (``json``, ``jsonschema``, ``jsonschema_extras``,
    ``jsonschema_description`` or any custom name tag) to its raw string.
    ``embedded`` marks an anonymous field whose own fields are inherited by
    the enclosing record.
    """

    name: str
    type: Any
    tags: Mapping[str, str] = field(default_factory=dict)
    embedded: bool = False

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")

    def tag(self, key: str) -> str:
        value = self.tags.get(key, "")
        return value if isinstance(value, str) else ""


@cache
def struct_fields(tp: Any) -> tuple[StructField, ...]:
    """Return the declared fields of a dataclass in declaration order.

    For a parameterization such as ``Box[int]`` the type arguments replace the
    type variables of the field annotations.
    """
    record = record_type(tp)
    try:
        hints = typing.get_type_hints(record)
    except (NameError, TypeError) as exc:
        raise StructFieldError(
            f"Cannot resolve field types of {record.__qualname__}: {exc}"
        ) from exc
    arguments = type_parameter_map(tp) if record is not tp else {}
    return tuple(
        StructField(
            name=declared.name,
            type=substitute_type_parameters(hints.get(declared.name, declared.type), arguments),
            tags={key: value for key, value in declared.metadata.items() if isinstance(value, str)},
            embedded=bool(declared.metadata.get(EMBEDDED_METADATA_KEY, False)),
        )
        for declared in dataclasses.fields(record)
    )
