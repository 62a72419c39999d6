"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ReflectorOptions:  # pylint: disable=too-many-instance-attributes
    """Reflector toggles and documentation sources."""

    base_schema_id: str = ""
    anonymous: bool = False
    assign_anchor: bool = False
    allow_additional_properties: bool = False
    required_from_jsonschema_tags: bool = False
    do_not_reference: bool = False
    expanded_struct: bool = False
    field_name_tag: str = "json"
    ignored_types: tuple[str, ...] = ()
    comment_modules: tuple[str, ...] = ()
    comment_map: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HookReferences:
    """Import paths (``package.module:attribute``) of optional reflector hooks."""

    lookup: str | None = None
    mapper: str | None = None
    namer: str | None = None
    key_namer: str | None = None
    additional_fields: str | None = None
    lookup_comment: str | None = None


@dataclass(frozen=True)
class CacheSettings:
    """Schema memoization settings."""

    enabled: bool = False
    max_entries: int = 0


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    options: ReflectorOptions
    hooks: HookReferences
    cache: CacheSettings
