"""Configuration loader service."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_reflector.doc_comments import CommentExtractionError
from schema_reflector.type_reflection import Reflector

from .runtime_settings import CacheSettings, Configuration, HookReferences, ReflectorOptions

LOGGER = logging.getLogger(__name__)

_OPTION_TOGGLES = (
    "anonymous",
    "assign_anchor",
    "allow_additional_properties",
    "required_from_jsonschema_tags",
    "do_not_reference",
    "expanded_struct",
)
_HOOK_NAMES = ("lookup", "mapper", "namer", "key_namer", "additional_fields", "lookup_comment")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        options=_parse_reflector_section(parsed.get("reflector")),
        hooks=_parse_hooks_section(parsed.get("hooks")),
        cache=_parse_cache_section(parsed.get("cache")),
    )


def build_reflector(configuration: Configuration) -> Reflector:
    """Create a reflector with every configured hook and ignored type imported."""
    options = configuration.options
    hooks: dict[str, Any] = {}
    for name in _HOOK_NAMES:
        reference = getattr(configuration.hooks, name)
        hook = resolve_import_path(reference) if reference else None
        if hook is not None and not callable(hook):
            raise ConfigurationError(f"hooks.{name} must reference a callable.")
        hooks[name] = hook

    reflector = Reflector(
        base_schema_id=options.base_schema_id,
        anonymous=options.anonymous,
        assign_anchor=options.assign_anchor,
        allow_additional_properties=options.allow_additional_properties,
        required_from_jsonschema_tags=options.required_from_jsonschema_tags,
        do_not_reference=options.do_not_reference,
        expanded_struct=options.expanded_struct,
        field_name_tag=options.field_name_tag,
        ignored_types=tuple(resolve_import_path(reference) for reference in options.ignored_types),
        comment_map=dict(options.comment_map) if options.comment_map else None,
        enable_schema_cache=configuration.cache.enabled,
        max_schema_cache_entries=configuration.cache.max_entries,
        **hooks,
    )
    if options.comment_modules:
        try:
            reflector.add_doc_comments(*options.comment_modules)
        except CommentExtractionError as exc:
            raise ConfigurationError(str(exc)) from exc
    LOGGER.debug("Reflector built from %s", configuration.path or "defaults")
    return reflector


def resolve_import_path(reference: str) -> Any:
    """Import ``package.module:Attribute.Nested`` and return the attribute."""
    module_name, separator, attribute_path = reference.partition(":")
    if not separator or not module_name.strip() or not attribute_path.strip():
        raise ConfigurationError(
            f"Import path '{reference}' must look like 'package.module:Attribute'."
        )
    try:
        resolved: Any = importlib.import_module(module_name.strip())
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module '{module_name}': {exc}") from exc
    for attribute in attribute_path.strip().split("."):
        try:
            resolved = getattr(resolved, attribute)
        except AttributeError as exc:
            raise ConfigurationError(
                f"'{attribute}' not found while resolving '{reference}'."
            ) from exc
    return resolved


def _parse_reflector_section(value: Any) -> ReflectorOptions:
    section = _optional_mapping(value, "reflector")
    toggles = {
        name: _require_bool(section.get(name, False), f"reflector.{name}")
        for name in _OPTION_TOGGLES
    }
    base_schema_id = _optional_string(section.get("base_schema_id"), "reflector.base_schema_id")
    field_name_tag = _optional_string(section.get("field_name_tag"), "reflector.field_name_tag")
    comment_map = _optional_mapping(section.get("comment_map"), "reflector.comment_map")
    for key, text in comment_map.items():
        if not isinstance(key, str) or not isinstance(text, str):
            raise ConfigurationError("reflector.comment_map entries must map strings to strings.")
    return ReflectorOptions(
        base_schema_id=base_schema_id or "",
        field_name_tag=field_name_tag or "json",
        ignored_types=_normalize_string_sequence(
            section.get("ignored_types"), "reflector.ignored_types"
        ),
        comment_modules=_normalize_string_sequence(
            section.get("comment_modules"), "reflector.comment_modules"
        ),
        comment_map=dict(comment_map),
        **toggles,
    )


def _parse_hooks_section(value: Any) -> HookReferences:
    section = _optional_mapping(value, "hooks")
    unknown = sorted(set(section) - set(_HOOK_NAMES))
    if unknown:
        raise ConfigurationError(f"Unknown hooks: {', '.join(map(str, unknown))}.")
    return HookReferences(
        **{name: _optional_string(section.get(name), f"hooks.{name}") for name in _HOOK_NAMES}
    )


def _parse_cache_section(value: Any) -> CacheSettings:
    section = _optional_mapping(value, "cache")
    enabled = _require_bool(section.get("enabled", False), "cache.enabled")
    max_entries = _require_non_negative_int(section.get("max_entries", 0), "cache.max_entries")
    return CacheSettings(enabled=enabled, max_entries=max_entries)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _optional_mapping(value: Any, section_name: str) -> Mapping[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
