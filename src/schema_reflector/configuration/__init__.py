"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, build_reflector, load_configuration, resolve_import_path
from .runtime_settings import CacheSettings, Configuration, HookReferences, ReflectorOptions

__all__ = [
    "CacheSettings",
    "Configuration",
    "HookReferences",
    "ReflectorOptions",
    "ConfigurationError",
    "build_reflector",
    "load_configuration",
    "resolve_import_path",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
