"""Type reflection exports."""

from .capabilities import (
    AliasesProperty,
    AliasesType,
    DocumentsFields,
    ExtendsSchema,
    ProvidesSchema,
)
from .definition_registry import DEFINITIONS_PREFIX, DefinitionRegistry
from .reflection_errors import CyclicTypeError, SchemaGenerationError, UnsupportedTypeError
from .reflector import Reflector, comment_key, reflect, reflect_from_type
from .schema_cache import CacheKey, SchemaCache, fingerprint_options

__all__ = [
    "AliasesProperty",
    "AliasesType",
    "CacheKey",
    "CyclicTypeError",
    "DEFINITIONS_PREFIX",
    "DefinitionRegistry",
    "DocumentsFields",
    "ExtendsSchema",
    "ProvidesSchema",
    "Reflector",
    "SchemaCache",
    "SchemaGenerationError",
    "UnsupportedTypeError",
    "comment_key",
    "fingerprint_options",
    "reflect",
    "reflect_from_type",
]
