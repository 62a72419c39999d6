"""Field annotation exports."""

from .keyword_application import (
    apply_extra_keywords,
    apply_struct_keywords,
    parse_bool,
    parse_number,
    parse_uint,
    set_extra,
)
from .struct_fields import EMBEDDED_METADATA_KEY, StructField, StructFieldError, struct_fields
from .tag_parsing import (
    DEFAULT_NAME_TAG,
    DESCRIPTION_TAG,
    EXTRAS_TAG,
    SCHEMA_TAG,
    FieldNaming,
    FieldTags,
    clear_field_tags_cache,
    field_tags_for_type,
    parse_field_tags,
    resolve_field_naming,
    split_on_unescaped_commas,
)

__all__ = [
    "DEFAULT_NAME_TAG",
    "DESCRIPTION_TAG",
    "EMBEDDED_METADATA_KEY",
    "EXTRAS_TAG",
    "FieldNaming",
    "FieldTags",
    "SCHEMA_TAG",
    "StructField",
    "StructFieldError",
    "apply_extra_keywords",
    "apply_struct_keywords",
    "clear_field_tags_cache",
    "field_tags_for_type",
    "parse_bool",
    "parse_field_tags",
    "parse_number",
    "parse_uint",
    "resolve_field_naming",
    "set_extra",
    "split_on_unescaped_commas",
    "struct_fields",
]
