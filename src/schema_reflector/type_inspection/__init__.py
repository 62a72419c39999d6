"""Type inspection exports."""

from .type_shapes import (
    WELL_KNOWN_FORMATS,
    NoneType,
    SequenceShape,
    TypeKind,
    classify,
    common_json_type,
    default_type_name,
    dereference,
    enum_values,
    fully_qualified_type_name,
    is_dual_enum,
    is_dynamic,
    is_integer_key,
    is_struct_type,
    literal_values,
    mapping_types,
    module_path,
    record_type,
    sequence_shape,
    substitute_type_parameters,
    type_parameter_map,
    well_known_format,
)

__all__ = [
    "NoneType",
    "SequenceShape",
    "TypeKind",
    "WELL_KNOWN_FORMATS",
    "classify",
    "common_json_type",
    "default_type_name",
    "dereference",
    "enum_values",
    "fully_qualified_type_name",
    "is_dual_enum",
    "is_dynamic",
    "is_integer_key",
    "is_struct_type",
    "literal_values",
    "mapping_types",
    "module_path",
    "record_type",
    "sequence_shape",
    "substitute_type_parameters",
    "type_parameter_map",
    "well_known_format",
]
