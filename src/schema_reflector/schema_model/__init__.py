"""Schema model exports."""

from .ordered_properties import Properties
from .schema_ids import EMPTY_ID, SchemaID, SchemaIDError, to_snake_case
from .schema_nodes import FALSE_SCHEMA, TRUE_SCHEMA, VERSION, Definitions, Schema
from .schema_serialization import (
    SchemaDecodeError,
    dump_schema,
    load_schema,
    schema_from_dict,
    schema_to_dict,
)

__all__ = [
    "Definitions",
    "EMPTY_ID",
    "FALSE_SCHEMA",
    "Properties",
    "Schema",
    "SchemaDecodeError",
    "SchemaID",
    "SchemaIDError",
    "TRUE_SCHEMA",
    "VERSION",
    "dump_schema",
    "load_schema",
    "schema_from_dict",
    "schema_to_dict",
    "to_snake_case",
]
