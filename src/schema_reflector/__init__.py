"""Reflect Python types into JSON Schema documents."""

import logging

from .schema_model import Schema, dump_schema
from .type_reflection import Reflector, reflect, reflect_from_type

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["Reflector", "Schema", "dump_schema", "reflect", "reflect_from_type"]
