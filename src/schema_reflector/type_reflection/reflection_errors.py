"""Errors raised while reflecting a type into a schema."""

from __future__ import annotations

from typing import Any


class SchemaGenerationError(Exception):
    """Raised when a schema cannot be produced for a type."""


class UnsupportedTypeError(SchemaGenerationError):
    """Raised for a type whose structural kind has no schema rendition."""

    def __init__(self, tp: Any) -> None:
        super().__init__(f"Unsupported type: {tp!r}")
        self.type = tp


class CyclicTypeError(SchemaGenerationError):
    """Raised when a type refers back to itself and cannot be referenced by name."""

    def __init__(self, tp: Any) -> None:
        super().__init__(f"Type {tp!r} refers to itself and cannot be expanded inline")
        self.type = tp
