"""Per-pass registry of named schema definitions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from schema_reflector.schema_model import Definitions, Schema
from schema_reflector.type_inspection import default_type_name

from .reflection_errors import CyclicTypeError

LOGGER = logging.getLogger(__name__)

DEFINITIONS_PREFIX = "#/$defs/"


class DefinitionRegistry:
    """Named definitions collected during one reflection pass.

    Types register under their display name before their fields are
    populated, so a type that refers back to itself resolves to a ``$ref``.
    With ``inline`` set nothing is ever registered and every type is expanded
    in place.
    """

    def __init__(self, namer: Callable[[Any], str] | None = None, *, inline: bool = False) -> None:
        self._namer = namer
        self._inline = inline
        self._definitions: Definitions = {}
        self._owners: dict[str, Any] = {}
        self._expanding: set[Any] = set()

    @property
    def definitions(self) -> Definitions:
        return self._definitions

    @property
    def inline(self) -> bool:
        return self._inline

    def display_name(self, tp: Any) -> str:
        if self._namer is not None:
            custom = self._namer(tp)
            if custom:
                return custom
        return default_type_name(tp)

    def register(self, tp: Any, schema: Schema) -> None:
        if self._inline:
            return
        name = self.display_name(tp)
        if not name:
            return
        previous = self._owners.get(name)
        if previous is not None and previous is not tp:
            LOGGER.debug("Definition %s of %r replaced by %r", name, previous, tp)
        self._owners[name] = tp
        self._definitions[name] = schema

    def reference(self, tp: Any) -> Schema | None:
        """Return a fresh ``$ref`` node when the type is already defined."""
        if self._inline:
            return None
        name = self.display_name(tp)
        if name and name in self._definitions:
            return Schema(ref=DEFINITIONS_PREFIX + name)
        return None

    def get(self, name: str) -> Schema | None:
        return self._definitions.get(name)

    def pop(self, name: str) -> Schema | None:
        self._owners.pop(name, None)
        return self._definitions.pop(name, None)

    @contextmanager
    def expanding(self, tp: Any) -> Iterator[None]:
        """Guard the expansion of a type against unbounded self-reference."""
        try:
            hash(tp)
        except TypeError:
            yield
            return
        if tp in self._expanding:
            raise CyclicTypeError(tp)
        self._expanding.add(tp)
        try:
            yield
        finally:
            self._expanding.discard(tp)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
