"""Reflect Python types into JSON Schema node trees."""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, get_args

from schema_reflector.doc_comments import collect_doc_comments
from schema_reflector.field_annotations import (
    DEFAULT_NAME_TAG,
    FieldTags,
    StructField,
    StructFieldError,
    apply_struct_keywords,
    field_tags_for_type,
    parse_field_tags,
    resolve_field_naming,
    struct_fields,
)
from schema_reflector.schema_model import VERSION, Properties, Schema, SchemaID, to_snake_case
from schema_reflector.type_inspection import (
    TypeKind,
    classify,
    common_json_type,
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
    well_known_format,
)

from .capabilities import (
    alias_type,
    extend_schema,
    field_doc_string,
    property_alias,
    provided_schema,
)
from .definition_registry import DefinitionRegistry
from .reflection_errors import SchemaGenerationError, UnsupportedTypeError
from .schema_cache import CacheKey, SchemaCache, fingerprint_options

LOGGER = logging.getLogger(__name__)

INTEGER_KEY_PATTERN = "^[0-9]+$"

_SCALAR_TYPES = {
    TypeKind.INTEGER: "integer",
    TypeKind.NUMBER: "number",
    TypeKind.BOOLEAN: "boolean",
    TypeKind.STRING: "string",
    TypeKind.NULL: "null",
}


@dataclass
class Reflector:  # pylint: disable=too-many-instance-attributes
    """Options and hooks controlling how types become schemas.

    A reflector may be shared between threads as long as its options are not
    changed while calls are in flight. With ``enable_schema_cache`` set,
    results are memoized per type and option fingerprint; hooks are compared
    by identity, so keep them referentially stable.
    """

    base_schema_id: str = ""
    anonymous: bool = False
    assign_anchor: bool = False
    allow_additional_properties: bool = False
    required_from_jsonschema_tags: bool = False
    do_not_reference: bool = False
    expanded_struct: bool = False
    field_name_tag: str = DEFAULT_NAME_TAG
    ignored_types: Sequence[Any] = ()
    lookup: Callable[[Any], str] | None = None
    mapper: Callable[[Any], Schema | None] | None = None
    namer: Callable[[Any], str] | None = None
    key_namer: Callable[[str], str] | None = None
    additional_fields: Callable[[Any], Sequence[StructField] | None] | None = None
    lookup_comment: Callable[[Any, str], str] | None = None
    comment_map: dict[str, str] | None = None
    enable_schema_cache: bool = False
    max_schema_cache_entries: int = 0
    _schema_cache: SchemaCache | None = field(default=None, init=False, repr=False, compare=False)
    _cache_lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def reflect(self, value: Any) -> Schema:
        """Reflect the type of ``value``."""
        return self.reflect_from_type(type(value))

    def reflect_from_type(self, tp: Any) -> Schema:
        """Return the root schema of ``tp`` with its definitions attached."""
        tp = dereference(tp)

        cache_key = self._cache_key(tp) if self.enable_schema_cache else None
        if cache_key is not None:
            cached = self._cache().load(cache_key)
            if cached is not None:
                return cached

        registry = DefinitionRegistry(self.namer, inline=self.do_not_reference)
        name = registry.display_name(tp)
        try:
            resolved = self._reflect_with_id(registry, tp)
        except StructFieldError as exc:
            raise SchemaGenerationError(str(exc)) from exc

        root = resolved
        if self.expanded_struct and name:
            root = registry.pop(name) or resolved
        root = copy.copy(root)

        if not self.anonymous and not root.id:
            base = SchemaID(self.base_schema_id)
            if not base:
                candidate = SchemaID("https://" + module_path(tp))
                if candidate.is_valid():
                    base = candidate
            if base:
                root.id = base.add(to_snake_case(name))

        root.version = VERSION
        if not self.do_not_reference:
            root.definitions = registry.definitions

        if cache_key is not None:
            self._cache().store(cache_key, root)
        return root

    def add_doc_comments(self, *modules: ModuleType | str) -> None:
        """Merge class and attribute docstrings of ``modules`` into ``comment_map``."""
        if self.comment_map is None:
            self.comment_map = {}
        self.comment_map.update(collect_doc_comments(*modules))

    def _ref_or_reflect(self, registry: DefinitionRegistry, tp: Any) -> Schema:
        tp = dereference(tp)
        if self.lookup is not None:
            schema_id = self.lookup(tp)
            if schema_id:
                return Schema(ref=str(schema_id))
        reference = registry.reference(tp)
        if reference is not None:
            return reference
        return self._reflect_with_id(registry, tp)

    def _reflect_with_id(self, registry: DefinitionRegistry, tp: Any) -> Schema:
        schema = self._reflect_type(registry, tp)
        if self.lookup is not None:
            schema_id = self.lookup(tp)
            if schema_id:
                schema.id = str(schema_id)
        return schema

    def _reflect_type(  # pylint: disable=too-many-return-statements,too-many-branches
        self, registry: DefinitionRegistry, tp: Any
    ) -> Schema:
        tp = dereference(tp)

        alias = alias_type(tp)
        if alias is not None:
            return self._ref_or_reflect(registry, _as_type(alias))

        if self.mapper is not None:
            mapped = self.mapper(tp)
            if mapped is not None:
                return mapped

        provided = provided_schema(tp)
        if provided is not None:
            registry.register(tp, provided)
            reference = registry.reference(tp)
            return reference if reference is not None else provided

        if is_dual_enum(tp):
            return Schema(one_of=[Schema(type="string"), Schema(type="integer")])
        string_format = well_known_format(tp)
        if string_format:
            return Schema(type="string", format=string_format)

        schema = Schema()
        kind = classify(tp)
        if kind is TypeKind.STRUCT:
            with registry.expanding(tp):
                self._reflect_struct(registry, tp, schema)
        elif kind in (TypeKind.SEQUENCE, TypeKind.FIXED_ARRAY):
            with registry.expanding(tp):
                self._reflect_sequence(registry, tp, schema)
        elif kind is TypeKind.MAP:
            with registry.expanding(tp):
                self._reflect_map(registry, tp, schema)
        elif kind is TypeKind.DYNAMIC:
            pass
        elif kind in _SCALAR_TYPES:
            schema.type = _SCALAR_TYPES[kind]
        elif kind is TypeKind.UNION:
            schema.any_of = [self._ref_or_reflect(registry, member) for member in get_args(tp)]
        elif kind in (TypeKind.LITERAL, TypeKind.ENUM):
            values = literal_values(tp) if kind is TypeKind.LITERAL else enum_values(tp)
            schema.enum = values
            schema.type = common_json_type(values)
        else:
            raise UnsupportedTypeError(tp)

        extend_schema(tp, schema)
        # the type may have been registered while it was being built
        reference = registry.reference(tp)
        if reference is not None:
            return reference
        return schema

    def _reflect_struct(self, registry: DefinitionRegistry, tp: Any, schema: Schema) -> None:
        registry.register(tp, schema)
        schema.type = "object"
        schema.properties = Properties(capacity=len(struct_fields(tp)))
        schema.description = self._lookup_comment(tp, "")
        if self.assign_anchor:
            schema.anchor = record_type(tp).__name__
        if not self.allow_additional_properties and schema.additional_properties is None:
            schema.additional_properties = Schema.from_bool(False)
        if not self._is_ignored(tp):
            self._reflect_struct_fields(registry, tp, schema, frozenset())

    def _reflect_struct_fields(
        self,
        registry: DefinitionRegistry,
        tp: Any,
        schema: Schema,
        seen: frozenset[Any],
    ) -> None:
        tp = dereference(tp)
        if not is_struct_type(tp) or tp in seen:
            return
        seen = seen | {tp}
        if schema.required is None:
            schema.required = []

        for declared, tags in zip(struct_fields(tp), field_tags_for_type(tp, self.field_name_tag)):
            self._reflect_field(registry, tp, schema, declared, tags, seen)
        if self.additional_fields is not None:
            for extra in self.additional_fields(tp) or ():
                tags = parse_field_tags(extra, self.field_name_tag)
                self._reflect_field(registry, tp, schema, extra, tags, seen)

    def _reflect_field(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        registry: DefinitionRegistry,
        owner: Any,
        schema: Schema,
        declared: StructField,
        tags: FieldTags,
        seen: frozenset[Any],
    ) -> None:
        naming = resolve_field_naming(
            declared,
            tags,
            required_from_jsonschema_tags=self.required_from_jsonschema_tags,
            key_namer=self.key_namer,
        )
        if not naming.name:
            if naming.embed:
                # embedded records contribute their fields to the enclosing object
                self._reflect_struct_fields(registry, declared.type, schema, seen)
            return

        alias = property_alias(owner, naming.name)
        property_type = _as_type(alias) if alias is not None else declared.type
        prop = self._ref_or_reflect(registry, property_type)

        apply_struct_keywords(prop, tags, schema, naming.name)
        if not prop.description:
            prop.description = self._lookup_comment(owner, declared.name)
        documented = field_doc_string(owner, declared.name)
        if documented is not None:
            prop.description = documented

        if naming.nullable:
            prop = Schema(one_of=[prop, Schema(type="null")])

        if schema.properties is None:
            schema.properties = Properties()
        schema.properties.set(naming.name, prop)
        required = schema.required if schema.required is not None else []
        if naming.required and naming.name not in required:
            required.append(naming.name)
        schema.required = required

    def _reflect_sequence(self, registry: DefinitionRegistry, tp: Any, schema: Schema) -> None:
        registry.register(tp, schema)
        if not schema.description:
            schema.description = self._lookup_comment(tp, "")

        shape = sequence_shape(tp)
        if shape.length is not None:
            schema.min_items = shape.length
            schema.max_items = shape.length
        if shape.binary:
            schema.type = "string"
            schema.content_encoding = "base64"
            return

        schema.type = "array"
        if shape.prefix:
            schema.prefix_items = [
                self._ref_or_reflect(registry, member) for member in shape.prefix
            ]
            schema.items = Schema.from_bool(False)
        else:
            schema.items = self._ref_or_reflect(registry, shape.element)
        if shape.unique:
            schema.unique_items = True

    def _reflect_map(self, registry: DefinitionRegistry, tp: Any, schema: Schema) -> None:
        registry.register(tp, schema)
        schema.type = "object"
        if not schema.description:
            schema.description = self._lookup_comment(tp, "")

        key_type, value_type = mapping_types(tp)
        if is_integer_key(key_type):
            schema.pattern_properties = {
                INTEGER_KEY_PATTERN: self._ref_or_reflect(registry, value_type)
            }
            schema.additional_properties = Schema.from_bool(False)
            return
        if not is_dynamic(value_type):
            schema.additional_properties = self._ref_or_reflect(registry, value_type)

    def _lookup_comment(self, tp: Any, field_name: str) -> str:
        if self.lookup_comment is not None:
            found = self.lookup_comment(tp, field_name)
            if found:
                return found
        if not self.comment_map:
            return ""
        key = comment_key(tp, field_name)
        return self.comment_map.get(key, "") if key else ""

    def _is_ignored(self, tp: Any) -> bool:
        record = record_type(tp)
        for ignored in self.ignored_types:
            if ignored is tp or ignored is record or (not isinstance(ignored, type) and type(ignored) is tp):
                return True
        return False

    def _cache_key(self, tp: Any) -> CacheKey | None:
        try:
            hash(tp)
        except TypeError:
            LOGGER.debug("Type %r is not hashable, schema cache skipped", tp)
            return None
        return CacheKey(type=tp, fingerprint=self._fingerprint())

    def _fingerprint(self) -> int:
        return fingerprint_options(
            toggles=(
                self.anonymous,
                self.assign_anchor,
                self.allow_additional_properties,
                self.required_from_jsonschema_tags,
                self.do_not_reference,
                self.expanded_struct,
            ),
            texts=(
                str(self.base_schema_id),
                self.field_name_tag or DEFAULT_NAME_TAG,
                str(len(self.ignored_types)),
            ),
            hooks=(
                self.lookup,
                self.mapper,
                self.namer,
                self.key_namer,
                self.additional_fields,
                self.lookup_comment,
                *self.ignored_types,
            ),
            comment_map=self.comment_map,
        )

    def _cache(self) -> SchemaCache:
        with self._cache_lock:
            if self._schema_cache is None:
                self._schema_cache = SchemaCache(self.max_schema_cache_entries)
            return self._schema_cache


def reflect(value: Any) -> Schema:
    """Reflect the type of ``value`` with default options."""
    return Reflector().reflect(value)


def reflect_from_type(tp: Any) -> Schema:
    """Reflect ``tp`` with default options."""
    return Reflector().reflect_from_type(tp)


def _as_type(substitute: Any) -> Any:
    # hooks may hand back either a type or a representative value
    if isinstance(substitute, type):
        return substitute
    if classify(dereference(substitute)) is not TypeKind.UNSUPPORTED:
        return substitute
    return type(substitute)


def comment_key(tp: Any, field_name: str = "") -> str:
    """Return the comment map key of a type or one of its fields."""
    key = fully_qualified_type_name(tp)
    return f"{key}.{field_name}" if key and field_name else key
