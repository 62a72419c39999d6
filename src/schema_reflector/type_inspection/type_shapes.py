"""Structural classification of Python type descriptors."""

from __future__ import annotations

import dataclasses
import datetime
import ipaddress
import types
import typing
import uuid
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum, IntFlag
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin
from urllib.parse import ParseResult, SplitResult

NoneType = type(None)

# container and builtin types from these modules never get a display name
_UNNAMED_MODULES = frozenset({"builtins", "typing", "collections", "collections.abc"})

WELL_KNOWN_FORMATS: Mapping[Any, str] = {
    datetime.datetime: "date-time",
    datetime.date: "date",
    datetime.time: "time",
    ipaddress.IPv4Address: "ipv4",
    ipaddress.IPv6Address: "ipv6",
    uuid.UUID: "uuid",
    ParseResult: "uri",
    SplitResult: "uri",
}

_JSON_TYPES: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "number"),
    (str, "string"),
    (NoneType, "null"),
)


class TypeKind(str, Enum):
    """Structural kinds the reflector knows how to render."""

    STRUCT = "struct"
    SEQUENCE = "sequence"
    FIXED_ARRAY = "fixed_array"
    MAP = "map"
    DYNAMIC = "dynamic"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    NULL = "null"
    UNION = "union"
    LITERAL = "literal"
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class SequenceShape:
    """Element layout of a sequence type."""

    element: Any
    length: int | None = None
    prefix: tuple[Any, ...] = ()
    unique: bool = False
    binary: bool = False


def is_struct_type(tp: Any) -> bool:
    """Return True for dataclass classes and their parameterizations (not instances)."""
    record = record_type(tp)
    return isinstance(record, type) and dataclasses.is_dataclass(record)


def record_type(tp: Any) -> Any:
    """Return the generic class behind a parameterization such as ``Box[int]``."""
    origin = get_origin(tp)
    return origin if isinstance(origin, type) else tp


def type_parameter_map(tp: Any) -> dict[Any, Any]:
    """Map the type parameters of a parameterized class to its arguments."""
    origin = get_origin(tp)
    parameters = getattr(origin, "__parameters__", None) or getattr(origin, "__type_params__", ())
    return dict(zip(parameters, get_args(tp)))


def substitute_type_parameters(hint: Any, mapping: Mapping[Any, Any]) -> Any:
    """Replace type variables inside ``hint``, so ``list[T]`` becomes ``list[int]``."""
    if not mapping:
        return hint
    if isinstance(hint, TypeVar):
        return mapping.get(hint, hint)
    parameters = getattr(hint, "__parameters__", ())
    if not parameters or isinstance(hint, type):
        return hint
    return hint[tuple(mapping.get(parameter, parameter) for parameter in parameters)]


def dereference(tp: Any) -> Any:
    """Strip optional, ``NewType``, ``Annotated`` and ``type`` alias wrappers."""
    while True:
        if get_origin(tp) is Annotated:
            tp = get_args(tp)[0]
            continue
        if _is_union(tp):
            members = get_args(tp)
            present = tuple(member for member in members if member is not NoneType)
            if len(present) == len(members) or not present:
                return tp
            if len(present) == 1:
                tp = present[0]
                continue
            return Union[present]
        supertype = getattr(tp, "__supertype__", None)
        if supertype is not None:
            tp = supertype
            continue
        aliased = _type_alias_value(tp)
        if aliased is not None:
            tp = aliased
            continue
        return tp


def classify(tp: Any) -> TypeKind:  # pylint: disable=too-many-return-statements
    """Return the structural kind of a dereferenced type."""
    if tp is Any or tp is object or isinstance(tp, TypeVar):
        return TypeKind.DYNAMIC
    if tp is NoneType or tp is None:
        return TypeKind.NULL
    origin = get_origin(tp)
    if origin is Literal:
        return TypeKind.LITERAL
    if _is_union(tp):
        return TypeKind.UNION
    container = origin if origin is not None else tp
    if not isinstance(container, type):
        return TypeKind.UNSUPPORTED
    if is_struct_type(container):
        return TypeKind.STRUCT
    if issubclass(container, Enum):
        return TypeKind.ENUM
    if issubclass(container, bool):
        return TypeKind.BOOLEAN
    if issubclass(container, int):
        return TypeKind.INTEGER
    if issubclass(container, float | Decimal):
        return TypeKind.NUMBER
    if issubclass(container, str):
        return TypeKind.STRING
    if issubclass(container, bytes | bytearray):
        return TypeKind.SEQUENCE
    if issubclass(container, tuple) and _fixed_tuple_args(tp) is not None:
        return TypeKind.FIXED_ARRAY
    if issubclass(container, Mapping):
        return TypeKind.MAP
    if issubclass(container, Sequence) or issubclass(container, Set):
        return TypeKind.SEQUENCE
    return TypeKind.UNSUPPORTED


def is_dual_enum(tp: Any) -> bool:
    """Integer enumerations accept either their member name or their number."""
    if get_origin(tp) is not None or not isinstance(tp, type):
        return False
    return issubclass(tp, IntEnum | IntFlag)


def well_known_format(tp: Any) -> str:
    if not isinstance(tp, type):
        return ""
    return WELL_KNOWN_FORMATS.get(tp, "")


def sequence_shape(tp: Any) -> SequenceShape:
    """Describe the elements of a sequence or fixed-length tuple type."""
    container = get_origin(tp) or tp
    if issubclass(container, bytes | bytearray):
        return SequenceShape(element=int, binary=True)
    fixed = _fixed_tuple_args(tp)
    if fixed == ():
        return SequenceShape(element=Any, length=0)
    if fixed is not None:
        if all(member == fixed[0] for member in fixed):
            return SequenceShape(element=fixed[0], length=len(fixed))
        return SequenceShape(element=Any, length=len(fixed), prefix=fixed)
    args = get_args(tp) if get_origin(tp) is not None else _generic_base_args(tp, Sequence, Set)
    return SequenceShape(
        element=args[0] if args else Any,
        unique=issubclass(container, Set),
    )


def mapping_types(tp: Any) -> tuple[Any, Any]:
    """Return ``(key type, value type)`` of a mapping type."""
    args = get_args(tp) if get_origin(tp) is not None else _generic_base_args(tp, Mapping)
    if len(args) == 2:
        return args[0], args[1]
    return Any, Any


def is_integer_key(tp: Any) -> bool:
    tp = dereference(tp)
    return isinstance(tp, type) and issubclass(tp, int) and not issubclass(tp, bool)


def is_dynamic(tp: Any) -> bool:
    return classify(dereference(tp)) is TypeKind.DYNAMIC


def literal_values(tp: Any) -> list[Any]:
    # enum members used as literals are rendered by value
    return [value.value if isinstance(value, Enum) else value for value in get_args(tp)]


def enum_values(tp: type[Enum]) -> list[Any]:
    return [member.value for member in tp]


def common_json_type(values: Sequence[Any]) -> str:
    """Return the JSON type shared by every value, or an empty string."""
    found = {_json_type_of(value) for value in values}
    if len(found) == 1:
        return found.pop()
    return ""


def default_type_name(tp: Any) -> str:
    """Return the display name of a named class; generics and builtins have none.

    Parameterized records are named after their arguments, as in ``Box[int]``.
    """
    if is_struct_type(tp) and get_origin(tp) is not None:
        return _argument_name(tp)
    if get_origin(tp) is not None or not isinstance(tp, type):
        return ""
    if tp.__module__ in _UNNAMED_MODULES:
        return ""
    return tp.__name__


def fully_qualified_type_name(tp: Any) -> str:
    tp = record_type(tp)
    if not isinstance(tp, type):
        return ""
    return f"{tp.__module__}.{tp.__qualname__}"


def module_path(tp: Any) -> str:
    tp = record_type(tp)
    if not isinstance(tp, type) or tp.__module__ in _UNNAMED_MODULES:
        return ""
    return tp.__module__.replace(".", "/")


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def _fixed_tuple_args(tp: Any) -> tuple[Any, ...] | None:
    # bare ``Tuple`` is variable length, ``tuple[()]`` is the empty fixed tuple
    if get_origin(tp) is not tuple or tp is typing.Tuple:
        return None
    args = get_args(tp)
    if len(args) == 2 and args[1] is Ellipsis:
        return None
    return args


def _type_alias_value(tp: Any) -> Any | None:
    # ``type X = ...`` aliases, bare or parameterized
    if isinstance(tp, type):
        return None
    origin = get_origin(tp)
    if origin is None:
        return getattr(tp, "__value__", None)
    if isinstance(origin, type) or not hasattr(origin, "__value__"):
        return None
    return substitute_type_parameters(origin.__value__, type_parameter_map(tp))


def _argument_name(tp: Any) -> str:
    if _is_union(tp):
        return "|".join(_argument_name(member) for member in get_args(tp))
    origin = get_origin(tp)
    if origin is not None:
        arguments = ",".join(_argument_name(argument) for argument in get_args(tp))
        return f"{getattr(origin, '__name__', repr(origin))}[{arguments}]"
    return getattr(tp, "__name__", repr(tp))


def _generic_base_args(tp: Any, *targets: type) -> tuple[Any, ...]:
    # named subclasses such as ``class Tags(list[str])`` carry their
    # parameters on __orig_bases__
    for klass in getattr(tp, "__mro__", ()):
        for base in klass.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if isinstance(origin, type) and issubclass(origin, targets):
                return get_args(base)
    return ()


def _json_type_of(value: Any) -> str:
    for python_type, json_type in _JSON_TYPES:
        if isinstance(value, python_type):
            return json_type
    return ""
