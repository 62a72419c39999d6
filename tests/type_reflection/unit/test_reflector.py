"""Type reflection tests."""

from __future__ import annotations

import dataclasses
import datetime
import sys
import typing
import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Generic, Literal, TypeVar

import pytest
from schema_reflector.field_annotations import StructField
from schema_reflector.schema_model import VERSION, Schema, schema_to_dict
from schema_reflector.type_reflection import (
    CyclicTypeError,
    Reflector,
    SchemaGenerationError,
    UnsupportedTypeError,
    comment_key,
    reflect,
    reflect_from_type,
)


@dataclass
class Address:
    street: str
    city: str = field(default="", metadata={"json": "city,omitempty"})


@dataclass
class User:
    name: str = field(metadata={"jsonschema": "minLength=1"})
    age: int = field(default=0, metadata={"json": "age,omitempty", "jsonschema": "minimum=0"})
    address: Address | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class TreeNode:
    value: int
    children: list[TreeNode] = field(default_factory=list)
    parent: TreeNode | None = None


@dataclass
class Employee:
    name: str
    manager: Manager | None = None


@dataclass
class Manager:
    reports: list[Employee] = field(default_factory=list)


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Labels(list[str]):
    pass


@dataclass
class Shapes:  # pylint: disable=too-many-instance-attributes
    payload: bytes
    point: tuple[float, float]
    pair: tuple[str, int]
    unique: set[str]
    counts: dict[str, int]
    by_index: dict[int, str]
    anything: dict[str, Any]
    dynamic: Any
    choice: int | str
    mode: Literal["fast", "slow"]
    color: Color
    priority: Priority
    created: datetime.datetime
    identifier: uuid.UUID
    labels: Labels


@dataclass
class Timestamps:
    created: datetime.datetime
    updated: datetime.datetime | None = field(
        default=None, metadata={"json": "updated,omitempty"}
    )


@dataclass
class Article:
    timestamps: Timestamps = field(metadata={"embedded": True})
    title: str = ""


@dataclass
class Post:
    body: str
    stamps: Timestamps | None = field(default=None, metadata={"json": ",inline"})


@dataclass
class Profile:
    nickname: str | None = field(default=None, metadata={"jsonschema": "nullable"})
    email: str = field(default="", metadata={"jsonschema": "required"})
    website: str = field(default="", metadata={"json": "website,omitempty"})


@dataclass
class Money:
    amount: int

    @classmethod
    def json_schema(cls) -> Schema:
        return Schema(type="string", pattern="^[0-9]+$")


@dataclass
class Product:
    sku: str

    @classmethod
    def json_schema_extend(cls, schema: Schema) -> None:
        schema.title = "Product"
        schema.min_properties = 1


class LegacyId:
    @classmethod
    def json_schema_alias(cls) -> Any:
        return str


@dataclass
class Flexible:
    value: str

    @classmethod
    def json_schema_property(cls, name: str) -> Any:
        return int if name == "value" else None


@dataclass
class Documented:
    title: str = field(metadata={"jsonschema_description": "Ignored by the doc hook."})

    @classmethod
    def get_field_doc_string(cls, field_name: str) -> str:
        return f"The {field_name}."


@dataclass
class Order:
    price: Money
    product: Product
    legacy: LegacyId
    flexible: Flexible
    documented: Documented


@dataclass
class Unsupported:
    value: complex


T = TypeVar("T")


@dataclass
class Box(Generic[T]):
    value: T
    history: list[T] = field(default_factory=list)


@dataclass
class Holder:
    boxed: Box[int]
    labelled: Box[str] | None = field(default=None, metadata={"json": "labelled,omitempty"})


@dataclass
class GenericNode(Generic[T]):
    value: T
    children: list[GenericNode[T]] = field(default_factory=list)


@dataclass
class Unit:
    nothing: tuple[()]


def _document(schema: Schema) -> Any:
    return schema_to_dict(schema)


def _definitions(schema: Schema) -> dict[str, Any]:
    document = _document(schema)
    assert isinstance(document, dict)
    return document["$defs"]


def test_struct_is_referenced_from_root_and_defined_once() -> None:
    document = _document(reflect_from_type(User))

    assert document == {
        "$schema": VERSION,
        "$ref": "#/$defs/User",
        "$defs": {
            "User": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "age": {"type": "integer", "minimum": 0},
                    "address": {"$ref": "#/$defs/Address"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "additionalProperties": False,
                "required": ["name", "address", "tags"],
            },
            "Address": {
                "type": "object",
                "properties": {"street": {"type": "string"}, "city": {"type": "string"}},
                "additionalProperties": False,
                "required": ["street"],
            },
        },
    }


def test_reflecting_twice_yields_equal_trees() -> None:
    reflector = Reflector()

    assert reflector.reflect_from_type(User) == reflector.reflect_from_type(User)
    assert reflect(User(name="x")) == reflect_from_type(User)


def test_base_schema_id_names_the_root() -> None:
    schema = Reflector(base_schema_id="https://example.com/schemas/").reflect_from_type(User)

    assert schema.id == "https://example.com/schemas/user"


def test_anonymous_root_has_no_id() -> None:
    schema = Reflector(
        base_schema_id="https://example.com/schemas", anonymous=True
    ).reflect_from_type(User)

    assert schema.id == ""


def test_self_reference_terminates_with_ref_cycle() -> None:
    definitions = _definitions(reflect_from_type(TreeNode))

    node = definitions["TreeNode"]
    assert node["properties"]["children"] == {
        "type": "array",
        "items": {"$ref": "#/$defs/TreeNode"},
    }
    assert node["properties"]["parent"] == {"$ref": "#/$defs/TreeNode"}
    assert list(definitions) == ["TreeNode"]


def test_mutual_reference_terminates() -> None:
    definitions = _definitions(reflect_from_type(Employee))

    assert definitions["Employee"]["properties"]["manager"] == {"$ref": "#/$defs/Manager"}
    assert definitions["Manager"]["properties"]["reports"]["items"] == {
        "$ref": "#/$defs/Employee"
    }


def test_inline_mode_expands_nested_records_without_definitions() -> None:
    document = _document(Reflector(do_not_reference=True).reflect_from_type(User))

    assert "$defs" not in document
    assert "$ref" not in document
    assert document["type"] == "object"
    assert document["properties"]["address"]["properties"]["street"] == {"type": "string"}


def test_inline_mode_rejects_cycles() -> None:
    with pytest.raises(CyclicTypeError):
        Reflector(do_not_reference=True).reflect_from_type(TreeNode)


def test_expanded_struct_moves_root_definition_to_top_level() -> None:
    document = _document(Reflector(expanded_struct=True).reflect_from_type(User))

    assert document["type"] == "object"
    assert "name" in document["properties"]
    assert list(document["$defs"]) == ["Address"]


def test_structural_kinds() -> None:
    definitions = _definitions(reflect_from_type(Shapes))
    properties = definitions["Shapes"]["properties"]

    assert properties["payload"] == {"type": "string", "contentEncoding": "base64"}
    assert properties["point"] == {
        "type": "array",
        "items": {"type": "number"},
        "minItems": 2,
        "maxItems": 2,
    }
    assert properties["pair"] == {
        "type": "array",
        "prefixItems": [{"type": "string"}, {"type": "integer"}],
        "items": False,
        "minItems": 2,
        "maxItems": 2,
    }
    assert properties["unique"] == {
        "type": "array",
        "items": {"type": "string"},
        "uniqueItems": True,
    }
    assert properties["counts"] == {
        "type": "object",
        "additionalProperties": {"type": "integer"},
    }
    assert properties["by_index"] == {
        "type": "object",
        "patternProperties": {"^[0-9]+$": {"type": "string"}},
        "additionalProperties": False,
    }
    assert properties["anything"] == {"type": "object"}
    assert properties["dynamic"] is True
    assert properties["choice"] == {"anyOf": [{"type": "integer"}, {"type": "string"}]}
    assert properties["mode"] == {"type": "string", "enum": ["fast", "slow"]}
    assert properties["color"] == {"type": "string", "enum": ["red", "green"]}
    assert properties["priority"] == {"oneOf": [{"type": "string"}, {"type": "integer"}]}
    assert properties["created"] == {"type": "string", "format": "date-time"}
    assert properties["identifier"] == {"type": "string", "format": "uuid"}
    assert properties["labels"] == {"$ref": "#/$defs/Labels"}
    assert definitions["Labels"] == {"type": "array", "items": {"type": "string"}}


def test_embedded_fields_are_flattened_into_parent() -> None:
    definitions = _definitions(reflect_from_type(Article))

    article = definitions["Article"]
    assert list(article["properties"]) == ["created", "updated", "title"]
    assert article["required"] == ["created", "title"]
    assert "Timestamps" not in definitions


def test_inline_marker_flattens_named_field() -> None:
    post = _definitions(reflect_from_type(Post))["Post"]

    assert list(post["properties"]) == ["body", "created", "updated"]


def test_nullable_and_required_resolution() -> None:
    profile = _definitions(reflect_from_type(Profile))["Profile"]

    assert profile["properties"]["nickname"] == {
        "oneOf": [{"type": "string"}, {"type": "null"}]
    }
    assert profile["required"] == ["nickname", "email"]
    assert profile["required"].count("email") == 1


def test_required_from_jsonschema_tags_only() -> None:
    profile = _definitions(
        Reflector(required_from_jsonschema_tags=True).reflect_from_type(Profile)
    )["Profile"]

    assert profile["required"] == ["email"]


def test_type_capabilities() -> None:
    definitions = _definitions(reflect_from_type(Order))
    order = definitions["Order"]["properties"]

    assert order["price"] == {"$ref": "#/$defs/Money"}
    assert definitions["Money"] == {"type": "string", "pattern": "^[0-9]+$"}
    assert order["product"] == {"$ref": "#/$defs/Product"}
    assert definitions["Product"]["title"] == "Product"
    assert definitions["Product"]["minProperties"] == 1
    assert order["legacy"] == {"type": "string"}
    assert definitions["Flexible"]["properties"]["value"] == {"type": "integer"}
    assert definitions["Documented"]["properties"]["title"] == {
        "type": "string",
        "description": "The title.",
    }


def test_lookup_hook_references_external_ids() -> None:
    reflector = Reflector(
        lookup=lambda tp: "https://example.com/address.json" if tp is Address else ""
    )

    definitions = _definitions(reflector.reflect_from_type(User))

    assert definitions["User"]["properties"]["address"] == {
        "$ref": "https://example.com/address.json"
    }
    assert "Address" not in definitions


def test_mapper_hook_replaces_types_verbatim() -> None:
    reflector = Reflector(
        mapper=lambda tp: Schema(type="string", format="postal") if tp is Address else None
    )

    definitions = _definitions(reflector.reflect_from_type(User))

    assert definitions["User"]["properties"]["address"] == {"type": "string", "format": "postal"}


def test_namer_and_key_namer_hooks() -> None:
    reflector = Reflector(
        namer=lambda tp: f"Api{tp.__name__}" if tp in (User, Address) else "",
        key_namer=str.upper,
    )

    document = _document(reflector.reflect_from_type(User))

    assert document["$ref"] == "#/$defs/ApiUser"
    user = document["$defs"]["ApiUser"]
    assert list(user["properties"]) == ["NAME", "AGE", "ADDRESS", "TAGS"]
    assert user["properties"]["ADDRESS"] == {"$ref": "#/$defs/ApiAddress"}
    assert user["required"] == ["NAME", "ADDRESS", "TAGS"]


def test_additional_fields_hook_appends_synthetic_fields() -> None:
    extra = StructField(name="zip", type=str, tags={"json": "zip,omitempty"})
    reflector = Reflector(additional_fields=lambda tp: [extra] if tp is Address else None)

    address = _definitions(reflector.reflect_from_type(User))["Address"]

    assert list(address["properties"]) == ["street", "city", "zip"]
    assert address["required"] == ["street"]


def test_comment_lookup_hook_and_comment_map() -> None:
    hooked = Reflector(
        lookup_comment=lambda tp, name: (f"User {name}" if name else "A user.")
        if tp is User
        else ""
    )
    mapped = Reflector(
        comment_map={comment_key(User): "A user.", comment_key(User, "name"): "Display name."}
    )

    hooked_user = _definitions(hooked.reflect_from_type(User))["User"]
    mapped_user = _definitions(mapped.reflect_from_type(User))["User"]

    assert hooked_user["description"] == "A user."
    assert hooked_user["properties"]["address"] == {
        "$ref": "#/$defs/Address",
        "description": "User address",
    }
    assert mapped_user["description"] == "A user."
    assert mapped_user["properties"]["name"]["description"] == "Display name."
    assert "description" not in mapped_user["properties"]["age"]


def test_comment_map_answers_when_lookup_hook_finds_nothing() -> None:
    reflector = Reflector(
        lookup_comment=lambda tp, name: "Hooked user." if tp is User and not name else "",
        comment_map={comment_key(User): "Mapped user.", comment_key(User, "age"): "Years."},
    )

    user = _definitions(reflector.reflect_from_type(User))["User"]

    assert user["description"] == "Hooked user."
    assert user["properties"]["age"]["description"] == "Years."


def test_anchor_and_additional_properties_options() -> None:
    reflector = Reflector(assign_anchor=True, allow_additional_properties=True)

    user = _definitions(reflector.reflect_from_type(User))["User"]

    assert user["$anchor"] == "User"
    assert "additionalProperties" not in user


def test_ignored_types_keep_an_empty_object() -> None:
    by_type = _definitions(Reflector(ignored_types=[Address]).reflect_from_type(User))
    by_value = _definitions(
        Reflector(ignored_types=[Address(street="x")]).reflect_from_type(User)
    )

    expected = {"type": "object", "properties": {}, "additionalProperties": False}
    assert by_type["Address"] == expected
    assert by_value["Address"] == expected


def test_unsupported_kinds_abort_generation() -> None:
    with pytest.raises(UnsupportedTypeError):
        reflect_from_type(Unsupported)
    with pytest.raises(UnsupportedTypeError):
        reflect_from_type(complex)


def test_unresolvable_field_annotations_surface_as_generation_error() -> None:
    @dataclass
    class Broken:
        value: NotDefinedAnywhere  # type: ignore[name-defined]  # noqa: F821

    with pytest.raises(SchemaGenerationError, match="Broken"):
        reflect_from_type(Broken)


def test_parameterized_record_fields_use_the_type_arguments() -> None:
    definitions = _definitions(reflect_from_type(Holder))

    assert definitions["Holder"]["properties"] == {
        "boxed": {"$ref": "#/$defs/Box[int]"},
        "labelled": {"$ref": "#/$defs/Box[str]"},
    }
    assert definitions["Box[int]"] == {
        "type": "object",
        "properties": {
            "value": {"type": "integer"},
            "history": {"type": "array", "items": {"type": "integer"}},
        },
        "additionalProperties": False,
        "required": ["value", "history"],
    }
    assert definitions["Box[str]"]["properties"]["value"] == {"type": "string"}


def test_self_referencing_parameterized_record_is_referenced() -> None:
    document = _document(reflect_from_type(GenericNode[str]))

    assert document["$ref"] == "#/$defs/GenericNode[str]"
    node = document["$defs"]["GenericNode[str]"]
    assert node["properties"]["value"] == {"type": "string"}
    assert node["properties"]["children"] == {
        "type": "array",
        "items": {"$ref": "#/$defs/GenericNode[str]"},
    }


def test_parameterized_record_honours_record_level_options() -> None:
    reflector = Reflector(
        assign_anchor=True,
        comment_map={comment_key(Box): "A boxed value.", comment_key(Box, "value"): "Content."},
    )

    box = _definitions(reflector.reflect_from_type(Box[int]))["Box[int]"]

    assert box["$anchor"] == "Box"
    assert box["description"] == "A boxed value."
    assert box["properties"]["value"]["description"] == "Content."
    ignored = _definitions(Reflector(ignored_types=[Box]).reflect_from_type(Box[int]))
    assert ignored["Box[int]"]["properties"] == {}


def test_empty_tuple_is_bounded_to_zero_items() -> None:
    unit = _definitions(reflect_from_type(Unit))["Unit"]

    assert unit["properties"]["nothing"] == {
        "type": "array",
        "items": True,
        "minItems": 0,
        "maxItems": 0,
    }


def test_user_hooks_run_once_per_field_and_struct() -> None:
    inspected: list[Any] = []
    renamed: list[str] = []

    def additional_fields(tp: Any) -> None:
        inspected.append(tp)

    def key_namer(name: str) -> str:
        renamed.append(name)
        return name

    Reflector(additional_fields=additional_fields, key_namer=key_namer).reflect_from_type(User)

    assert inspected.count(User) == 1
    assert inspected.count(Address) == 1
    # age and city are named by their json tags
    assert sorted(renamed) == ["address", "name", "street", "tags"]


@pytest.mark.skipif(sys.version_info < (3, 12), reason="type alias objects need Python 3.12")
def test_type_alias_fields_resolve_to_their_value() -> None:
    alias_type = getattr(typing, "TypeAliasType")
    celsius = alias_type("Celsius", float)
    reading = dataclasses.make_dataclass("Reading", [("temperature", celsius)])

    definitions = _definitions(reflect_from_type(reading))

    assert definitions["Reading"]["properties"]["temperature"] == {"type": "number"}
