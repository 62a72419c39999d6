"""Schema node model tests."""

from __future__ import annotations

from schema_reflector.schema_model import FALSE_SCHEMA, TRUE_SCHEMA, Properties, Schema


def test_boolean_literal_schemas() -> None:
    assert Schema.from_bool(True) == TRUE_SCHEMA
    assert Schema.from_bool(False) == FALSE_SCHEMA
    assert Schema.from_bool(False).is_boolean
    assert not Schema(type="string").is_boolean


def test_empty_node_detection() -> None:
    assert Schema().is_empty()
    assert not Schema(type="string").is_empty()
    assert not Schema(minimum=0).is_empty()
    assert not Schema.from_bool(True).is_empty()


def test_clone_copies_every_nested_structure() -> None:
    original = Schema(
        type="object",
        properties=Properties.from_items([("name", Schema(type="string"))]),
        one_of=[Schema(title="group", required=["name"])],
        pattern_properties={"^[0-9]+$": Schema(type="integer")},
        enum=["a", "b"],
        examples=["a"],
        required=["name"],
        extras={"x-tags": ["one"]},
    )

    cloned = original.clone()

    assert cloned == original
    assert cloned.one_of is not original.one_of
    assert cloned.one_of is not None and original.one_of is not None
    assert cloned.one_of[0] is not original.one_of[0]
    assert cloned.pattern_properties is not original.pattern_properties
    assert cloned.required is not original.required
    assert cloned.extras is not original.extras
    assert cloned.extras is not None and original.extras is not None
    assert cloned.extras["x-tags"] is not original.extras["x-tags"]

    cloned.one_of[0].required = ["other"]
    assert original.one_of[0].required == ["name"]
