"""Ordered property container tests."""

from __future__ import annotations

from schema_reflector.schema_model import Properties, Schema


def test_iterates_in_insertion_order() -> None:
    properties = Properties(capacity=3)
    properties.set("zeta", Schema(type="string"))
    properties.set("alpha", Schema(type="integer"))
    properties.set("mid", Schema(type="boolean"))

    assert list(properties) == ["zeta", "alpha", "mid"]
    assert len(properties) == 3
    assert properties.capacity_hint == 3


def test_overwrite_keeps_original_position() -> None:
    properties = Properties()
    properties.set("first", Schema(type="string"))
    properties.set("second", Schema(type="string"))
    properties.set("first", Schema(type="number"))

    assert list(properties.keys()) == ["first", "second"]
    assert properties.get("first") == Schema(type="number")


def test_delete_preserves_relative_order_of_remaining_entries() -> None:
    properties = Properties.from_items(
        (name, Schema(type="string")) for name in ("a", "b", "c", "d")
    )

    properties.delete("b")
    properties.delete("missing")

    assert list(properties) == ["a", "c", "d"]
    assert "b" not in properties
    assert properties.get("b") is None


def test_clone_is_fully_independent() -> None:
    nested = Schema(type="object", properties=Properties.from_items([("inner", Schema())]))
    original = Properties.from_items([("nested", nested)])

    cloned = original.clone()
    cloned_nested = cloned.get("nested")
    assert cloned_nested is not None
    cloned_nested.description = "changed"
    assert cloned_nested.properties is not None
    cloned_nested.properties.set("extra", Schema(type="null"))

    assert cloned_nested is not nested
    assert nested.description == ""
    assert nested.properties is not None
    assert list(nested.properties) == ["inner"]


def test_equality_is_order_sensitive() -> None:
    left = Properties.from_items([("a", Schema()), ("b", Schema())])
    right = Properties.from_items([("b", Schema()), ("a", Schema())])

    assert left != right
    assert left == Properties.from_items([("a", Schema()), ("b", Schema())])
