from dataclasses import FrozenInstanceError
from typing import Literal, Optional, TypeVar

import pytest

from composer.services.context import (
    Context,
    ContextTypeMismatchError,
    Entry,
    UnsupportedExpectedTypeError,
)


def test_create_empty_context():
    ctx = Context.empty()
    assert ctx.is_empty
    assert ctx.parent is None


def test_create_context_with_data():
    ctx = Context(data={"key": "value"})
    assert ctx["key"] == "value"
    assert not ctx.is_empty


def test_item_access_round_trip():
    ctx = Context()
    ctx["name"] = "Qt"
    assert ctx["name"] == "Qt"
    assert ctx.read("name") == "Qt"


def test_write_overwrites_local_entry():
    ctx = Context(data={"n": 1})
    ctx.write("n", "one")
    assert ctx.read("n") == "one"
    assert ctx.entry("n").declared_type is str


def test_typed_get():
    ctx = Context(data={"name": "Qt", "count": 42, "is_active": True})
    assert ctx.get("name", str) == "Qt"
    assert ctx.get("count", int) == 42
    assert ctx.get("is_active", bool) is True


def test_missing_keys_are_none():
    ctx = Context()
    assert ctx["missing"] is None
    assert ctx.get("missing", str) is None
    assert "missing" not in ctx


def test_stored_none_is_never_a_mismatch():
    ctx = Context(data={"maybe": None})
    assert ctx.get("maybe", int) is None


def test_parent_values_are_inherited():
    parent = Context(data={"inherited": "from parent"})
    child = Context(data={"own": "value"}, parent=parent)
    assert child["own"] == "value"
    assert child["inherited"] == "from parent"
    assert "inherited" in child


def test_child_values_shadow_parent():
    parent = Context(data={"key": "parent value"})
    child = Context(data={"key": "child value"}, parent=parent)
    assert child["key"] == "child value"


def test_local_write_never_mutates_parent():
    parent = Context()
    parent.write("a", 1)
    child = Context(parent=parent)
    assert child.read("a") == 1
    child.write("a", 2)
    assert child.read("a") == 2
    assert parent.read("a") == 1


def test_is_empty_ignores_ancestors():
    parent = Context(data={"a": 1})
    child = parent.child()
    assert child.is_empty
    assert child.parent is parent
    assert list(child.keys()) == []


def test_grandparent_lookup():
    root = Context(data={"deep": "yes"})
    leaf = root.child().child()
    assert leaf.get("deep", str) == "yes"


def test_type_mismatch_error_shape():
    ctx = Context()
    ctx.write("x", "s")
    with pytest.raises(ContextTypeMismatchError) as info:
        ctx.get("x", int)
    err = info.value
    assert err.key == "x"
    assert err.expected_type is int
    assert err.actual_type is str
    assert isinstance(err, TypeError)


def test_type_mismatch_message():
    ctx = Context(data={"name": "Qt"})
    with pytest.raises(ContextTypeMismatchError) as info:
        ctx.get("name", int)
    text = str(info.value)
    assert 'Type mismatch for key "name"' in text
    assert "expected int" in text
    assert "but got str" in text


def test_type_check_traverses_ancestors():
    parent = Context()
    parent.write("p", "text")
    child = Context(parent=parent)
    assert child.get("p", str) == "text"
    with pytest.raises(ContextTypeMismatchError) as info:
        child.get("p", int)
    assert info.value.key == "p"
    assert info.value.expected_type is int
    assert info.value.actual_type is str


def test_nearest_definition_wins_before_type_check():
    parent = Context(data={"k": "text"})
    child = Context(data={"k": 3}, parent=parent)
    assert child.get("k", int) == 3


def test_nearest_definition_is_the_one_checked():
    parent = Context(data={"k": 3})
    child = Context(data={"k": "text"}, parent=parent)
    with pytest.raises(ContextTypeMismatchError):
        child.get("k", int)


def test_generic_and_union_expected_types():
    ctx = Context(data={"items": [1, 2], "num": 2.5, "label": "x"})
    assert ctx.get("items", list[int]) == [1, 2]
    assert ctx.get("num", int | float) == 2.5
    assert ctx.get("label", (int, str)) == "x"
    with pytest.raises(ContextTypeMismatchError):
        ctx.get("items", dict[str, int])


def test_literal_expected_type_checks_membership():
    ctx = Context(data={"mode": "x"})
    assert ctx.get("mode", Literal["x", "y"]) == "x"
    with pytest.raises(ContextTypeMismatchError) as exc:
        ctx.get("mode", Literal["a"])
    assert exc.value.key == "mode"
    assert ctx.get("mode", Optional[Literal["x"]]) == "x"


def test_unsupported_expected_types_raise_clear_error():
    ctx = Context(data={"mode": "x"})
    for bad in ("int", TypeVar("U"), 42):
        with pytest.raises(UnsupportedExpectedTypeError) as exc:
            ctx.get("mode", bad)
        assert exc.value.key == "mode"
        assert exc.value.expected_type is bad
        assert "Unsupported expected type" in str(exc.value)
    # Rejected before lookup, so a missing key does not hide the mistake
    with pytest.raises(UnsupportedExpectedTypeError):
        ctx.get("missing", "str")
    with pytest.raises(UnsupportedExpectedTypeError):
        ctx.get("mode", Optional["int"])


def test_untyped_get_accepts_anything():
    ctx = Context(data={"anything": object()})
    assert ctx.get("anything") is ctx.read("anything")


def test_entry_captures_runtime_type_at_assignment():
    entry = Entry(True)
    assert entry.value is True
    assert entry.declared_type is bool
    with pytest.raises(FrozenInstanceError):
        entry.value = False


def test_fluent_setters_chain():
    ctx = Context().set("a", 1).set("b", 2).update({"c": 3})
    assert [ctx["a"], ctx["b"], ctx["c"]] == [1, 2, 3]
