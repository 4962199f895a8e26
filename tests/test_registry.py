import pytest

from composer.services.context import Context
from composer.services.registry import Composer, LazyRecall, UndefinedBuilderError
from composer.services.scope import ContextNotProvidedError, ContextScope


def _greeting(ctx):
    return f"Hello, {ctx.name or 'World'}!"


def test_define_and_is_defined(composer):
    composer.define("test", lambda ctx: "test")
    assert composer.is_defined("test")
    assert "test" in composer
    assert not composer.is_defined("nonexistent")


def test_undefine(composer):
    composer.define("test", lambda ctx: "test")
    composer.undefine("test")
    assert not composer.is_defined("test")


def test_undefine_missing_is_noop(composer):
    composer.undefine("never-defined")
    assert len(composer) == 0


def test_clear(composer):
    composer.define("test1", lambda ctx: 1)
    composer.define("test2", lambda ctx: 2)
    assert len(composer.defined_names()) == 2
    composer.clear()
    assert composer.defined_names() == ()


def test_defined_names_in_insertion_order(composer):
    for name in ("b", "a", "c"):
        composer.define(name, lambda ctx: None)
    assert composer.defined_names() == ("b", "a", "c")


def test_defined_names_is_an_immutable_snapshot(composer):
    composer.define("test", lambda ctx: None)
    names = composer.defined_names()
    with pytest.raises(AttributeError):
        names.append("new")  # type: ignore[attr-defined]
    composer.define("later", lambda ctx: None)
    assert names == ("test",)


def test_define_overwrites(composer):
    composer.define("w", lambda ctx: 1)
    composer.define("w", lambda ctx: 2)
    assert composer.recall("w", Context()) == 2
    assert composer.defined_names() == ("w",)


def test_recall_undefined_raises(composer):
    with pytest.raises(UndefinedBuilderError) as info:
        composer.recall("missing", Context())
    assert info.value.name == "missing"
    assert "missing" in str(info.value)


def test_recall_with_explicit_context(composer):
    composer.define("greeting", _greeting)
    assert composer.recall("greeting", Context(data={"name": "Qt"})) == "Hello, Qt!"
    assert composer.recall("greeting", Context()) == "Hello, World!"


def test_recall_passes_output_through_unmodified(composer):
    marker = object()
    composer.define("opaque", lambda ctx: marker)
    assert composer.recall("opaque", Context()) is marker


def test_recall_uses_ambient_context(composer):
    composer.define("greeting", _greeting)
    with composer.scope.provide(Context(data={"name": "Ambient"})):
        assert composer.recall("greeting") == "Hello, Ambient!"


def test_recall_without_any_context_is_environment_fault(composer):
    composer.define("greeting", _greeting)
    with pytest.raises(ContextNotProvidedError):
        composer.recall("greeting")


def test_explicit_context_beats_ambient(composer):
    composer.define("greeting", _greeting)
    with composer.scope.provide(Context(data={"name": "Ambient"})):
        assert composer.recall("greeting", Context(data={"name": "Explicit"})) == "Hello, Explicit!"


def test_nested_recall_with_derived_context(composer):
    composer.define("text", lambda ctx: {"text": ctx.text or "<Missing text>"})
    composer.define(
        "card",
        lambda ctx: {"card": composer.recall("text", ctx.child({"text": "Card Content"}))},
    )
    assert composer.recall("card", Context()) == {"card": {"text": "Card Content"}}
    # text's own contract in isolation
    assert composer.recall("text", Context(data={"text": "Card Content"})) == {"text": "Card Content"}


def test_nested_recall_through_scope(composer):
    composer.define("inner", lambda ctx: ctx.title)

    def outer(ctx):
        with composer.scope.provide(ctx.child({"title": "inner title"})):
            return composer.recall("inner")

    composer.define("outer", outer)
    assert composer.recall("outer", Context()) == "inner title"


def test_recall_lazy_defers_ambient_lookup(composer):
    composer.define("greeting", _greeting)
    lazy = composer.recall_lazy("greeting")
    assert isinstance(lazy, LazyRecall)
    assert not lazy.built
    with composer.scope.provide(Context(data={"name": "Later"})):
        assert lazy.materialize() == "Hello, Later!"
    assert lazy.built
    # cached
    assert lazy() == "Hello, Later!"


def test_recall_lazy_validates_name_eagerly(composer):
    with pytest.raises(UndefinedBuilderError):
        composer.recall_lazy("missing")


def test_recall_lazy_keeps_builder_captured_at_recall(composer):
    composer.define("w", lambda ctx: "first")
    lazy = composer.recall_lazy("w", Context())
    composer.define("w", lambda ctx: "second")
    assert lazy.materialize() == "first"


def test_registries_are_isolated():
    a, b = Composer(), Composer()
    a.define("isolated", lambda ctx: 1)
    assert a.is_defined("isolated")
    assert not b.is_defined("isolated")


def test_shared_scope_can_be_injected():
    scope = ContextScope()
    composer = Composer(scope=scope)
    composer.define("title", lambda ctx: ctx.title)
    with scope.provide(Context(data={"title": "shared"})):
        assert composer.recall("title") == "shared"
