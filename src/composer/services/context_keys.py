"""Typed accessors for the keys shared by the bundled builders.

Mixed into `Context` so every context exposes `ctx.name`, `ctx.title` etc.
Getters go through the type-checked `get`; setters through `write` (and so
notify like any other write).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

from composer.design.tokens import Colors, Sizes

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .context import Context

__all__ = ["ContextKeysMixin", "typed_key"]


def typed_key(key: str, expected_type: Any, default: Optional[Callable[[], Any]] = None) -> property:
    """Build a read/write property bound to a context key."""

    def _get(self: "Context") -> Any:
        value = self.get(key, expected_type)
        if value is None and default is not None:
            return default()
        return value

    def _set(self: "Context", value: Any) -> None:
        self.write(key, value)

    return property(_get, _set, doc=f"Context value under {key!r} ({expected_type!r}).")


class ContextKeysMixin:
    text = typed_key("text", str)
    name = typed_key("name", str)
    title = typed_key("title", str)
    count = typed_key("count", int)
    is_active = typed_key("is_active", bool)
    items = typed_key("items", list, default=list)
    children = typed_key("children", list, default=list)
    sizes = typed_key("sizes", Sizes, default=Sizes)
    colors = typed_key("colors", Colors, default=Colors)

    # Fluent setters (chainable) ---------------------------------------
    def with_text(self: Any, text: str) -> Any:
        return self.set("text", text)

    def with_name(self: Any, name: str) -> Any:
        return self.set("name", name)

    def with_title(self: Any, title: str) -> Any:
        return self.set("title", title)

    def with_count(self: Any, count: int) -> Any:
        return self.set("count", count)

    def with_items(self: Any, items: List[Any]) -> Any:
        return self.set("items", items)
