"""Ambient context resolution.

`ContextScope` answers "which context is active right now?" for code that
recalls a builder without passing a context explicitly. Contexts are published
for the dynamic extent of a `with scope.provide(ctx):` block; the innermost
block wins. The scope never disposes what it publishes.

Example:
    scope = ContextScope()
    with scope.provide(Context(data={"name": "Qt"})):
        scope.current().name  # -> "Qt"
    scope.current()  # raises ContextNotProvidedError
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, List

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .context import Context

__all__ = ["ContextScope", "ContextNotProvidedError"]


class ContextNotProvidedError(LookupError):
    """Raised when no ambient context is available at the current position."""

    def __init__(self, where: str = "current scope") -> None:
        self.where = where
        super().__init__(f"No Context provided in {where}")


class ContextScope:
    """Stack of published contexts (single-threaded)."""

    def __init__(self) -> None:
        self._stack: List["Context"] = []

    @contextmanager
    def provide(self, context: "Context") -> Iterator["Context"]:
        self._stack.append(context)
        try:
            yield context
        finally:
            # Pop our own frame even if an inner block leaked a push
            for i in range(len(self._stack) - 1, -1, -1):
                if self._stack[i] is context:
                    del self._stack[i:]
                    break

    def current(self) -> "Context":
        if not self._stack:
            raise ContextNotProvidedError()
        return self._stack[-1]

    def try_current(self) -> "Context | None":
        return self._stack[-1] if self._stack else None

    @property
    def depth(self) -> int:
        return len(self._stack)
