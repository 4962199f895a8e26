"""Named builder registry (the Composer).

Maps human-readable names to builder callables and invokes them against a
`Context` on demand. Builders return whatever renderable unit the host uses
(QWidgets for the bundled Qt layer); the registry passes it through untouched.

Responsibilities:
 - define / undefine / clear builders by name (last definition wins)
 - enumerate names in insertion order (immutable snapshot)
 - recall a builder with an explicit context or the ambient one
 - late-bound recall (`recall_lazy`) for deferred rendering callbacks

Thread-safety: Not thread-safe; access from the GUI thread only.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .context import Context
from .scope import ContextScope

__all__ = ["Builder", "Composer", "LazyRecall", "UndefinedBuilderError"]

logger = logging.getLogger(__name__)

Builder = Callable[[Context], Any]


class UndefinedBuilderError(LookupError):
    """Raised when recalling a name with no registered builder."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No builder defined with name: {name}")


class Composer:
    """Registry of named builders.

    Each instance owns its definitions and its ambient `ContextScope`; create
    one per application (or per test) and pass it where it is needed.
    """

    def __init__(self, scope: ContextScope | None = None) -> None:
        self._definitions: Dict[str, Builder] = {}
        self._scope = scope if scope is not None else ContextScope()

    @property
    def scope(self) -> ContextScope:
        return self._scope

    # Definitions ------------------------------------------------------
    def define(self, name: str, builder: Builder) -> None:
        if name in self._definitions:
            logger.debug("Builder %r redefined", name)
        else:
            logger.debug("Builder %r defined", name)
        self._definitions[name] = builder

    def undefine(self, name: str) -> None:
        self._definitions.pop(name, None)

    def is_defined(self, name: str) -> bool:
        return name in self._definitions

    def clear(self) -> None:
        self._definitions.clear()

    def defined_names(self) -> Tuple[str, ...]:
        return tuple(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    # Recall -----------------------------------------------------------
    def builder_for(self, name: str) -> Builder:
        builder = self._definitions.get(name)
        if builder is None:
            raise UndefinedBuilderError(name)
        return builder

    def recall(self, name: str, context: Optional[Context] = None) -> Any:
        """Invoke the builder registered under `name`.

        Without an explicit context the innermost ambient context of this
        registry's scope is used (`ContextNotProvidedError` if none).
        """
        builder = self.builder_for(name)
        if context is None:
            context = self._scope.current()
        return builder(context)

    def recall_lazy(self, name: str, context: Optional[Context] = None) -> "LazyRecall":
        """Validate `name` now, resolve the context and build on first access."""
        return LazyRecall(self, name, self.builder_for(name), context)


class LazyRecall:
    """Proxy deferring a recall until first materialization.

    The builder is captured at creation; the ambient context (when no explicit
    one was given) is looked up when `materialize()` first runs. Later calls
    reuse the cached output.
    """

    __slots__ = ("_composer", "_name", "_builder", "_context", "_output", "_built")

    def __init__(
        self, composer: Composer, name: str, builder: Builder, context: Optional[Context]
    ) -> None:
        self._composer = composer
        self._name = name
        self._builder = builder
        self._context = context
        self._output: Any = None
        self._built = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def built(self) -> bool:
        return self._built

    def materialize(self) -> Any:
        if not self._built:
            context = self._context
            if context is None:
                context = self._composer.scope.current()
            self._output = self._builder(context)
            self._built = True
        return self._output

    def __call__(self) -> Any:
        return self.materialize()
