"""Widgets that build (and rebuild) their content from a Context.

`ContextConsumer` resolves its context when it is first shown (or when
`ensure_built()` is called), builds a child widget from it and then rebuilds
whenever the context notifies. With a `select` callable it only rebuilds when
the selected value changes.

`RecallView` is the consumer used for registry recalls:

    view = RecallView(composer, "greeting")
    provider = ContextProvider(Context(data={"name": "Qt"}), child=view)
    provider.show()  # view resolves the provider's context and builds
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PyQt6.QtWidgets import QVBoxLayout, QWidget

from composer.services.context import Context
from composer.services.notifier import Selection, Subscription
from composer.services.registry import Composer, LazyRecall
from composer.services.scope import ContextScope

from .provider import find_context

__all__ = ["ContextConsumer", "RecallView"]

logger = logging.getLogger(__name__)

BuildFn = Callable[[Context], Any]


class _Binding:
    """Subscription of a consumer to its current context."""

    def __init__(self) -> None:
        self.context: Context | None = None
        self._sub: Subscription | None = None
        self._selection: Selection | None = None

    def bind(
        self,
        context: Context,
        on_change: Callable[[], None],
        select: Optional[Callable[[Context], Any]],
        listen: bool = True,
    ) -> None:
        if context is self.context:
            return
        self.release()
        self.context = context
        if not listen:
            return
        if select is not None:
            self._selection = context.select(select, lambda _value: on_change())
        else:
            self._sub = context.add_listener(lambda _ctx: on_change())

    def release(self) -> None:
        if self.context is not None and not self.context.disposed:
            if self._sub is not None:
                self.context.remove_listener(self._sub)
            if self._selection is not None:
                self._selection.cancel()
        self._sub = None
        self._selection = None
        self.context = None


class ContextConsumer(QWidget):
    def __init__(
        self,
        build: BuildFn,
        context: Optional[Context] = None,
        *,
        select: Optional[Callable[[Context], Any]] = None,
        scope: Optional[ContextScope] = None,
        listen: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._build_fn = build
        self._explicit_context = context
        self._select = select
        self._scope = scope
        self._listen = listen or select is not None
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._child: QWidget | None = None
        self._binding = _Binding()
        self.build_count = 0
        binding = self._binding
        self.destroyed.connect(lambda *_args: binding.release())
        if context is not None:
            # Nothing to resolve from the environment; build right away
            self.rebuild()

    # State ------------------------------------------------------------
    @property
    def is_built(self) -> bool:
        return self.build_count > 0

    @property
    def bound_context(self) -> Context | None:
        return self._binding.context

    def child_widget(self) -> QWidget | None:
        return self._child

    # Building ---------------------------------------------------------
    def ensure_built(self) -> None:
        if not self.is_built:
            self.rebuild()

    def resolve_context(self) -> Context:
        if self._explicit_context is not None:
            return self._explicit_context
        return find_context(self)

    def rebuild(self) -> None:
        context = self.resolve_context()
        self._binding.bind(context, self._on_context_changed, self._select, self._listen)
        if self._scope is not None:
            with self._scope.provide(context):
                output = self._build_fn(context)
        else:
            output = self._build_fn(context)
        if isinstance(output, LazyRecall):
            output = output.materialize()
        if not isinstance(output, QWidget):
            raise TypeError(
                f"Builder for {type(self).__name__} returned {type(output).__name__}, "
                "expected a QWidget"
            )
        self._replace_child(output)
        self.build_count += 1

    def release(self) -> None:
        """Stop listening to the bound context."""
        self._binding.release()

    def _on_context_changed(self) -> None:
        logger.debug("%s rebuilding after context change", type(self).__name__)
        self.rebuild()

    def _replace_child(self, widget: QWidget) -> None:
        old = self._child
        if old is not None:
            for nested in old.findChildren(ContextConsumer):
                nested.release()
            if isinstance(old, ContextConsumer):
                old.release()
            self._layout.removeWidget(old)
            old.setParent(None)
            old.deleteLater()
        self._child = widget
        self._layout.addWidget(widget)

    def showEvent(self, event) -> None:  # noqa: N802 - Qt override
        if not self.is_built:
            self.rebuild()
        super().showEvent(event)


class RecallView(ContextConsumer):
    """Consumer whose content is `composer.recall(name, ctx)`.

    The name is checked on construction (`UndefinedBuilderError`); the builder
    captured then is the one used for every rebuild.
    """

    def __init__(
        self,
        composer: Composer,
        name: str,
        context: Optional[Context] = None,
        *,
        select: Optional[Callable[[Context], Any]] = None,
        listen: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        builder = composer.builder_for(name)
        super().__init__(
            builder,
            context,
            select=select,
            listen=listen,
            scope=composer.scope,
            parent=parent,
        )
        self.recall_name = name
