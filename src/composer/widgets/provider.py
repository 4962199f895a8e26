"""Context publishing for Qt widget trees.

`ContextProvider` makes a `Context` visible to every descendant widget;
`find_context` walks from a widget up through its parents to the nearest
provider. The provider never disposes the context it publishes; the creator
of the context owns its lifecycle.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QVBoxLayout, QWidget

from composer.services.context import Context
from composer.services.scope import ContextNotProvidedError

__all__ = ["ContextProvider", "find_context"]


class ContextProvider(QWidget):
    def __init__(
        self,
        context: Context,
        child: Optional[QWidget] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("contextProvider")
        self._context = context
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._child: QWidget | None = None
        if child is not None:
            self.set_child(child)

    @property
    def provided_context(self) -> Context:
        return self._context

    def child_widget(self) -> QWidget | None:
        return self._child

    def set_child(self, widget: QWidget) -> None:
        if self._child is not None:
            self._layout.removeWidget(self._child)
            self._child.setParent(None)
        self._child = widget
        self._layout.addWidget(widget)

    def ensure_built(self) -> None:
        """Build every pending consumer below this provider (headless use)."""
        from .consumer import ContextConsumer

        while True:
            pending = [c for c in self.findChildren(ContextConsumer) if not c.is_built]
            if not pending:
                return
            for consumer in pending:
                consumer.ensure_built()


def find_context(widget: QWidget) -> Context:
    """Return the context of the nearest `ContextProvider` at or above `widget`."""
    node: QWidget | None = widget
    while node is not None:
        if isinstance(node, ContextProvider):
            return node.provided_context
        node = node.parentWidget()
    raise ContextNotProvidedError(f"widget tree of {type(widget).__name__}")
