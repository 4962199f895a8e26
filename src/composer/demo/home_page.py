"""Demo home page composed from registry recalls.

The page publishes one context (title, name, count) to its body. The recalled
views resolve that context lazily from the widget tree; each one subscribes
only to the key it renders, so pressing the increment button rebuilds the
counter and nothing else.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from composer.services.context import Context
from composer.services.registry import Composer
from composer.widgets import ContextProvider, RecallView

__all__ = ["HomePage"]


class HomePage(QWidget):
    def __init__(
        self,
        composer: Composer,
        title: str,
        context: Optional[Context] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("homePage")
        self.setWindowTitle(title)
        self._composer = composer
        self.page_context = (
            context
            if context is not None
            else Context(data={"title": "** Title **", "name": "Qt", "count": 0})
        )
        self._build_ui()

    def _build_ui(self) -> None:
        body = QWidget()
        layout = QVBoxLayout(body)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(QLabel("You have pushed the button this many times:"))
        # The counter builder carries its own selective subscription
        self.counter_view = RecallView(self._composer, "counter", listen=False)
        layout.addWidget(self.counter_view)
        layout.addWidget(RecallView(self._composer, "spacing", listen=False))
        self.greeting_view = RecallView(self._composer, "greeting", select=lambda c: c.name)
        layout.addWidget(self.greeting_view)
        layout.addWidget(RecallView(self._composer, "spacing", listen=False))
        self.info_view = RecallView(self._composer, "info", select=lambda c: c.title)
        layout.addWidget(self.info_view)
        self.increment_button = QPushButton("+")
        self.increment_button.setObjectName("incrementButton")
        self.increment_button.setToolTip("Increment")
        self.increment_button.clicked.connect(lambda *_: self.increment())
        layout.addWidget(self.increment_button)

        self.provider = ContextProvider(self.page_context, child=body)
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.addWidget(self.provider)

    def ensure_built(self) -> None:
        self.provider.ensure_built()

    def increment(self) -> None:
        self.page_context.count = (self.page_context.count or 0) + 1
