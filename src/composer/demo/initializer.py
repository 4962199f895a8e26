"""Bundled builder definitions.

`initialize_composer` registers the small widget vocabulary the demo page is
composed from. Every builder reads its parameters from the context it is
given; nested recalls pass a child context so design tokens (sizes, colors)
set higher up still apply.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Mapping, Tuple

from PyQt6.QtWidgets import QFrame, QLabel, QListWidget, QVBoxLayout, QWidget

from composer import settings
from composer.services.context import Context
from composer.services.registry import Composer
from composer.widgets.consumer import ContextConsumer

from .items import Item

__all__ = [
    "initialize_composer",
    "recall_text",
    "recall_spacing",
    "greeting",
    "info",
    "BUILDER_NAMES",
]

logger = logging.getLogger(__name__)


# Recall helpers ---------------------------------------------------------
def recall_text(composer: Composer, text: str, parent: Context | None = None) -> Any:
    """Recall `text` with a context holding only `text` (inheriting `parent`)."""
    return composer.recall("text", Context(data={"text": text}, parent=parent))


def recall_spacing(composer: Composer, context: Context | None = None) -> Any:
    return composer.recall("spacing", context)


def greeting(composer: Composer, context: Context | None = None) -> Any:
    return composer.recall("greeting", context)


def info(composer: Composer, context: Context | None = None) -> Any:
    return composer.recall("info", context)


# Builders ---------------------------------------------------------------
# Each takes the owning composer first so nested recalls go through it.
def _build_text(composer: Composer, ctx: Context) -> QWidget:
    label = QLabel(ctx.text or settings.MISSING_TEXT)
    label.setObjectName("composedText")
    label.setStyleSheet(f"color: {ctx.colors.primary}; font-size: {ctx.sizes.px('lg')}px;")
    return label


def _build_greeting(composer: Composer, ctx: Context) -> QWidget:
    return recall_text(composer, f"Hello, {ctx.name or settings.DEFAULT_NAME}!", ctx)


def _build_info(composer: Composer, ctx: Context) -> QWidget:
    card = QFrame()
    card.setObjectName("composedCard")
    card.setFrameShape(QFrame.Shape.StyledPanel)
    layout = QVBoxLayout(card)
    pad = ctx.sizes.px("md")
    layout.setContentsMargins(pad, pad, pad, pad)
    layout.addWidget(recall_text(composer, f"Title: {ctx.title or settings.DEFAULT_TITLE}", ctx))
    return card


def _build_spacing(composer: Composer, ctx: Context) -> QWidget:
    spacer = QWidget()
    spacer.setObjectName("composedSpacing")
    side = ctx.sizes.px("md")
    spacer.setFixedSize(side, side)
    return spacer


def _build_items(composer: Composer, ctx: Context) -> QWidget:
    widget = QListWidget()
    widget.setObjectName("composedItems")
    for item in ctx.items:
        widget.addItem(item.name if isinstance(item, Item) else str(item))
    return widget


def _build_column(composer: Composer, ctx: Context) -> QWidget:
    column = QWidget()
    column.setObjectName("composedColumn")
    layout = QVBoxLayout(column)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(ctx.sizes.px("md"))
    for child in ctx.children:
        layout.addWidget(child)
    return column


def _build_counter(composer: Composer, ctx: Context) -> QWidget:
    # Only the count matters here; other key changes must not rebuild
    return ContextConsumer(
        lambda c: recall_text(composer, f"{c.count or 0}", c),
        ctx,
        select=lambda c: c.count,
        scope=composer.scope,
    )


_BUNDLED: Mapping[str, Callable[[Composer, Context], QWidget]] = {
    "text": _build_text,
    "greeting": _build_greeting,
    "info": _build_info,
    "spacing": _build_spacing,
    "list:items": _build_items,
    "column": _build_column,
    "counter": _build_counter,
}

BUILDER_NAMES: Tuple[str, ...] = tuple(_BUNDLED)


def initialize_composer(composer: Composer) -> Composer:
    """Define the bundled builders on `composer` and return it."""
    for name, build in _BUNDLED.items():
        composer.define(name, partial(build, composer))
    logger.debug("Registered %d bundled builders", len(_BUNDLED))
    return composer
