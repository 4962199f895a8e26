"""Demo composition: bundled builders and the home page built from them."""

from .initializer import (  # noqa: F401
    BUILDER_NAMES,
    greeting,
    info,
    initialize_composer,
    recall_spacing,
    recall_text,
)
from .items import Item  # noqa: F401

__all__ = [
    "BUILDER_NAMES",
    "Item",
    "greeting",
    "info",
    "initialize_composer",
    "recall_spacing",
    "recall_text",
]
