"""Core services: builder registry, hierarchical context, notification.

Responsibilities:
 - `Composer`: named builder registry with recall / lazy recall
 - `Context`: hierarchical, type-checked key/value store with batching
 - `ChangeNotifier` / `Selection`: plain and selective change subscriptions
 - `ContextScope`: ambient context resolution

None of these import Qt; the widget bindings live in `composer.widgets`.
"""

from .context import (  # noqa: F401
    Context,
    ContextTransactionError,
    ContextTypeMismatchError,
    UnsupportedExpectedTypeError,
    Entry,
)
from .notifier import ChangeNotifier, Selection, Subscription  # noqa: F401
from .registry import Composer, LazyRecall, UndefinedBuilderError  # noqa: F401
from .scope import ContextNotProvidedError, ContextScope  # noqa: F401

__all__ = [
    "Composer",
    "LazyRecall",
    "UndefinedBuilderError",
    "Context",
    "Entry",
    "ContextTypeMismatchError",
    "UnsupportedExpectedTypeError",
    "ContextTransactionError",
    "ChangeNotifier",
    "Selection",
    "Subscription",
    "ContextScope",
    "ContextNotProvidedError",
]
