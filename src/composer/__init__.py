"""Composer public API.

Curated, intentionally small surface: the headless core (registry, context,
ambient scope). Qt bindings live in `composer.widgets`, the bundled builders
in `composer.demo` and the bootstrap in `composer.app`; import those
namespaces explicitly so importing the core never pulls in Qt.
"""

from __future__ import annotations

from .services.context import (  # noqa: F401
    Context,
    ContextTransactionError,
    ContextTypeMismatchError,
    UnsupportedExpectedTypeError,
    Entry,
)
from .services.notifier import ChangeNotifier, Selection  # noqa: F401
from .services.registry import Composer, LazyRecall, UndefinedBuilderError  # noqa: F401
from .services.scope import ContextNotProvidedError, ContextScope  # noqa: F401

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
    "ContextScope",
    "ContextNotProvidedError",
]
