"""PyQt6 bindings for composed widgets.

`ContextProvider` publishes a context to a widget subtree; `ContextConsumer`
and `RecallView` build their content from the nearest provided context and
rebuild on change.
"""

from .consumer import ContextConsumer, RecallView  # noqa: F401
from .provider import ContextProvider, find_context  # noqa: F401

__all__ = ["ContextProvider", "find_context", "ContextConsumer", "RecallView"]
