"""Hierarchical, type-checked key/value context.

A `Context` holds the values builders read to parametrize their output. Key
lookups fall back to the parent chain; writes always land on the local node.
Every write notifies listeners unless a batch (`begin()` / `end()`) is open,
in which case a single notification is sent when the batch ends.

Usage:
    ctx = Context(data={"name": "Qt"})
    ctx["title"] = "Home"
    with ctx.batch():
        ctx["count"] = 1
        ctx["is_active"] = True
    ctx.get("count", int)  # -> 1
    ctx.get("name", int)   # raises ContextTypeMismatchError

Stored values are wrapped in an `Entry` capturing their runtime type at the
moment of assignment. Typed reads (`get`) check the nearest definition of a
key against the requested type; `None` is never a mismatch.
"""

from __future__ import annotations

import logging
import types
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterator,
    KeysView,
    Literal,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from .context_keys import ContextKeysMixin
from .notifier import ChangeNotifier

__all__ = [
    "Context",
    "Entry",
    "ContextTypeMismatchError",
    "ContextTransactionError",
    "UnsupportedExpectedTypeError",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__name__
    if isinstance(tp, tuple):
        return " | ".join(_type_name(t) for t in tp)
    return repr(tp)


class ContextTypeMismatchError(TypeError):
    """Raised when a typed read finds a value of an incompatible type."""

    def __init__(self, key: str, expected_type: Any, actual_type: type) -> None:
        self.key = key
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f'Type mismatch for key "{key}": '
            f"expected {_type_name(expected_type)} but got {_type_name(actual_type)}"
        )


class UnsupportedExpectedTypeError(TypeError):
    """Raised when a typed read is given a type `get` cannot check against."""

    def __init__(self, key: str, expected_type: Any) -> None:
        self.key = key
        self.expected_type = expected_type
        super().__init__(
            f"Unsupported expected type {expected_type!r} for key \"{key}\"; "
            "use a class, a tuple or union of classes, a Literal, "
            "or a parameterized generic such as list[int]"
        )


class ContextTransactionError(RuntimeError):
    """Raised when batch methods are called out of order."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class Entry:
    value: Any
    declared_type: type = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "declared_type", type(self.value))


def _is_checkable(expected: Any) -> bool:
    if expected is Any or isinstance(expected, type):
        return True
    if isinstance(expected, tuple):
        return all(_is_checkable(t) for t in expected)
    origin = get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return all(_is_checkable(t) for t in get_args(expected))
    if origin is Literal:
        return True
    return isinstance(origin, type)


def _matches(value: Any, expected: Any) -> bool:
    """Return True when `value` is assignable to `expected`.

    Parameterized generics are checked against their origin only
    (`list[Item]` accepts any list). `expected` must pass `_is_checkable`.
    """
    if expected is Any or expected is object:
        return True
    if isinstance(expected, tuple):
        return any(_matches(value, t) for t in expected)
    origin = get_origin(expected)
    if origin is Union or origin is types.UnionType:
        return any(_matches(value, t) for t in get_args(expected))
    if origin is Literal:
        return value in get_args(expected)
    if origin is not None:
        return isinstance(value, origin)
    return isinstance(value, expected)


class Context(ContextKeysMixin, ChangeNotifier):
    """Mutable, hierarchical key/value store with change notification.

    A context never owns its parent: the parent link is a lookup chain only.
    Single-writer by convention; no locking.
    """

    def __init__(
        self, data: Mapping[str, Any] | None = None, parent: Optional["Context"] = None
    ) -> None:
        super().__init__()
        self._parent = parent
        self._data: Dict[str, Entry] = {k: Entry(v) for k, v in (data or {}).items()}
        self._in_transaction = False

    @classmethod
    def empty(cls) -> "Context":
        return cls()

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    @property
    def parent(self) -> Optional["Context"]:
        return self._parent

    @property
    def is_empty(self) -> bool:
        return not self._data

    def keys(self) -> KeysView[str]:
        return self._data.keys()

    def child(self, data: Mapping[str, Any] | None = None) -> "Context":
        """Create a context inheriting from this one."""
        return type(self)(data=data, parent=self)

    # ------------------------------------------------------------------
    # Untyped access
    # ------------------------------------------------------------------
    def entry(self, key: str) -> Entry | None:
        node: Context | None = self
        while node is not None:
            found = node._data.get(key)
            if found is not None:
                return found
            node = node._parent
        return None

    def read(self, key: str) -> Any:
        found = self.entry(key)
        return found.value if found is not None else None

    def write(self, key: str, value: Any) -> None:
        self._data[key] = Entry(value)
        if not self._in_transaction:
            self.notify_listeners()

    def has(self, key: str) -> bool:
        return self.entry(key) is not None

    def __getitem__(self, key: str) -> Any:
        return self.read(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.write(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # Fluent writers ---------------------------------------------------
    def set(self, key: str, value: Any) -> "Context":
        self.write(key, value)
        return self

    def update(self, values: Mapping[str, Any]) -> "Context":
        for key, value in values.items():
            self.write(key, value)
        return self

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------
    def get(self, key: str, expected_type: Type[T] | Any = object) -> T | None:
        """Return the nearest value for `key`, checked against `expected_type`.

        Missing keys and stored `None` values yield `None`. Only the nearest
        definition is checked; an ancestor's value shadowed by a closer one is
        never inspected.

        `expected_type` may be a class, `Any`, a tuple of classes, a union
        (`int | str`, `Optional[int]`), a `Literal[...]` (membership check) or
        a parameterized generic (`list[int]`, checked on `list` only). Anything
        else, such as a string annotation or a bare `TypeVar`, raises
        `UnsupportedExpectedTypeError` whether or not the key is set.
        """
        if not _is_checkable(expected_type):
            raise UnsupportedExpectedTypeError(key, expected_type)
        found = self.entry(key)
        if found is None or found.value is None:
            return None
        if not _matches(found.value, expected_type):
            raise ContextTypeMismatchError(key, expected_type, found.declared_type)
        return found.value

    # ------------------------------------------------------------------
    # Batching
    # ------------------------------------------------------------------
    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def begin(self) -> None:
        """Defer notifications until `end()`.

        Calling while already batching keeps the batch open; there is no
        nesting counter, so the first `end()` closes it.
        """
        self._in_transaction = True

    def end(self) -> None:
        """Close the batch and notify listeners exactly once."""
        if not self._in_transaction:
            raise ContextTransactionError("end() called without matching begin()")
        self._in_transaction = False
        self.notify_listeners()

    @contextmanager
    def batch(self) -> Iterator["Context"]:
        """Context manager form of `begin()` / `end()`.

        The batch is closed (and listeners notified) even when the block
        raises.
        """
        self.begin()
        try:
            yield self
        finally:
            if self._in_transaction:
                self.end()
            else:
                logger.debug("batch on %r was already closed inside the block", self)

    def __repr__(self) -> str:
        return f"Context(keys={list(self._data)!r}, parent={'yes' if self._parent else 'no'})"
