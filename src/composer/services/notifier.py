"""Change notification core.

Synchronous observer list used by `Context` to tell interested parties that
its state changed. Modelled after the EventBus: listeners are snapshotted
before dispatch so they may subscribe/unsubscribe while being notified, and a
failing listener never breaks the notification cycle.

Also hosts the memoized selector (`Selector`) used for selective
subscriptions: a derived value is recomputed on every notification and only
forwarded when it differs from the previous one.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Generic, List, Protocol, Tuple, TypeVar

from composer import settings

__all__ = [
    "ChangeNotifier",
    "Listener",
    "Subscription",
    "Selector",
    "Selection",
]

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="ChangeNotifier")
V = TypeVar("V")


class Listener(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, notifier: Any) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    handler: Listener
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class ChangeNotifier:
    """Plain "something changed" notifier.

    Not thread-safe: mutation is expected from the owning event loop only.
    """

    def __init__(self) -> None:
        self._subs: List[Subscription] = []
        self._errors: Deque[Tuple[Any, BaseException]] = deque(
            maxlen=settings.NOTIFIER_ERROR_CAPACITY
        )
        self._disposed = False

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def add_listener(self, handler: Listener, *, once: bool = False) -> Subscription:
        if self._disposed:
            raise RuntimeError(f"{type(self).__name__} was used after being disposed")
        sub = Subscription(handler=handler, once=once)
        self._subs.append(sub)
        return sub

    def remove_listener(self, sub: Subscription) -> None:
        for i, existing in enumerate(self._subs):
            if existing is sub:
                self._subs.pop(i)
                break
        sub.active = False

    @property
    def has_listeners(self) -> bool:
        return any(s.active for s in self._subs)

    def listener_count(self) -> int:
        return sum(1 for s in self._subs if s.active)

    def dispose(self) -> None:
        for sub in self._subs:
            sub.active = False
        self._subs.clear()
        self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def notify_listeners(self) -> None:
        if self._disposed:
            return
        subs = list(self._subs)
        for sub in subs:
            if not sub.active:
                continue
            if sub.once:
                # Deactivate before the call so re-entrant notifications skip it
                sub.active = False
            try:
                sub.handler(self)
            except Exception as exc:  # noqa: BLE001 - isolate listener failures
                self._errors.append((sub.handler, exc))
                logger.warning(
                    "Listener %r of %s raised during notification",
                    sub.handler,
                    type(self).__name__,
                    exc_info=exc,
                )
        if any(not s.active for s in self._subs):
            self._subs = [s for s in self._subs if s.active]

    @property
    def errors(self) -> list[Tuple[Any, BaseException]]:
        return list(self._errors)

    def clear_errors(self) -> None:
        self._errors.clear()

    # ------------------------------------------------------------------
    # Selective subscription
    # ------------------------------------------------------------------
    def select(
        self: N, selector: Callable[[N], V], on_change: Callable[[V], None]
    ) -> "Selection[V]":
        """Subscribe to a value derived from this notifier.

        `on_change` fires only when `selector(self)` compares unequal to the
        previously computed value.
        """
        return Selector(self, selector).subscribe(on_change)


class Selector(Generic[V]):
    """Memoized projection of a notifier's state."""

    def __init__(self, source: ChangeNotifier, selector: Callable[[Any], V]) -> None:
        self._source = source
        self._selector = selector

    @property
    def source(self) -> ChangeNotifier:
        return self._source

    def compute(self) -> V:
        return self._selector(self._source)

    def subscribe(self, on_change: Callable[[V], None]) -> "Selection[V]":
        return Selection(self, on_change)


class Selection(Generic[V]):
    """Live selective subscription returned by `ChangeNotifier.select`."""

    def __init__(self, selector: Selector[V], on_change: Callable[[V], None]) -> None:
        self._selector = selector
        self._on_change = on_change
        self._value: V = selector.compute()
        self._recomputations = 0
        self._sub = selector.source.add_listener(self._handle)

    def _handle(self, _source: ChangeNotifier) -> None:
        new_value = self._selector.compute()
        self._recomputations += 1
        if new_value == self._value:
            return
        self._value = new_value
        self._on_change(new_value)

    @property
    def value(self) -> V:
        return self._value

    @property
    def recomputations(self) -> int:
        return self._recomputations

    @property
    def active(self) -> bool:
        return self._sub.active

    def cancel(self) -> None:
        self._selector.source.remove_listener(self._sub)
