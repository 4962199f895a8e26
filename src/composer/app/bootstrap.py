"""Application bootstrap for the composer demo.

Responsibilities:
 - Logging level for the `composer` logger tree
 - Optional QApplication creation (skipped when headless, e.g. in tests)
 - Creating the application `Composer` and registering the bundled builders
 - Creating the root context (design tokens) every page context inherits from

The returned `AppContext` owns these objects. The most recent one is kept as
the active application so `get_composer()` can reach its registry.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from PyQt6.QtWidgets import QApplication

from composer import settings
from composer.demo.initializer import initialize_composer
from composer.design.tokens import Colors, Sizes
from composer.services.context import Context
from composer.services.registry import Composer

__all__ = [
    "AppContext",
    "AppNotInitializedError",
    "active_app",
    "create_app",
    "configure_logging",
    "get_composer",
    "parse_headless",
    "reset_app",
]

logger = logging.getLogger(__name__)


class AppNotInitializedError(LookupError):
    def __init__(self) -> None:
        super().__init__("No application bootstrapped; call create_app() first")


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    composer: Application builder registry (bundled builders defined)
    root_context: Context holding design tokens; parent of page contexts
    started_at / duration_s: Bootstrap timing
    metadata: Free-form extras
    """

    qt_app: Optional[Any]
    headless: bool
    composer: Composer
    root_context: Context
    started_at: float
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)

    def page_context(self, **values: Any) -> Context:
        """New context for a page, inheriting the root design tokens."""
        return Context(data=values, parent=self.root_context)


_active: AppContext | None = None


def configure_logging(level: str | int | None = None) -> None:
    logging.getLogger("composer").setLevel(level if level is not None else settings.LOG_LEVEL)


def parse_headless(argv: list[str] | None = None) -> bool:
    """Parse a `--headless` flag from argv (non-destructive)."""
    args = argv if argv is not None else sys.argv[1:]
    return "--headless" in args


def create_app(
    *,
    headless: bool | None = None,
    composer: Composer | None = None,
    activate: bool = True,
) -> AppContext:
    """Create and initialize the application context.

    Parameters
    ----------
    headless: Skip QApplication creation. If None, inferred from argv.
    composer: Registry to initialize; a fresh one is created when omitted.
    activate: Make the result the application `get_composer()` reads from.
    """
    global _active
    started = time.perf_counter()
    configure_logging()
    if headless is None:
        headless = parse_headless()

    qt_app = None
    if not headless:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    composer = initialize_composer(composer if composer is not None else Composer())
    root_context = Context(data={"sizes": Sizes(), "colors": Colors()})

    duration = time.perf_counter() - started
    logger.info(
        "Bootstrap complete in %.1f ms (%d builders, headless=%s)",
        duration * 1000.0,
        len(composer),
        headless,
    )
    app = AppContext(
        qt_app=qt_app,
        headless=headless,
        composer=composer,
        root_context=root_context,
        started_at=started,
        duration_s=duration,
        metadata={"builders": composer.defined_names()},
    )
    if activate:
        _active = app
    return app


def active_app() -> AppContext:
    if _active is None:
        raise AppNotInitializedError()
    return _active


def reset_app() -> None:
    """Forget the active application (tests, re-bootstrap)."""
    global _active
    _active = None


def get_composer() -> Composer:
    """Return the composer of the active application."""
    return active_app().composer
