"""Application layer: bootstrap and the process-wide composer accessor."""

from .bootstrap import (  # noqa: F401
    AppContext,
    AppNotInitializedError,
    active_app,
    configure_logging,
    create_app,
    get_composer,
    reset_app,
)

__all__ = [
    "AppContext",
    "AppNotInitializedError",
    "active_app",
    "configure_logging",
    "create_app",
    "get_composer",
    "reset_app",
]
