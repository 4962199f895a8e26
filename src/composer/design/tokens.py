"""Default design tokens read by builders through the context.

Builders look these up under the `sizes` / `colors` keys and fall back to a
fresh default instance when nothing was provided, so a bare `Context()` is
always renderable.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Sizes", "Colors"]


@dataclass
class Sizes:
    """Spacing / font scale in pixels."""

    sm: float = 8.0
    md: float = 16.0
    lg: float = 32.0

    def px(self, key: str) -> int:
        return int(round(getattr(self, key)))


@dataclass
class Colors:
    """Hex colors (QSS compatible)."""

    primary: str = "#2196F3"
    secondary: str = "#9E9E9E"
    accent: str = "#F44336"
