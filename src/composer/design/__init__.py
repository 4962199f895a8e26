"""Design tokens consumed by composed widgets."""

from .tokens import Colors, Sizes  # noqa: F401

__all__ = ["Colors", "Sizes"]
