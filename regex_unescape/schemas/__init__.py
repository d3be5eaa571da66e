"""Result schemas."""

from .results import EscapeTokenModel, UnescapeResult, UnescapeReport

__all__ = [
    "EscapeTokenModel",
    "UnescapeResult",
    "UnescapeReport",
]
