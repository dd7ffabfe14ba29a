"""Burn Rate: turn-based fleet and economy simulation against an AI opponent."""

from .engine import GameEngine
from .schemas import GameConfig

__all__ = [
    "GameEngine",
    "GameConfig",
]
