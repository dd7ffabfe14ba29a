"""Game engine components."""

from .game_engine import GameEngine
from .turn_executor import TurnExecutor, TurnPhase, TurnReport

__all__ = [
    "GameEngine",
    "TurnExecutor",
    "TurnPhase",
    "TurnReport",
]
