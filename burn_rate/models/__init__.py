"""Data models for Burn Rate."""

from .ai import AIState, BehaviorProbabilities, Decision
from .economy import BuildOrder, Economy, Resources
from .fleet import FleetComposition, FleetMovement
from .game import CombatEvent, GameState, determine_game_phase
from .intelligence import EconomicIntel, Intelligence, ScanResult
from .player import PlayerState

__all__ = [
    "FleetComposition",
    "FleetMovement",
    "BuildOrder",
    "Economy",
    "Resources",
    "EconomicIntel",
    "Intelligence",
    "ScanResult",
    "PlayerState",
    "CombatEvent",
    "GameState",
    "determine_game_phase",
    "AIState",
    "BehaviorProbabilities",
    "Decision",
]
