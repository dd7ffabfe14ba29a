"""Utility functions and constants for Burn Rate."""

from .constants import (
    AI_ARCHETYPES,
    BASE_INCOME,
    EFFECTIVENESS_MATRIX,
    RNG_SEED_DEFAULT,
    SCAN_COSTS,
    STRUCTURE_STATS,
    STRUCTURE_TYPES,
    UNIT_STATS,
    UNIT_TYPES,
)
from .error_log import ErrorLog, ErrorResponse, GameError, is_recoverable
from .rng import GameRNG

__all__ = [
    "AI_ARCHETYPES",
    "BASE_INCOME",
    "EFFECTIVENESS_MATRIX",
    "RNG_SEED_DEFAULT",
    "SCAN_COSTS",
    "STRUCTURE_STATS",
    "STRUCTURE_TYPES",
    "UNIT_STATS",
    "UNIT_TYPES",
    "ErrorLog",
    "ErrorResponse",
    "GameError",
    "is_recoverable",
    "GameRNG",
]
