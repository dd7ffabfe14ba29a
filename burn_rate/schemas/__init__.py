"""Request and response schemas for the game engine."""

from .requests import (
    AttackAction,
    BuildAction,
    FleetSpec,
    GameConfig,
    PlayerAction,
    ScanAction,
    parse_action,
)
from .responses import ExecutionResult, TurnResult

__all__ = [
    "AttackAction",
    "BuildAction",
    "FleetSpec",
    "GameConfig",
    "PlayerAction",
    "ScanAction",
    "parse_action",
    "ExecutionResult",
    "TurnResult",
]
