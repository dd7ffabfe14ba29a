"""Victory condition checking.

This module handles:
1. Economic defeat: a stalled economy with no resources left
2. Military defeat: no ships anywhere after having been attacked
3. Tie-breaks: economic defeat is checked first, and when both sides lose
   in the same way the AI wins
"""

import logging
from dataclasses import dataclass
from typing import Literal

from ..models.fleet import FleetComposition, FleetMovement
from ..models.game import GameState, Side, VictoryType
from ..models.player import PlayerState
from .economy import is_economy_stalled
from .movement import check_fleet_elimination

logger = logging.getLogger(__name__)

VictoryStatus = Literal["player_victory", "ai_victory", "ongoing"]


@dataclass
class VictoryResult:
    """Winner and how they won."""

    winner: Side
    victory_type: VictoryType


def check_victory_conditions(
    player_home: FleetComposition,
    player_movements: list[FleetMovement],
    ai_home: FleetComposition,
    ai_movements: list[FleetMovement],
) -> VictoryStatus:
    """Fleet-presence victory check.

    A side with ships neither at home nor in transit has lost. When both
    sides have no ships left the AI wins.
    """
    player_eliminated = check_fleet_elimination(player_home, player_movements)
    ai_eliminated = check_fleet_elimination(ai_home, ai_movements)

    if player_eliminated:
        return "ai_victory"
    if ai_eliminated:
        return "player_victory"
    return "ongoing"


def is_economically_defeated(player: PlayerState) -> bool:
    """Stalled economy with both stockpiles exhausted."""
    return (
        is_economy_stalled(player)
        and player.resources.metal <= 0
        and player.resources.energy <= 0
    )


def is_militarily_defeated(player: PlayerState) -> bool:
    """No ships anywhere, after having been attacked at least once."""
    return player.has_been_attacked and check_fleet_elimination(
        player.home_fleet, player.movements
    )


def check_victory(game_state: GameState) -> VictoryResult | None:
    """Evaluate both victory conditions for a game.

    Economic defeat is checked before military defeat. Within each check, the
    player losing takes precedence so the AI wins mutual defeats.

    Args:
        game_state: Current game state (not modified)

    Returns:
        VictoryResult if the game is decided, otherwise None
    """
    if is_economically_defeated(game_state.player):
        return VictoryResult(winner="ai", victory_type="economic")
    if is_economically_defeated(game_state.ai):
        return VictoryResult(winner="player", victory_type="economic")

    if is_militarily_defeated(game_state.player):
        return VictoryResult(winner="ai", victory_type="military")
    if is_militarily_defeated(game_state.ai):
        return VictoryResult(winner="player", victory_type="military")

    return None
