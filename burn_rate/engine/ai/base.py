"""Shared helpers for AI decision policies.

Policies only read the game state. Affordability checks here use base unit
and structure costs; the turn orchestrator re-validates every decision
against the real economy before applying it.
"""

import math

from ...models.ai import AIState, Decision
from ...models.fleet import FleetComposition
from ...models.game import GameState
from ...models.player import PlayerState
from ...utils.constants import (
    AI_STRENGTH_WEIGHTS,
    COUNTER_UNITS,
    SCAN_COSTS,
    STRUCTURE_STATS,
    UNIT_STATS,
    UNIT_TYPES,
)
from ...utils.rng import GameRNG


def weighted_fleet_strength(fleet: FleetComposition) -> float:
    """Rough fleet value: frigate 1, cruiser 2.5, battleship 5."""
    return sum(AI_STRENGTH_WEIGHTS[unit_type] * fleet.count(unit_type) for unit_type in UNIT_TYPES)


def calculate_threat_level(game_state: GameState) -> float:
    """How outmatched the AI's home fleet is, from 0 (safe) to 1.

    Returns:
        1.0 if the AI has no home fleet, otherwise
        clamp(player_strength / ai_strength - 0.5, 0, 1)
    """
    ai_strength = weighted_fleet_strength(game_state.ai.home_fleet)
    if ai_strength == 0:
        return 1.0
    ratio = weighted_fleet_strength(game_state.player.home_fleet) / ai_strength
    return min(1.0, max(0.0, ratio - 0.5))


def calculate_economic_advantage(game_state: GameState) -> float:
    """Relative income lead of the AI, from -1 to 1."""
    player = game_state.player.resources
    ai = game_state.ai.resources
    player_income = player.metal_income + player.energy_income
    ai_income = ai.metal_income + ai.energy_income
    if player_income + ai_income == 0:
        return 0.0
    return (ai_income - player_income) / (ai_income + player_income)


def update_assessments(game_state: GameState, ai_state: AIState):
    ai_state.threat_level = calculate_threat_level(game_state)
    ai_state.economic_advantage = calculate_economic_advantage(game_state)


def get_build_costs(build_type: str, quantity: int = 1) -> tuple[int, int]:
    """Base (unscaled) metal and energy cost of a build."""
    if build_type in UNIT_STATS:
        cost = UNIT_STATS[build_type]["build_cost"]
    elif build_type in STRUCTURE_STATS:
        cost = STRUCTURE_STATS[build_type]["base_cost"]
    else:
        raise ValueError(f"Invalid build type: {build_type}")
    return cost["metal"] * quantity, cost["energy"] * quantity


def can_afford_build(player: PlayerState, build_type: str, quantity: int = 1) -> bool:
    metal, energy = get_build_costs(build_type, quantity)
    return player.resources.metal >= metal and player.resources.energy >= energy


def can_afford_scan(player: PlayerState, scan_type: str) -> bool:
    return player.resources.energy >= SCAN_COSTS[scan_type]["energy"]


def get_dominant_unit_type(fleet: FleetComposition) -> str:
    """Most numerous unit type; ties favour frigate, then cruiser."""
    if fleet.frigates >= fleet.cruisers and fleet.frigates >= fleet.battleships:
        return "frigate"
    if fleet.cruisers >= fleet.battleships:
        return "cruiser"
    return "battleship"


def get_counter_unit_type(unit_type: str) -> str:
    """Unit type that is strong against the given one."""
    return COUNTER_UNITS[unit_type]


def has_available_fleet(player: PlayerState, fleet: FleetComposition) -> bool:
    return player.home_fleet.covers(fleet)


def plan_attack_fleet(available: FleetComposition, ratio: float) -> FleetComposition | None:
    """Commit a share of every unit type, or None if that sends nothing."""
    fleet = FleetComposition(
        frigates=math.floor(available.frigates * ratio),
        cruisers=math.floor(available.cruisers * ratio),
        battleships=math.floor(available.battleships * ratio),
    )
    if fleet.is_empty():
        return None
    return fleet


def validate_decision(decision: Decision, player: PlayerState) -> bool:
    """Check a decision against the AI's holdings at base costs."""
    if decision.kind == "build":
        return can_afford_build(player, decision.build_type, decision.quantity)
    if decision.kind == "attack":
        return decision.attack_fleet is not None and has_available_fleet(
            player, decision.attack_fleet
        )
    if decision.kind == "scan":
        return can_afford_scan(player, decision.scan_type)
    return True


def build_random_unit(player: PlayerState, rng: GameRNG) -> Decision:
    """One unit of a random type, if affordable."""
    unit_type = rng.choice(UNIT_TYPES)
    if can_afford_build(player, unit_type):
        return Decision.build(unit_type, 1)
    return Decision.wait()


def build_income_structure(player: PlayerState, prefer_mine: bool) -> Decision | None:
    """A mine or reactor, whichever is preferred, if affordable."""
    structure = "mine" if prefer_mine else "reactor"
    if can_afford_build(player, structure):
        return Decision.build(structure, 1)
    return None
