"""Trickster policy: misdirect while watched, play straight when not."""

from ...models.ai import AIState, Decision
from ...models.game import GameState
from ...models.player import PlayerState
from ...utils.rng import GameRNG
from .base import (
    build_income_structure,
    build_random_unit,
    can_afford_build,
    can_afford_scan,
    get_dominant_unit_type,
    has_available_fleet,
    plan_attack_fleet,
    update_assessments,
    weighted_fleet_strength,
)

UNWATCHED_TURNS = 3  # Turns without a player scan before playing straight
STRAIGHTFORWARD_CHANCE = 0.3
DECOY_SCAN_CHANCE = 0.4
MIN_ATTACK_FLEET = 6
MAX_ATTACK_THREAT = 0.6
REQUIRED_STRENGTH_MULTIPLE = 1.2
ATTACK_RATIO_RANGE = (0.5, 0.7)
INCOME_TARGET = 15000

# Player's dominant unit type -> (counter unit, quantity)
OPTIMAL_COUNTERS = {
    "frigate": ("battleship", 1),
    "cruiser": ("frigate", 3),
    "battleship": ("cruiser", 2),
}


def decide(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    """Pick the trickster's action for this turn.

    When the player has not scanned for a while the trickster may drop the
    act and play optimally. Otherwise it mostly makes decoy scans and builds
    units that look like poor counters.
    """
    update_assessments(game_state, ai_state)
    turns_unwatched = game_state.turn - game_state.player.intelligence.last_scan_turn

    if turns_unwatched > UNWATCHED_TURNS and rng.random() < STRAIGHTFORWARD_CHANCE:
        ai_state.trickster_mode = "straightforward"
        return _straightforward_decision(game_state, ai_state, rng)
    if rng.random() < ai_state.behavior.deception_chance:
        ai_state.trickster_mode = "deceptive"
        return _deceptive_decision(game_state, ai_state, rng)
    ai_state.trickster_mode = "balanced"
    return _balanced_decision(game_state.ai, rng)


def _deceptive_decision(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    turn = game_state.turn
    if turn - ai_state.last_deception_turn >= ai_state.deception_cooldown:
        if can_afford_scan(ai, "basic") and rng.random() < DECOY_SCAN_CHANCE:
            ai_state.last_deception_turn = turn
            return Decision.scan("basic")
    return _build_unexpected_units(game_state, rng)


def _build_unexpected_units(game_state: GameState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    dominant = get_dominant_unit_type(game_state.player.home_fleet)

    # Deliberately not the counter the player expects
    if dominant == "frigate":
        if can_afford_build(ai, "cruiser"):
            return Decision.build("cruiser", rng.randint(1, 2))
    elif dominant == "cruiser":
        if can_afford_build(ai, "battleship"):
            return Decision.build("battleship", 1)
    elif can_afford_build(ai, "frigate", 3):
        return Decision.build("frigate", rng.randint(2, 5))

    return build_random_unit(ai, rng)


def _straightforward_decision(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    home = ai.home_fleet
    if home.total >= MIN_ATTACK_FLEET and ai_state.threat_level < MAX_ATTACK_THREAT:
        our_strength = weighted_fleet_strength(home)
        enemy_strength = weighted_fleet_strength(game_state.player.home_fleet)
        if our_strength >= enemy_strength * REQUIRED_STRENGTH_MULTIPLE:
            fleet = plan_attack_fleet(home, rng.uniform(*ATTACK_RATIO_RANGE))
            if fleet is not None and has_available_fleet(ai, fleet):
                return Decision.attack(fleet)
    return _build_optimal_units(game_state)


def _build_optimal_units(game_state: GameState) -> Decision:
    ai = game_state.ai
    unit_type, quantity = OPTIMAL_COUNTERS[get_dominant_unit_type(game_state.player.home_fleet)]
    if can_afford_build(ai, unit_type, quantity):
        return Decision.build(unit_type, quantity)
    if can_afford_build(ai, "frigate"):
        return Decision.build("frigate", 1)
    return Decision.wait()


def _balanced_decision(ai: PlayerState, rng: GameRNG) -> Decision:
    if rng.random() < 0.5:
        resources = ai.resources
        if resources.metal_income < INCOME_TARGET:
            decision = build_income_structure(ai, prefer_mine=True)
            if decision is not None:
                return decision
        if resources.energy_income < INCOME_TARGET:
            decision = build_income_structure(ai, prefer_mine=False)
            if decision is not None:
                return decision
    return build_random_unit(ai, rng)
