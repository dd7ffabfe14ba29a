"""Hybrid policy: rotate between strategies, blending military and economy.

The hybrid commits to one of four strategies for a few turns at a time.
When the situation is even, the next strategy comes from a coin flip
weighted by the military and economic focus of its behaviour profile.
"""

from ...models.ai import HYBRID_STRATEGIES, AIState, Decision, HybridStrategy
from ...models.game import GameState
from ...models.player import PlayerState
from ...utils.rng import GameRNG
from .base import (
    can_afford_build,
    can_afford_scan,
    get_counter_unit_type,
    get_dominant_unit_type,
    has_available_fleet,
    plan_attack_fleet,
    update_assessments,
)

HIGH_THREAT = 0.7
REACTIVE_THREAT = 0.5
ECONOMIC_LEAD = 0.3
STRATEGY_DURATION_RANGE = (2, 4)
PLAYER_ECONOMY_ALERT = 20000

MIN_ATTACK_FLEET = 4
ATTACK_RATIO_RANGE = (0.7, 0.9)
INCOME_TARGET = 20000
DEFENSIVE_FLEET_TARGET = 8
DEFENSIVE_SCAN_CHANCE = 0.4
OPPORTUNITY_PLAYER_FLEET = 2
OPPORTUNITY_ATTACK_RATIO = 0.8


def select_initial_strategy(rng: GameRNG) -> HybridStrategy:
    return rng.choice(HYBRID_STRATEGIES)


def select_new_strategy(ai_state: AIState, rng: GameRNG) -> HybridStrategy:
    """Choose the next strategy from the current assessments."""
    if ai_state.threat_level > HIGH_THREAT:
        return "defensive" if rng.random() < 0.7 else "aggressive"
    if ai_state.economic_advantage < -ECONOMIC_LEAD:
        return "economic" if rng.random() < 0.6 else "opportunistic"
    if ai_state.economic_advantage > ECONOMIC_LEAD:
        return "aggressive" if rng.random() < 0.6 else "opportunistic"

    behavior = ai_state.behavior
    military_weight = behavior.military_focus / (behavior.military_focus + behavior.economic_focus)
    return "aggressive" if rng.random() < military_weight else "economic"


def _adapt_strategy(game_state: GameState, ai_state: AIState, rng: GameRNG):
    """React to what the player is doing right now."""
    player = game_state.player
    if player.home_fleet.total > 5 and ai_state.threat_level > REACTIVE_THREAT:
        ai_state.current_strategy = "defensive" if rng.random() < 0.6 else "aggressive"

    player_income = player.resources.metal_income + player.resources.energy_income
    if player_income > PLAYER_ECONOMY_ALERT and ai_state.economic_advantage < 0:
        ai_state.current_strategy = "economic" if rng.random() < 0.5 else "aggressive"


def decide(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    """Pick the hybrid's action for this turn.

    Args:
        game_state: Current game state (read only)
        ai_state: Assessments and strategy memory (updated)
        rng: Source of randomness

    Returns:
        Decision from the current strategy
    """
    update_assessments(game_state, ai_state)

    if rng.random() < ai_state.behavior.adaptive_variation:
        _adapt_strategy(game_state, ai_state, rng)

    ai_state.strategy_timer += 1
    if ai_state.strategy_timer >= ai_state.strategy_duration:
        ai_state.current_strategy = select_new_strategy(ai_state, rng)
        ai_state.strategy_timer = 0
        ai_state.strategy_duration = rng.randint(*STRATEGY_DURATION_RANGE)

    strategy = ai_state.current_strategy
    if strategy == "aggressive":
        return _aggressive_decision(game_state, rng)
    if strategy == "economic":
        return _economic_decision(game_state.ai)
    if strategy == "defensive":
        return _defensive_decision(game_state, rng)
    return _opportunistic_decision(game_state)


def _aggressive_decision(game_state: GameState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    if ai.home_fleet.total >= MIN_ATTACK_FLEET:
        fleet = plan_attack_fleet(ai.home_fleet, rng.uniform(*ATTACK_RATIO_RANGE))
        if fleet is not None and has_available_fleet(ai, fleet):
            return Decision.attack(fleet)
    if can_afford_build(ai, "frigate", 2):
        return Decision.build("frigate", rng.randint(1, 3))
    if can_afford_build(ai, "cruiser"):
        return Decision.build("cruiser", 1)
    return Decision.wait()


def _economic_decision(ai: PlayerState) -> Decision:
    resources = ai.resources
    if resources.metal_income + resources.energy_income < INCOME_TARGET:
        if resources.metal_income <= resources.energy_income:
            if can_afford_build(ai, "mine"):
                return Decision.build("mine", 1)
        elif can_afford_build(ai, "reactor"):
            return Decision.build("reactor", 1)

    if ai.home_fleet.total < 3 and can_afford_build(ai, "cruiser"):
        return Decision.build("cruiser", 1)
    return Decision.wait()


def _defensive_decision(game_state: GameState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    if ai.home_fleet.total < DEFENSIVE_FLEET_TARGET:
        counter = get_counter_unit_type(get_dominant_unit_type(game_state.player.home_fleet))
        if can_afford_build(ai, counter):
            return Decision.build(counter, 1)
    if can_afford_scan(ai, "deep") and rng.random() < DEFENSIVE_SCAN_CHANCE:
        return Decision.scan("deep")
    return Decision.wait()


def _opportunistic_decision(game_state: GameState) -> Decision:
    ai = game_state.ai
    player = game_state.player
    if player.home_fleet.total <= OPPORTUNITY_PLAYER_FLEET and ai.home_fleet.total >= 3:
        fleet = plan_attack_fleet(ai.home_fleet, OPPORTUNITY_ATTACK_RATIO)
        if fleet is not None and has_available_fleet(ai, fleet):
            return Decision.attack(fleet)

    player_income = player.resources.metal_income + player.resources.energy_income
    if player_income > ai.resources.metal_income + ai.resources.energy_income:
        return _economic_decision(ai)

    if can_afford_build(ai, "cruiser"):
        return Decision.build("cruiser", 1)
    if can_afford_build(ai, "frigate"):
        return Decision.build("frigate", 2)
    return Decision.wait()
