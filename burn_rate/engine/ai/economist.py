"""Economist policy: grow income, defend, attack only from overwhelming strength."""

from ...models.ai import AIState, Decision
from ...models.game import GameState
from ...models.player import PlayerState
from ...utils.rng import GameRNG
from .base import (
    can_afford_build,
    can_afford_scan,
    has_available_fleet,
    plan_attack_fleet,
    update_assessments,
    weighted_fleet_strength,
)

THREAT_RESPONSE = 0.5
MIN_ATTACK_FLEET = 10
REQUIRED_ECONOMIC_ADVANTAGE = 0.3
REQUIRED_STRENGTH_MULTIPLE = 2.0
ATTACK_RATIO_RANGE = (0.4, 0.5)
INCOME_TARGET = 25000
DEFENSIVE_FLEET_TARGET = 8
SCAN_CHANCE = 0.3


def decide(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    """Pick the economist's action for this turn."""
    update_assessments(game_state, ai_state)
    behavior = ai_state.behavior

    if ai_state.threat_level > THREAT_RESPONSE and rng.random() < behavior.military_focus:
        return _military_decision(game_state, ai_state, rng)
    if rng.random() < behavior.economic_focus:
        return _economic_decision(game_state.ai, rng)
    return _defensive_decision(game_state.ai, rng)


def _economic_decision(ai: PlayerState, rng: GameRNG) -> Decision:
    resources = ai.resources
    if resources.metal_income + resources.energy_income < INCOME_TARGET:
        if resources.metal_income <= resources.energy_income:
            if can_afford_build(ai, "mine"):
                return Decision.build("mine", 1)
        elif can_afford_build(ai, "reactor"):
            return Decision.build("reactor", 1)
    return _defensive_decision(ai, rng)


def _military_decision(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    ai = game_state.ai
    home = ai.home_fleet
    if home.total >= MIN_ATTACK_FLEET and ai_state.economic_advantage > REQUIRED_ECONOMIC_ADVANTAGE:
        our_strength = weighted_fleet_strength(home)
        enemy_strength = weighted_fleet_strength(game_state.player.home_fleet)
        if our_strength >= enemy_strength * REQUIRED_STRENGTH_MULTIPLE:
            fleet = plan_attack_fleet(home, rng.uniform(*ATTACK_RATIO_RANGE))
            if fleet is not None and has_available_fleet(ai, fleet):
                return Decision.attack(fleet)
    return _defensive_decision(ai, rng)


def _defensive_decision(ai: PlayerState, rng: GameRNG) -> Decision:
    if ai.home_fleet.total < DEFENSIVE_FLEET_TARGET:
        if can_afford_build(ai, "cruiser"):
            return Decision.build("cruiser", 1)
        if can_afford_build(ai, "frigate", 2):
            return Decision.build("frigate", 2)
        if can_afford_build(ai, "battleship"):
            return Decision.build("battleship", 1)

    if can_afford_scan(ai, "deep") and rng.random() < SCAN_CHANCE:
        return Decision.scan("deep")
    return Decision.wait()
