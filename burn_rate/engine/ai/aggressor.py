"""Aggressor policy: attack early and often, build cheap ships."""

from ...models.ai import AIState, Decision
from ...models.game import GameState
from ...models.player import PlayerState
from ...utils.rng import GameRNG
from .base import can_afford_build, has_available_fleet, plan_attack_fleet, update_assessments

MIN_ATTACK_FLEET = 5
MAX_ATTACK_THREAT = 0.8
PANIC_THREAT = 0.7
ATTACK_RATIO_RANGE = (0.6, 0.8)
INCOME_TARGET = 15000


def decide(game_state: GameState, ai_state: AIState, rng: GameRNG) -> Decision:
    """Pick the aggressor's action for this turn.

    Under heavy threat the aggressor occasionally turtles; otherwise it
    mostly takes the military branch and only builds economy while its
    income is low.
    """
    update_assessments(game_state, ai_state)
    behavior = ai_state.behavior
    ai = game_state.ai

    if rng.random() < behavior.adaptive_variation and ai_state.threat_level > PANIC_THREAT:
        return _defensive_build(ai, rng)
    if rng.random() < behavior.military_focus:
        return _military_decision(ai, ai_state, rng)
    return _economic_decision(ai, rng)


def _defensive_build(ai: PlayerState, rng: GameRNG) -> Decision:
    if can_afford_build(ai, "battleship"):
        return Decision.build("battleship", 1)
    if can_afford_build(ai, "cruiser"):
        return Decision.build("cruiser", rng.randint(1, 3))
    if can_afford_build(ai, "frigate"):
        return Decision.build("frigate", rng.randint(1, 5))
    return Decision.wait()


def _military_decision(ai: PlayerState, ai_state: AIState, rng: GameRNG) -> Decision:
    home = ai.home_fleet
    if home.total >= MIN_ATTACK_FLEET and ai_state.threat_level < MAX_ATTACK_THREAT:
        fleet = plan_attack_fleet(home, rng.uniform(*ATTACK_RATIO_RANGE))
        if fleet is not None and has_available_fleet(ai, fleet):
            return Decision.attack(fleet)
    return _build_military_units(ai, rng)


def _build_military_units(ai: PlayerState, rng: GameRNG) -> Decision:
    if can_afford_build(ai, "frigate", 3):
        return Decision.build("frigate", rng.randint(1, 3))
    if can_afford_build(ai, "cruiser", 2):
        return Decision.build("cruiser", rng.randint(1, 2))
    if can_afford_build(ai, "battleship"):
        return Decision.build("battleship", 1)
    return Decision.wait()


def _economic_decision(ai: PlayerState, rng: GameRNG) -> Decision:
    resources = ai.resources
    if resources.metal_income + resources.energy_income < INCOME_TARGET:
        if resources.metal_income < resources.energy_income and can_afford_build(ai, "mine"):
            return Decision.build("mine", 1)
        if can_afford_build(ai, "reactor"):
            return Decision.build("reactor", 1)
    return _build_military_units(ai, rng)
