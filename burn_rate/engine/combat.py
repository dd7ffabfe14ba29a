"""Combat resolution.

This module handles:
1. Unit effectiveness from the rock-paper-scissors matrix
2. Fleet strength with per-unit-type random factors
3. Battle outcome classification from the strength ratio
4. Casualties: one loss fraction per side, floored per unit type

Every random draw can be overridden with explicit values so battles are
reproducible in tests and replays.
"""

import logging
import math
from dataclasses import dataclass, field

from ..models.fleet import FleetComposition
from ..models.game import BattleOutcome
from ..utils.constants import (
    CASUALTY_RANGES,
    DECISIVE_RATIO,
    EFFECTIVENESS_MATRIX,
    RANDOM_FACTOR_RANGE,
    UNIT_TYPES,
)
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


@dataclass
class CasualtyReport:
    """Split of one fleet into casualties and survivors."""

    survivors: FleetComposition
    casualties: FleetComposition


@dataclass
class CombatFactors:
    """Explicit values for every random draw in a battle.

    Any field left as None is drawn from the RNG instead.

    Attributes:
        attacker_factors: Per-unit-type strength multipliers for the attacker
        defender_factors: Per-unit-type strength multipliers for the defender
        attacker_loss_fraction: Share of each attacking unit type destroyed
        defender_loss_fraction: Share of each defending unit type destroyed
    """

    attacker_factors: dict[str, float] | None = None
    defender_factors: dict[str, float] | None = None
    attacker_loss_fraction: float | None = None
    defender_loss_fraction: float | None = None


@dataclass
class CombatResult:
    """Result of a combat resolution.

    Attributes:
        outcome: Classification of the battle
        attacker_survivors: Attacking ships left
        attacker_casualties: Attacking ships destroyed
        defender_survivors: Defending ships left
        defender_casualties: Defending ships destroyed
        strength_ratio: Attacker strength over defender strength
        attacker_strength: Effective attacker strength
        defender_strength: Effective defender strength
    """

    outcome: BattleOutcome
    attacker_survivors: FleetComposition
    attacker_casualties: FleetComposition
    defender_survivors: FleetComposition
    defender_casualties: FleetComposition
    strength_ratio: float
    attacker_strength: float = 0.0
    defender_strength: float = 0.0
    random_factors: dict[str, dict[str, float]] = field(default_factory=dict)


def get_effectiveness(attacker_type: str, defender_type: str) -> float:
    """Look up the matrix multiplier for one unit type against another."""
    try:
        return EFFECTIVENESS_MATRIX[attacker_type][defender_type]
    except KeyError:
        raise ValueError(f"Invalid unit types: {attacker_type} vs {defender_type}") from None


def calculate_unit_effectiveness(
    unit_type: str, count: int, enemy_fleet: FleetComposition
) -> float:
    """Average effectiveness of a unit type against a mixed enemy fleet.

    Args:
        unit_type: Type of the attacking unit
        count: Number of attacking units of that type
        enemy_fleet: Fleet being attacked

    Returns:
        0.0 if count is 0, 1.0 against an empty fleet, otherwise the matrix
        row weighted by the enemy's share of each unit type
    """
    if count <= 0:
        return 0.0
    enemy_total = enemy_fleet.total
    if enemy_total == 0:
        return 1.0
    weighted = sum(
        get_effectiveness(unit_type, enemy_type) * enemy_fleet.count(enemy_type)
        for enemy_type in UNIT_TYPES
    )
    return weighted / enemy_total


def generate_random_factors(rng: GameRNG | None = None) -> dict[str, float]:
    """Draw an independent strength multiplier for each unit type."""
    rng = rng or GameRNG()
    low, high = RANDOM_FACTOR_RANGE
    return {unit_type: rng.uniform(low, high) for unit_type in UNIT_TYPES}


def calculate_fleet_strength(
    attacker: FleetComposition,
    defender: FleetComposition,
    random_factors: dict[str, float] | None = None,
    rng: GameRNG | None = None,
) -> float:
    """Effective strength of one fleet against another.

    For each attacking unit type with ships:
        count * sum(effectiveness(a -> d) * defender_count(d)) * factor(a)
    When the defender is empty each unit counts at full (1.0) effectiveness.

    Args:
        attacker: Fleet whose strength is measured
        defender: Fleet it is measured against
        random_factors: Per-unit-type multipliers; drawn from rng if omitted
        rng: Source of random factors

    Returns:
        Effective strength, 0.0 for an empty attacker
    """
    if attacker.is_empty():
        return 0.0
    if random_factors is None:
        random_factors = generate_random_factors(rng)

    strength = 0.0
    for unit_type in UNIT_TYPES:
        count = attacker.count(unit_type)
        if count == 0:
            continue
        if defender.is_empty():
            per_unit = 1.0
        else:
            per_unit = sum(
                get_effectiveness(unit_type, defender_type) * defender.count(defender_type)
                for defender_type in UNIT_TYPES
            )
        strength += count * per_unit * random_factors.get(unit_type, 1.0)
    return strength


def determine_battle_outcome(attacker_strength: float, defender_strength: float) -> BattleOutcome:
    """Classify a battle from the two strengths.

    Ratio above 1.5 is decisive for the attacker, below 1/1.5 decisive for the
    defender, anything in between is a close battle. A defenceless target
    (defender 0, attacker > 0) is an infinite ratio; when both are 0 the
    defender holds.
    """
    if attacker_strength <= 0:
        return "decisive_defender"
    if defender_strength <= 0:
        return "decisive_attacker"
    ratio = attacker_strength / defender_strength
    if ratio > DECISIVE_RATIO:
        return "decisive_attacker"
    if ratio < 1 / DECISIVE_RATIO:
        return "decisive_defender"
    return "close_battle"


def casualty_range(outcome: BattleOutcome, is_winner: bool) -> tuple[float, float]:
    if outcome == "close_battle":
        return CASUALTY_RANGES["close_battle"]
    if is_winner:
        return CASUALTY_RANGES["decisive_winner"]
    return CASUALTY_RANGES["decisive_loser"]


def calculate_casualties(
    fleet: FleetComposition,
    outcome: BattleOutcome,
    is_winner: bool,
    loss_fraction: float | None = None,
    rng: GameRNG | None = None,
) -> CasualtyReport:
    """Apply one loss fraction to every unit type of a fleet.

    Args:
        fleet: Fleet taking losses
        outcome: Battle classification
        is_winner: Whether this fleet won a decisive battle
        loss_fraction: Explicit fraction in [0, 1]; drawn from the outcome's
            range if omitted
        rng: Source of the loss fraction

    Returns:
        CasualtyReport where casualties are floored per unit type
    """
    if loss_fraction is None:
        rng = rng or GameRNG()
        low, high = casualty_range(outcome, is_winner)
        loss_fraction = rng.uniform(low, high)
    if not 0.0 <= loss_fraction <= 1.0:
        raise ValueError(f"Invalid loss_fraction: {loss_fraction} (must be in [0, 1])")

    casualties = {}
    survivors = {}
    for unit_type in UNIT_TYPES:
        count = fleet.count(unit_type)
        lost = math.floor(count * loss_fraction)
        casualties[unit_type] = lost
        survivors[unit_type] = count - lost

    return CasualtyReport(
        survivors=FleetComposition.from_counts(survivors),
        casualties=FleetComposition.from_counts(casualties),
    )


def resolve_combat(
    attacker: FleetComposition,
    defender: FleetComposition,
    factors: CombatFactors | None = None,
    rng: GameRNG | None = None,
) -> CombatResult:
    """Resolve a battle between an attacking fleet and a home fleet.

    Args:
        attacker: Attacking fleet
        defender: Defending home fleet (may be empty)
        factors: Explicit values for any of the random draws
        rng: Source for draws not given in factors

    Returns:
        CombatResult with outcome, casualties and survivors for both sides
    """
    factors = factors or CombatFactors()
    rng = rng or GameRNG()

    attacker_factors = factors.attacker_factors or generate_random_factors(rng)
    defender_factors = factors.defender_factors or generate_random_factors(rng)
    attacker_strength = calculate_fleet_strength(attacker, defender, attacker_factors)
    defender_strength = calculate_fleet_strength(defender, attacker, defender_factors)

    outcome = determine_battle_outcome(attacker_strength, defender_strength)
    attacker_report = calculate_casualties(
        attacker,
        outcome,
        is_winner=outcome == "decisive_attacker",
        loss_fraction=factors.attacker_loss_fraction,
        rng=rng,
    )
    defender_report = calculate_casualties(
        defender,
        outcome,
        is_winner=outcome == "decisive_defender",
        loss_fraction=factors.defender_loss_fraction,
        rng=rng,
    )

    if defender_strength > 0:
        strength_ratio = attacker_strength / defender_strength
    elif attacker_strength > 0:
        strength_ratio = math.inf
    else:
        strength_ratio = 0.0

    logger.debug(
        f"Combat {attacker} vs {defender}: {outcome} "
        f"({attacker_strength:.1f} vs {defender_strength:.1f})"
    )

    return CombatResult(
        outcome=outcome,
        attacker_survivors=attacker_report.survivors,
        attacker_casualties=attacker_report.casualties,
        defender_survivors=defender_report.survivors,
        defender_casualties=defender_report.casualties,
        strength_ratio=strength_ratio,
        attacker_strength=attacker_strength,
        defender_strength=defender_strength,
        random_factors={"attacker": attacker_factors, "defender": defender_factors},
    )

