"""Scanning and intelligence ageing.

Three scan tiers trade energy for detail:
- basic: a noisy total ship count
- deep: per-type counts within 10%, plus exact structure counts
- advanced: an assessment of enemy intent with a fixed-ratio fleet split

Only the target's home fleet is visible; fleets in transit never show up.
"""

import logging
import math
from dataclasses import dataclass

from ..models.fleet import FleetComposition
from ..models.intelligence import EconomicIntel, ScanResult, ScanType
from ..models.player import PlayerState
from ..utils.constants import (
    ADVANCED_SCAN_SPLIT,
    BASIC_SCAN_RANGE,
    CONFIDENCE_DECAY_RATE,
    DEEP_SCAN_RANGE,
    IN_TRANSIT_ESTIMATE,
    MIN_SCAN_ACCURACY,
    MISINFORMATION_ACCURACY_PENALTY,
    MISINFORMATION_RANGE,
    SCAN_ACCURACY,
    SCAN_COSTS,
    SCAN_HISTORY_LIMIT,
    UNIT_TYPES,
)
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)

# Strategic intent thresholds
OFFENSIVE_FLEET_SIZE = 100
EXPANSION_STRUCTURES = 3
STRONG_ECONOMY_INCOME = 25000
DEFENSIVE_FLEET_SIZE = 20


@dataclass
class IntelligenceGap:
    """How stale a side's picture of the enemy is.

    Attributes:
        last_known_fleet: Most recent fleet estimate
        last_scan_turn: Turn of the most recent scan (0 if never scanned)
        estimated_in_transit: Ships that may have left home since the scan
        confidence: 0-1, drops by 0.1 per turn since the scan
    """

    last_known_fleet: FleetComposition
    last_scan_turn: int
    estimated_in_transit: int
    confidence: float


def get_scan_cost(scan_type: ScanType) -> int:
    """Energy cost of a scan tier."""
    if scan_type not in SCAN_COSTS:
        raise ValueError(f"Invalid scan type: {scan_type}")
    return SCAN_COSTS[scan_type]["energy"]


def can_afford_scan(player: PlayerState, scan_type: ScanType) -> bool:
    return player.resources.energy >= get_scan_cost(scan_type)


def basic_scan(target: PlayerState, turn: int, rng: GameRNG) -> ScanResult:
    """Noisy total ship count, reported as frigates."""
    low, high = BASIC_SCAN_RANGE
    reported = round(target.home_fleet.total * rng.uniform(low, high))
    return ScanResult(
        scan_type="basic",
        turn=turn,
        fleet_estimate=FleetComposition(frigates=reported),
        accuracy=SCAN_ACCURACY["basic"],
    )


def deep_scan(target: PlayerState, turn: int, rng: GameRNG) -> ScanResult:
    """Per-type counts within 10%, exact structure counts."""
    low, high = DEEP_SCAN_RANGE
    estimate = {
        unit_type: max(0, round(target.home_fleet.count(unit_type) * rng.uniform(low, high)))
        for unit_type in UNIT_TYPES
    }
    return ScanResult(
        scan_type="deep",
        turn=turn,
        fleet_estimate=FleetComposition.from_counts(estimate),
        accuracy=SCAN_ACCURACY["deep"],
        economic_data=EconomicIntel(
            reactors=target.economy.reactors,
            mines=target.economy.mines,
        ),
    )


def determine_strategic_intent(target: PlayerState) -> str:
    """Read the target's likely plan from its fleet, structures and income."""
    total_ships = target.home_fleet.total
    structures = target.economy.reactors + target.economy.mines
    income = target.resources.metal_income + target.resources.energy_income

    if total_ships > OFFENSIVE_FLEET_SIZE:
        return "Preparing for major offensive operations"
    if structures > EXPANSION_STRUCTURES:
        return "Focusing on economic expansion"
    if income > STRONG_ECONOMY_INCOME:
        return "Strong economic foundation, likely planning military buildup"
    if total_ships < DEFENSIVE_FLEET_SIZE:
        return "Defensive posture, limited military capability"
    return "Unclear intentions, balanced approach"


def advanced_scan(target: PlayerState, turn: int) -> ScanResult:
    """Intent assessment with a vague fixed-ratio fleet split."""
    total = target.home_fleet.total
    estimate = {
        unit_type: math.floor(total * share) for unit_type, share in ADVANCED_SCAN_SPLIT.items()
    }
    return ScanResult(
        scan_type="advanced",
        turn=turn,
        fleet_estimate=FleetComposition.from_counts(estimate),
        accuracy=SCAN_ACCURACY["advanced"],
        economic_data=EconomicIntel(
            reactors=target.economy.reactors,
            mines=target.economy.mines,
            metal_income=target.resources.metal_income,
            energy_income=target.resources.energy_income,
        ),
        strategic_intent=determine_strategic_intent(target),
    )


def apply_misinformation(result: ScanResult, chance: float, rng: GameRNG) -> ScanResult:
    """Corrupt a scan with the given probability.

    A corrupted scan has every count scaled by up to 50% either way and its
    accuracy halved.
    """
    if chance <= 0 or rng.random() >= chance:
        return result
    low, high = MISINFORMATION_RANGE
    corrupted = {
        unit_type: max(0, round(result.fleet_estimate.count(unit_type) * rng.uniform(low, high)))
        for unit_type in UNIT_TYPES
    }
    result.fleet_estimate = FleetComposition.from_counts(corrupted)
    result.accuracy *= MISINFORMATION_ACCURACY_PENALTY
    result.is_misinformation = True
    return result


def store_scan_result(scanner: PlayerState, result: ScanResult):
    """Record a scan as the scanner's latest intelligence."""
    intel = scanner.intelligence
    intel.last_scan_turn = result.turn
    intel.known_enemy_fleet = result.fleet_estimate
    intel.scan_accuracy = result.accuracy
    intel.scan_history.append(result)
    if len(intel.scan_history) > SCAN_HISTORY_LIMIT:
        intel.scan_history = intel.scan_history[-SCAN_HISTORY_LIMIT:]


def perform_scan(
    scanner: PlayerState,
    target: PlayerState,
    scan_type: ScanType,
    turn: int,
    rng: GameRNG | None = None,
) -> ScanResult | None:
    """Scan the enemy home system.

    Args:
        scanner: Side paying for the scan
        target: Side being scanned
        scan_type: "basic", "deep" or "advanced"
        turn: Current turn
        rng: Source of scan noise

    Returns:
        The stored ScanResult, or None if the scanner cannot pay
    """
    if not can_afford_scan(scanner, scan_type):
        logger.debug(
            f"Cannot afford {scan_type} scan: need {get_scan_cost(scan_type)} energy, "
            f"have {scanner.resources.energy}"
        )
        return None

    rng = rng or GameRNG()
    scanner.resources.energy -= get_scan_cost(scan_type)

    if scan_type == "basic":
        result = basic_scan(target, turn, rng)
    elif scan_type == "deep":
        result = deep_scan(target, turn, rng)
    else:
        result = advanced_scan(target, turn)

    result = apply_misinformation(result, scanner.intelligence.misinformation_chance, rng)
    store_scan_result(scanner, result)
    return result


def age_intelligence(player: PlayerState, turn: int):
    """Update the age of every stored scan and decay its accuracy."""
    for scan in player.intelligence.scan_history:
        scan.data_age = turn - scan.turn
        base = SCAN_ACCURACY[scan.scan_type]
        if scan.is_misinformation:
            base *= MISINFORMATION_ACCURACY_PENALTY
        scan.accuracy = max(MIN_SCAN_ACCURACY, base - scan.data_age * CONFIDENCE_DECAY_RATE)


def get_latest_scan(player: PlayerState) -> ScanResult | None:
    history = player.intelligence.scan_history
    return history[-1] if history else None


def calculate_intelligence_gap(player: PlayerState, turn: int) -> IntelligenceGap:
    """Estimate what the last scan may be missing."""
    latest = get_latest_scan(player)
    if latest is None:
        return IntelligenceGap(
            last_known_fleet=FleetComposition.empty(),
            last_scan_turn=0,
            estimated_in_transit=0,
            confidence=0.0,
        )

    turns_since = turn - latest.turn
    known = player.intelligence.known_enemy_fleet
    in_transit = math.floor(known.total * IN_TRANSIT_ESTIMATE) if turns_since > 2 else 0
    return IntelligenceGap(
        last_known_fleet=known,
        last_scan_turn=latest.turn,
        estimated_in_transit=in_transit,
        confidence=max(0.0, 1 - turns_since * CONFIDENCE_DECAY_RATE),
    )
