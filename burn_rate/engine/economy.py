"""Income, upkeep and construction.

Each turn a side earns:

    net = base income + structure bonus - construction drain - home fleet upkeep

for metal and energy separately. Units and structures are paid for up front
when ordered and also drain income every turn while under construction.
Ships away from home pay no upkeep.
"""

import logging
import math
from dataclasses import dataclass, field

from ..models.economy import BuildOrder, BuildType, Economy
from ..models.fleet import FleetComposition
from ..models.player import PlayerState
from ..utils.constants import (
    BASE_INCOME,
    RESOURCE_FLOOR,
    STRUCTURE_COST_EXPONENT,
    STRUCTURE_COST_SCALING,
    STRUCTURE_MAX_PAYBACK_TURNS,
    STRUCTURE_STATS,
    STRUCTURE_TYPES,
    UNIT_STATS,
    UNIT_TYPES,
)

logger = logging.getLogger(__name__)

# Thresholds for economic warnings
LOW_INCOME_THRESHOLD = 1000
CONSTRUCTION_DRAIN_WARNING = 0.8  # Share of base income
UPKEEP_WARNING = 0.7  # Share of base income


@dataclass(frozen=True)
class ResourceAmount:
    """A metal/energy pair used for costs, drains and incomes."""

    metal: int = 0
    energy: int = 0

    def __add__(self, other: "ResourceAmount") -> "ResourceAmount":
        return ResourceAmount(self.metal + other.metal, self.energy + other.energy)

    def __sub__(self, other: "ResourceAmount") -> "ResourceAmount":
        return ResourceAmount(self.metal - other.metal, self.energy - other.energy)

    def scaled(self, factor: int) -> "ResourceAmount":
        return ResourceAmount(self.metal * factor, self.energy * factor)

    @classmethod
    def from_dict(cls, values: dict[str, int]) -> "ResourceAmount":
        return cls(metal=values.get("metal", 0), energy=values.get("energy", 0))


@dataclass
class IncomeBreakdown:
    """Components of one side's per-turn income."""

    base: ResourceAmount
    structure_bonus: ResourceAmount
    construction_drain: ResourceAmount
    fleet_upkeep: ResourceAmount

    @property
    def net(self) -> ResourceAmount:
        return self.base + self.structure_bonus - self.construction_drain - self.fleet_upkeep


@dataclass
class EconomicReport:
    """Warnings about an economy and what to do about them."""

    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def is_healthy(self) -> bool:
        return not self.warnings


def unit_build_cost(unit_type: str) -> ResourceAmount:
    if unit_type not in UNIT_STATS:
        raise ValueError(f"Invalid unit type: {unit_type}")
    return ResourceAmount.from_dict(UNIT_STATS[unit_type]["build_cost"])


def calculate_structure_cost(structure_type: str, owned: int) -> ResourceAmount:
    """Cost of the next structure of a type.

    Cost grows with the number already owned:
        ceil(base * (1 + 0.5 * owned) ** 1.2)

    Args:
        structure_type: "reactor" or "mine"
        owned: Structures of that type already built

    Returns:
        Metal and energy cost of one more structure
    """
    if structure_type not in STRUCTURE_STATS:
        raise ValueError(f"Invalid structure type: {structure_type}")
    if owned < 0:
        raise ValueError(f"Invalid owned count: {owned} (must be >= 0)")
    multiplier = (1 + STRUCTURE_COST_SCALING * owned) ** STRUCTURE_COST_EXPONENT
    base = STRUCTURE_STATS[structure_type]["base_cost"]
    return ResourceAmount(
        metal=math.ceil(base["metal"] * multiplier),
        energy=math.ceil(base["energy"] * multiplier),
    )


def calculate_structure_payback_time(structure_type: str, owned: int) -> float:
    """Turns for a structure to earn back its cost in the resource it yields."""
    cost = calculate_structure_cost(structure_type, owned)
    bonus = STRUCTURE_STATS[structure_type]["income_bonus"]
    if structure_type == "reactor":
        return cost.energy / bonus["energy"]
    return cost.metal / bonus["metal"]


def is_structure_viable(
    structure_type: str, owned: int, max_payback_turns: float = STRUCTURE_MAX_PAYBACK_TURNS
) -> bool:
    return calculate_structure_payback_time(structure_type, owned) <= max_payback_turns


def calculate_fleet_upkeep(fleet: FleetComposition) -> ResourceAmount:
    """Per-turn upkeep of a fleet."""
    upkeep = ResourceAmount()
    for unit_type in UNIT_TYPES:
        per_unit = ResourceAmount.from_dict(UNIT_STATS[unit_type]["upkeep"])
        upkeep = upkeep + per_unit.scaled(fleet.count(unit_type))
    return upkeep


def calculate_fleet_build_cost(fleet: FleetComposition) -> ResourceAmount:
    cost = ResourceAmount()
    for unit_type in UNIT_TYPES:
        cost = cost + unit_build_cost(unit_type).scaled(fleet.count(unit_type))
    return cost


def can_afford(player: PlayerState, cost: ResourceAmount) -> bool:
    return player.resources.metal >= cost.metal and player.resources.energy >= cost.energy


def can_afford_fleet_composition(player: PlayerState, fleet: FleetComposition) -> bool:
    return can_afford(player, calculate_fleet_build_cost(fleet))


def calculate_structure_income(economy: Economy) -> ResourceAmount:
    """Income bonus from completed structures."""
    bonus = ResourceAmount()
    for structure_type in STRUCTURE_TYPES:
        per_structure = ResourceAmount.from_dict(STRUCTURE_STATS[structure_type]["income_bonus"])
        bonus = bonus + per_structure.scaled(economy.structure_count(structure_type))
    return bonus


def calculate_construction_drain(queue: list[BuildOrder]) -> ResourceAmount:
    """Per-turn drain of every active build order."""
    drain = ResourceAmount()
    for order in queue:
        if order.turns_remaining > 0:
            drain = drain + ResourceAmount(order.drain_metal, order.drain_energy)
    return drain


def get_income_breakdown(player: PlayerState) -> IncomeBreakdown:
    return IncomeBreakdown(
        base=ResourceAmount.from_dict(BASE_INCOME),
        structure_bonus=calculate_structure_income(player.economy),
        construction_drain=calculate_construction_drain(player.economy.construction_queue),
        fleet_upkeep=calculate_fleet_upkeep(player.home_fleet),
    )


def get_net_income(player: PlayerState) -> ResourceAmount:
    """Net income this turn without applying it."""
    return get_income_breakdown(player).net


def calculate_income(player: PlayerState) -> ResourceAmount:
    """Apply one turn of income to a player's stock.

    Stores the net in metal_income/energy_income and adds it to the stock,
    which never drops below RESOURCE_FLOOR.

    Returns:
        Net income applied
    """
    net = get_net_income(player)
    resources = player.resources
    resources.metal_income = net.metal
    resources.energy_income = net.energy
    resources.metal = max(RESOURCE_FLOOR, resources.metal + net.metal)
    resources.energy = max(RESOURCE_FLOOR, resources.energy + net.energy)
    return net


def is_economy_stalled(player: PlayerState) -> bool:
    """True when both metal and energy net income are zero or negative."""
    net = get_net_income(player)
    return net.metal <= 0 and net.energy <= 0


def has_active_construction(player: PlayerState) -> bool:
    return any(order.turns_remaining > 0 for order in player.economy.construction_queue)


def _complete_order(player: PlayerState, order: BuildOrder):
    if order.is_structure:
        if order.build_type == "reactor":
            player.economy.reactors += order.quantity
        else:
            player.economy.mines += order.quantity
    else:
        built = FleetComposition.from_counts({order.build_type: order.quantity})
        player.home_fleet = player.home_fleet + built
    logger.debug(f"Completed {order.quantity} {order.build_type}")


def process_construction(player: PlayerState) -> list[BuildOrder]:
    """Advance every build order by one turn.

    Finished orders are applied (ships join the home fleet, structures are
    added to the economy) and removed from the queue. Construction proceeds
    even when the economy is stalled.

    Returns:
        Orders completed this turn
    """
    completed = []
    remaining = []
    for order in player.economy.construction_queue:
        order.turns_remaining = max(0, order.turns_remaining - 1)
        if order.turns_remaining == 0:
            _complete_order(player, order)
            completed.append(order)
        else:
            remaining.append(order)
    player.economy.construction_queue = remaining
    return completed


def build_cost(player: PlayerState, build_type: BuildType, quantity: int) -> ResourceAmount:
    """Up-front cost of ordering `quantity` units or structures."""
    if build_type in STRUCTURE_TYPES:
        owned = player.economy.structure_count(build_type)
        return calculate_structure_cost(build_type, owned).scaled(quantity)
    return unit_build_cost(build_type).scaled(quantity)


def create_build_order(player: PlayerState, build_type: BuildType, quantity: int) -> BuildOrder:
    """Create a build order with its per-turn drain.

    Units drain their build cost per turn for their build time. Structures
    drain their (scaled) cost for their build time.

    Raises:
        ValueError: If the build type or quantity is invalid
    """
    if build_type in STRUCTURE_TYPES:
        build_time = STRUCTURE_STATS[build_type]["build_time"]
    elif build_type in UNIT_STATS:
        build_time = UNIT_STATS[build_type]["build_time"]
    else:
        raise ValueError(f"Invalid build_type: {build_type}")
    if quantity <= 0:
        raise ValueError(f"Invalid quantity: {quantity} (must be > 0)")

    drain = build_cost(player, build_type, quantity)
    return BuildOrder(
        build_type=build_type,
        quantity=quantity,
        turns_remaining=build_time,
        drain_metal=drain.metal,
        drain_energy=drain.energy,
    )


def validate_build_order(player: PlayerState, order: BuildOrder) -> list[str]:
    """Check that a player can pay for and sustain a build order.

    Returns:
        List of error messages (empty if the order can be queued)
    """
    errors = []
    total_cost = ResourceAmount(order.drain_metal, order.drain_energy).scaled(
        max(1, order.turns_remaining)
    )
    resources = player.resources
    if resources.metal < total_cost.metal:
        errors.append(
            f"Insufficient metal: need {total_cost.metal}, have {resources.metal}"
        )
    if resources.energy < total_cost.energy:
        errors.append(
            f"Insufficient energy: need {total_cost.energy}, have {resources.energy}"
        )

    projected = get_net_income(player) - ResourceAmount(order.drain_metal, order.drain_energy)
    if projected.metal < 0:
        errors.append(
            f"Insufficient metal income to sustain construction: "
            f"projected net income {projected.metal}"
        )
    if projected.energy < 0:
        errors.append(
            f"Insufficient energy income to sustain construction: "
            f"projected net income {projected.energy}"
        )
    return errors


def add_build_order(player: PlayerState, order: BuildOrder) -> list[str]:
    """Queue a build order if the player can afford and sustain it.

    Args:
        player: Player placing the order
        order: Order to queue

    Returns:
        List of error messages; empty means the order was queued
    """
    errors = validate_build_order(player, order)
    if not errors:
        player.economy.construction_queue.append(order)
    return errors


def cancel_build_order(player: PlayerState, index: int) -> list[str]:
    """Remove a queued order. Up-front costs are not refunded."""
    queue = player.economy.construction_queue
    if index < 0 or index >= len(queue):
        return ["Invalid build order index"]
    queue.pop(index)
    return []


def queue_build(player: PlayerState, build_type: BuildType, quantity: int) -> list[str]:
    """Order units or structures, paying the up-front cost.

    Returns:
        List of error messages; empty means the order was queued and paid for
    """
    try:
        order = create_build_order(player, build_type, quantity)
    except ValueError as e:
        return [str(e)]

    cost = build_cost(player, build_type, quantity)
    errors = add_build_order(player, order)
    if errors:
        return errors

    player.resources.metal -= cost.metal
    player.resources.energy -= cost.energy
    return []


def validate_economic_state(player: PlayerState) -> EconomicReport:
    """Flag stalled, weak or overstretched economies."""
    report = EconomicReport()
    breakdown = get_income_breakdown(player)
    net = breakdown.net

    if net.metal <= 0:
        report.warnings.append("Metal income is zero or negative - economy stalled")
        report.recommendations.append("Reduce fleet size or build more mines")
    elif net.metal < LOW_INCOME_THRESHOLD:
        report.warnings.append("Metal income is critically low")
        report.recommendations.append("Consider building mines or reducing military spending")

    if net.energy <= 0:
        report.warnings.append("Energy income is zero or negative - economy stalled")
        report.recommendations.append("Reduce fleet size or build more reactors")
    elif net.energy < LOW_INCOME_THRESHOLD:
        report.warnings.append("Energy income is critically low")
        report.recommendations.append("Consider building reactors or reducing military spending")

    base = breakdown.base
    if breakdown.construction_drain.metal > base.metal * CONSTRUCTION_DRAIN_WARNING:
        report.warnings.append("Construction is consuming excessive metal resources")
        report.recommendations.append("Consider reducing construction queue or building more mines")
    if breakdown.construction_drain.energy > base.energy * CONSTRUCTION_DRAIN_WARNING:
        report.warnings.append("Construction is consuming excessive energy resources")
        report.recommendations.append(
            "Consider reducing construction queue or building more reactors"
        )

    if breakdown.fleet_upkeep.metal > base.metal * UPKEEP_WARNING:
        report.warnings.append("Fleet upkeep is consuming excessive metal")
        report.recommendations.append("Consider reducing fleet size or building more mines")
    if breakdown.fleet_upkeep.energy > base.energy * UPKEEP_WARNING:
        report.warnings.append("Fleet upkeep is consuming excessive energy")
        report.recommendations.append("Consider reducing fleet size or building more reactors")

    return report
