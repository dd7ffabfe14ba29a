"""Fleet movement timing.

An attack launched on turn T arrives (and fights) on turn T+1 and is
scheduled home on turn T+3. Survivors travel back as a separate returning
movement that is merged into the home fleet on the turn after the battle.
"""

from dataclasses import dataclass, field

from ..models.fleet import FleetComposition, FleetMovement, MissionPhase
from ..models.player import PlayerState
from ..utils.constants import RETURN_TURNS, TRAVEL_TURNS


@dataclass
class MovementPartition:
    """A movement list split by what must happen to each entry this turn.

    Attributes:
        outbound: Still travelling, nothing to do yet
        combat: Arriving at the target this turn
        returning: Back home this turn, ready to merge
    """

    outbound: list[FleetMovement] = field(default_factory=list)
    combat: list[FleetMovement] = field(default_factory=list)
    returning: list[FleetMovement] = field(default_factory=list)


@dataclass
class CounterAttackWindow:
    """Turns during which the sender's home is missing this fleet."""

    start_turn: int
    end_turn: int

    @property
    def duration(self) -> int:
        return self.end_turn - self.start_turn + 1


def create_fleet_movement(
    composition: FleetComposition, target: str, current_turn: int
) -> FleetMovement:
    """Launch an attack from home.

    Args:
        composition: Ships sent (must be non-empty)
        target: Where the fleet is going, e.g. "ai_home"
        current_turn: Turn of departure

    Returns:
        Outbound FleetMovement arriving next turn
    """
    return FleetMovement(
        composition=composition,
        target=target,
        arrival_turn=current_turn + TRAVEL_TURNS,
        return_turn=current_turn + RETURN_TURNS,
        mission_phase="outbound",
    )


def is_fleet_in_transit(movement: FleetMovement, current_turn: int) -> bool:
    """True from the departure turn until (not including) the return turn."""
    return movement.arrival_turn - 1 <= current_turn < movement.return_turn


def can_recall_fleet(movement: FleetMovement, current_turn: int) -> bool:
    """A fleet can only be recalled before it departs."""
    return current_turn < movement.arrival_turn - 1


def update_mission_phase(movement: FleetMovement, current_turn: int) -> MissionPhase:
    """Phase a movement should be in on the given turn."""
    if movement.mission_phase == "returning":
        return "returning"
    if current_turn < movement.arrival_turn:
        return "outbound"
    if current_turn == movement.arrival_turn:
        return "combat"
    return "returning"


def process_fleet_movements(
    movements: list[FleetMovement], current_turn: int
) -> MovementPartition:
    """Split movements into still outbound, due for combat and due home.

    Returning movements that have not reached their return turn stay in the
    outbound bucket since they are still travelling.

    Args:
        movements: All of one side's movements
        current_turn: Turn being processed

    Returns:
        MovementPartition; the input list is not modified
    """
    partition = MovementPartition()
    for movement in movements:
        if movement.mission_phase == "returning":
            if current_turn >= movement.return_turn:
                partition.returning.append(movement)
            else:
                partition.outbound.append(movement)
        elif current_turn < movement.arrival_turn:
            partition.outbound.append(movement)
        else:
            partition.combat.append(movement)
    return partition


def create_returning_fleet(
    survivors: FleetComposition, original: FleetMovement, current_turn: int
) -> FleetMovement | None:
    """Send battle survivors home.

    Args:
        survivors: Ships left after combat
        original: Movement that fought
        current_turn: Turn of the battle

    Returns:
        Returning movement arriving next turn, or None if nothing survived
    """
    if survivors.is_empty():
        return None
    return FleetMovement(
        composition=survivors,
        target="home",
        arrival_turn=current_turn + 1,
        return_turn=current_turn + 1,
        mission_phase="returning",
    )


def check_fleet_elimination(home_fleet: FleetComposition, movements: list[FleetMovement]) -> bool:
    """True if a side has no ships at home and none in transit."""
    if not home_fleet.is_empty():
        return False
    return all(movement.composition.is_empty() for movement in movements)


def validate_fleet_movement(movement: FleetMovement, current_turn: int) -> list[str]:
    """Check a freshly created movement's timing and target.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if movement.arrival_turn <= current_turn:
        errors.append("Arrival turn must be in the future")
    if movement.return_turn <= movement.arrival_turn:
        errors.append("Return turn must be after arrival turn")
    if not movement.target or not movement.target.strip():
        errors.append("Movement target cannot be empty")
    return errors


def validate_fleet_launch(available: FleetComposition, requested: FleetComposition) -> list[str]:
    """Check that a home fleet can supply the requested ships.

    Returns:
        One error per unit type that falls short, plus one for an empty request
    """
    errors = []
    if requested.is_empty():
        errors.append("Cannot send empty fleet")
    for unit_type in ("frigate", "cruiser", "battleship"):
        need = requested.count(unit_type)
        have = available.count(unit_type)
        if need > have:
            errors.append(f"Insufficient {unit_type}s. Need: {need}, Have: {have}")
    return errors


def is_home_system_vulnerable(movements: list[FleetMovement], current_turn: int) -> bool:
    """A home system is exposed while any of its fleets are away."""
    return any(is_fleet_in_transit(movement, current_turn) for movement in movements)


def get_counter_attack_window(movement: FleetMovement) -> CounterAttackWindow:
    return CounterAttackWindow(
        start_turn=movement.arrival_turn - 1,
        end_turn=movement.return_turn - 1,
    )


def launch_fleet(
    player: PlayerState, composition: FleetComposition, target: str, current_turn: int
) -> list[str]:
    """Send ships from a player's home fleet on an attack.

    Args:
        player: Side launching the attack (modified on success)
        composition: Ships to send
        target: Destination, e.g. "ai_home"
        current_turn: Turn of departure

    Returns:
        List of error messages; empty means the fleet was launched
    """
    errors = validate_fleet_launch(player.home_fleet, composition)
    if errors:
        return errors
    movement = create_fleet_movement(composition, target, current_turn)
    player.home_fleet = player.home_fleet - composition
    player.movements.append(movement)
    return []
