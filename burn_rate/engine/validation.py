"""Game state consistency checks.

Models validate themselves on construction, but engine code mutates them
afterwards. These checks re-verify a whole state (or a turn transition) and
return itemised errors instead of raising.
"""

from ..models.economy import BUILD_TYPES, Economy, Resources
from ..models.fleet import MISSION_PHASES
from ..models.game import GAME_PHASES, GamePhase, GameState, determine_game_phase
from ..models.player import PlayerState
from ..utils.constants import INCOME_FLOOR, RESOURCE_FLOOR


def validate_game_phase(phase: GamePhase, turn: int) -> list[str]:
    expected = determine_game_phase(turn)
    if phase != expected:
        return [f"Turn {turn} should be in '{expected}' phase, but is '{phase}'"]
    return []


def validate_resources(resources: Resources) -> list[str]:
    errors = []
    if resources.metal < RESOURCE_FLOOR:
        errors.append("Metal resources are unreasonably negative")
    if resources.energy < RESOURCE_FLOOR:
        errors.append("Energy resources are unreasonably negative")
    if resources.metal_income < INCOME_FLOOR:
        errors.append("Metal income is unreasonably negative")
    if resources.energy_income < INCOME_FLOOR:
        errors.append("Energy income is unreasonably negative")
    return errors


def validate_economy(economy: Economy) -> list[str]:
    errors = []
    if economy.reactors < 0:
        errors.append("Reactor count cannot be negative")
    if economy.mines < 0:
        errors.append("Mine count cannot be negative")
    for order in economy.construction_queue:
        if order.quantity <= 0:
            errors.append("Build order quantity must be positive")
        if order.turns_remaining < 0:
            errors.append("Turns remaining cannot be negative")
        if order.drain_metal < 0 or order.drain_energy < 0:
            errors.append("Resource drain per turn cannot be negative")
        if order.build_type not in BUILD_TYPES:
            errors.append(f"Invalid build type in build order: {order.build_type}")
    return errors


def validate_player_state(player: PlayerState) -> list[str]:
    """Check one side's resources, fleets, economy and intelligence.

    Returns:
        List of error messages (empty if valid)
    """
    errors = validate_resources(player.resources)

    for unit_type, count in player.home_fleet.counts().items():
        if count < 0:
            errors.append(f"{unit_type.capitalize()} count cannot be negative")
    for movement in player.movements:
        if any(count < 0 for count in movement.composition.counts().values()):
            errors.append("In-transit fleet composition cannot have negative values")
        if movement.arrival_turn < 1:
            errors.append("Arrival turn must be positive")
        if movement.return_turn < movement.arrival_turn:
            errors.append("Return turn cannot be before arrival turn")
        if movement.mission_phase not in MISSION_PHASES:
            errors.append(f"Invalid mission phase: {movement.mission_phase}")

    errors.extend(validate_economy(player.economy))

    intel = player.intelligence
    if intel.last_scan_turn < 0:
        errors.append("Last scan turn cannot be negative")
    if not 0.0 <= intel.scan_accuracy <= 1.0:
        errors.append("Scan accuracy must be between 0 and 1")
    return errors


def validate_game_state(game_state: GameState) -> list[str]:
    """Check a whole game state for consistency.

    Args:
        game_state: State to check (not modified)

    Returns:
        List of error messages, player and AI errors prefixed by side
    """
    errors = []
    if game_state.turn < 1:
        errors.append("Turn number must be at least 1")
    errors.extend(validate_game_phase(game_state.phase, game_state.turn))
    errors.extend(f"Player: {e}" for e in validate_player_state(game_state.player))
    errors.extend(f"AI: {e}" for e in validate_player_state(game_state.ai))

    if game_state.is_game_over:
        if game_state.winner is None:
            errors.append("Game over state requires a winner")
        if game_state.victory_type is None:
            errors.append("Game over state requires a victory type")
    elif game_state.winner is not None or game_state.victory_type is not None:
        errors.append("Winner and victory type must only be set when the game is over")
    return errors


def validate_state_transition(previous: GameState, current: GameState) -> list[str]:
    """Check that one processed turn moved the game forward legally.

    The turn counter advances by exactly one unless the game ended during
    the turn, in which case it stays put.
    """
    errors = []
    if current.is_game_over:
        if current.turn != previous.turn:
            errors.append(
                f"Turn must not advance when the game ends, got {previous.turn} -> {current.turn}"
            )
    elif current.turn != previous.turn + 1:
        errors.append(f"Turn must increment by 1, got {previous.turn} -> {current.turn}")

    if GAME_PHASES.index(current.phase) < GAME_PHASES.index(previous.phase):
        errors.append(f"Game phase cannot regress from {previous.phase} to {current.phase}")
    if previous.is_game_over and not current.is_game_over:
        errors.append("Game cannot become active after being over")
    if previous.winner and current.winner and previous.winner != current.winner:
        errors.append("Winner cannot change once determined")
    return errors
