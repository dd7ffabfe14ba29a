"""Game state container and combat event records."""

from dataclasses import dataclass, field
from typing import Literal

from ..utils.constants import PHASE_BOUNDARIES
from .fleet import UNIT_FIELDS, FleetComposition
from .player import PlayerState

Side = Literal["player", "ai"]
GamePhase = Literal["early", "mid", "late", "endgame"]
BattleOutcome = Literal["decisive_attacker", "decisive_defender", "close_battle"]
VictoryType = Literal["military", "economic"]

SIDES = ("player", "ai")
GAME_PHASES = ("early", "mid", "late", "endgame")
BATTLE_OUTCOMES = ("decisive_attacker", "decisive_defender", "close_battle")
VICTORY_TYPES = ("military", "economic")


def determine_game_phase(turn: int) -> GamePhase:
    """Derive the game phase from the turn number.

    Args:
        turn: Current turn (>= 1)

    Returns:
        "early" through turn 5, "mid" through 15, "late" through 25,
        "endgame" afterwards
    """
    for phase, last_turn in PHASE_BOUNDARIES:
        if turn <= last_turn:
            return phase
    return "endgame"


@dataclass(frozen=True)
class CombatEvent:
    """Immutable record of one battle.

    Both fleets are recorded as they stood before the battle, so for every
    unit type fleet == casualties + survivors on each side.
    """

    turn: int
    attacker: Side
    attacker_fleet: FleetComposition
    defender_fleet: FleetComposition
    outcome: BattleOutcome
    attacker_casualties: FleetComposition
    defender_casualties: FleetComposition
    attacker_survivors: FleetComposition
    defender_survivors: FleetComposition

    def __post_init__(self):
        """Validate combat event after initialization."""
        if self.attacker not in SIDES:
            raise ValueError(f"Invalid attacker: {self.attacker}")
        if self.outcome not in BATTLE_OUTCOMES:
            raise ValueError(f"Invalid outcome: {self.outcome}")
        sides = (
            ("attacker", self.attacker_fleet, self.attacker_casualties, self.attacker_survivors),
            ("defender", self.defender_fleet, self.defender_casualties, self.defender_survivors),
        )
        for label, fleet, casualties, survivors in sides:
            for name in UNIT_FIELDS.values():
                before = getattr(fleet, name)
                after = getattr(casualties, name) + getattr(survivors, name)
                if before != after:
                    raise ValueError(
                        f"Invalid {label} {name}: {before} != "
                        f"{getattr(casualties, name)} casualties + "
                        f"{getattr(survivors, name)} survivors"
                    )

    @property
    def defender(self) -> Side:
        return "ai" if self.attacker == "player" else "player"


@dataclass
class GameState:
    """Main game state container.

    The single source of truth for a game. Engine components mutate it only
    while the turn orchestrator is processing a turn or applying an action.
    """

    turn: int  # Current turn number, starts at 1
    player: PlayerState
    ai: PlayerState
    phase: GamePhase = "early"
    combat_log: list[CombatEvent] = field(default_factory=list)  # Every battle so far
    is_game_over: bool = False
    winner: Side | None = None
    victory_type: VictoryType | None = None

    def __post_init__(self):
        """Validate game state after initialization."""
        if self.turn < 1:
            raise ValueError(f"Invalid turn: {self.turn} (must be >= 1)")
        if self.phase not in GAME_PHASES:
            raise ValueError(f"Invalid phase: {self.phase}")
        if self.winner not in (None, *SIDES):
            raise ValueError(f"Invalid winner: {self.winner}")
        if self.victory_type not in (None, *VICTORY_TYPES):
            raise ValueError(f"Invalid victory_type: {self.victory_type}")
        terminal = (self.is_game_over, self.winner is not None, self.victory_type is not None)
        if any(terminal) and not all(terminal):
            raise ValueError(
                "Invalid terminal state: is_game_over, winner and victory_type "
                "must be set together"
            )

    def get_side(self, side: Side) -> PlayerState:
        if side == "player":
            return self.player
        if side == "ai":
            return self.ai
        raise ValueError(f"Invalid side: {side}")

    def end_game(self, winner: Side, victory_type: VictoryType):
        """Set all terminal fields at once."""
        if self.is_game_over:
            raise ValueError(f"Game already over (winner: {self.winner})")
        if winner not in SIDES:
            raise ValueError(f"Invalid winner: {winner}")
        if victory_type not in VICTORY_TYPES:
            raise ValueError(f"Invalid victory_type: {victory_type}")
        self.winner = winner
        self.victory_type = victory_type
        self.is_game_over = True

    def advance_turn(self):
        """Move to the next turn and recompute the phase."""
        self.turn += 1
        self.phase = determine_game_phase(self.turn)
