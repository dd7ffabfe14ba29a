"""Game engine: owns one game and exposes its public operations.

Collaborators (terminal or web front ends) read snapshots from
get_game_state() and change the game only through submit_action() and
end_turn().
"""

import copy
import logging

from pydantic import ValidationError

from ..models.ai import Decision
from ..models.economy import Resources
from ..models.game import CombatEvent, GamePhase, GameState, Side, VictoryType
from ..models.player import PlayerState
from ..schemas.requests import (
    AttackAction,
    BuildAction,
    GameConfig,
    ScanAction,
    parse_action,
)
from ..schemas.responses import ExecutionResult, TurnResult
from ..utils.constants import BASE_INCOME, RETURN_TURNS, TRAVEL_TURNS
from ..utils.error_log import ErrorLog
from ..utils.rng import GameRNG
from .ai import AIEngine
from .combat import CombatFactors
from .economy import build_cost, get_net_income
from .intelligence import get_scan_cost
from .turn_executor import TurnExecutor, TurnPhase
from .validation import validate_game_state, validate_state_transition

logger = logging.getLogger(__name__)


def create_player_state(config: GameConfig) -> PlayerState:
    """Starting holdings for one side."""
    return PlayerState(
        resources=Resources(
            metal=config.starting_metal,
            energy=config.starting_energy,
            metal_income=BASE_INCOME["metal"],
            energy_income=BASE_INCOME["energy"],
        ),
        home_fleet=config.starting_fleet(),
    )


def create_initial_state(config: GameConfig) -> GameState:
    return GameState(
        turn=1,
        player=create_player_state(config),
        ai=create_player_state(config),
    )


class GameEngine:
    """A single player-vs-AI game.

    The engine owns the authoritative GameState, the RNG, the AI engine and
    an error log. Turns are not transactional: if processing fails part way,
    changes made by earlier phases are kept.
    """

    def __init__(self, config: GameConfig | None = None):
        """Start a new game.

        Args:
            config: Game settings; defaults to a hybrid AI with random seed
        """
        self._setup(config or GameConfig())

    def _setup(self, config: GameConfig):
        self.config = config
        self.rng = GameRNG(self.config.seed)
        self.error_log = ErrorLog(self.config.error_log_capacity)
        self.executor = TurnExecutor(self.rng)
        self.ai_engine = AIEngine(self.config.ai_archetype, self.rng)
        self.state = create_initial_state(self.config)
        self.pending_actions: list[BuildAction | AttackAction | ScanAction] = []
        self.combat_factors: CombatFactors | None = None  # Fixed draws for replays and tests

    @property
    def current_phase(self) -> TurnPhase:
        return self.executor.current_phase

    # =========================================================================
    # PLAYER ACTIONS
    # =========================================================================

    def submit_action(
        self, action: BuildAction | AttackAction | ScanAction | dict
    ) -> ExecutionResult:
        """Validate and apply one player action.

        Args:
            action: Action model, or a raw dict with a "type" key

        Returns:
            ExecutionResult; on failure nothing was changed
        """
        if self.state.is_game_over:
            return self._reject("Game is over", ["Game is over"])

        if isinstance(action, dict):
            try:
                action = parse_action(action)
            except ValidationError as e:
                errors = [
                    f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                    if err["loc"]
                    else err["msg"]
                    for err in e.errors()
                ]
                return self._reject("Invalid action", errors)

        if isinstance(action, BuildAction):
            result = self._execute_build(action)
        elif isinstance(action, AttackAction):
            result = self._execute_attack(action)
        elif isinstance(action, ScanAction):
            result = self._execute_scan(action)
        else:
            return self._reject("Unknown action", [f"Unknown action type: {type(action).__name__}"])

        if result.success:
            self.pending_actions.append(action)
        return result

    def _execute_build(self, action: BuildAction) -> ExecutionResult:
        player = self.state.player
        cost = build_cost(player, action.build_type, action.quantity)
        decision = Decision.build(action.build_type, action.quantity)
        errors = self.executor.apply_decision(self.state, "player", decision)
        if errors:
            return self._reject(f"Cannot build {action.quantity} {action.build_type}", errors)
        return ExecutionResult(
            success=True,
            message=(
                f"Started building {action.quantity} {action.build_type}(s) "
                f"for {cost.metal} metal, {cost.energy} energy"
            ),
            state_changed=True,
        )

    def _execute_attack(self, action: AttackAction) -> ExecutionResult:
        fleet = action.fleet.to_composition()
        decision = Decision.attack(fleet, action.target)
        errors = self.executor.apply_decision(self.state, "player", decision)
        if errors:
            return self._reject("Cannot launch attack", errors)
        turn = self.state.turn
        return ExecutionResult(
            success=True,
            message=(
                f"Fleet launched! {fleet} arrives turn {turn + TRAVEL_TURNS}, "
                f"returns turn {turn + RETURN_TURNS}"
            ),
            state_changed=True,
        )

    def _execute_scan(self, action: ScanAction) -> ExecutionResult:
        player = self.state.player
        cost = get_scan_cost(action.scan_type)
        if player.resources.energy < cost:
            return self._reject(
                f"Cannot perform {action.scan_type} scan",
                [
                    f"Insufficient energy for {action.scan_type} scan. "
                    f"Need: {cost}, Have: {player.resources.energy}"
                ],
            )
        errors = self.executor.apply_decision(self.state, "player", Decision.scan(action.scan_type))
        if errors:
            return self._reject(f"Cannot perform {action.scan_type} scan", errors)
        estimate = player.intelligence.known_enemy_fleet
        return ExecutionResult(
            success=True,
            message=f"{action.scan_type.capitalize()} scan complete: {estimate} estimated",
            state_changed=True,
        )

    def _reject(self, message: str, errors: list[str]) -> ExecutionResult:
        logger.warning(f"Player action rejected: {message}: {'; '.join(errors)}")
        self.error_log.record("user_input", "low", f"{message}: {'; '.join(errors)}")
        return ExecutionResult(success=False, message=message, state_changed=False, errors=errors)

    # =========================================================================
    # TURN PROCESSING
    # =========================================================================

    def end_turn(self) -> TurnResult:
        """Finish the player's turn and process it."""
        return self.process_turn(self.pending_actions)

    def process_turn(self, pending_actions: list | None = None) -> TurnResult:
        """Run one full turn.

        Args:
            pending_actions: Player actions submitted this turn

        Returns:
            TurnResult; success is False if processing raised, in which case
            any changes already made are kept
        """
        if self.state.is_game_over:
            return TurnResult(
                success=False,
                turn=self.state.turn,
                game_ended=True,
                winner=self.state.winner,
                victory_type=self.state.victory_type,
                errors=["Game is already over"],
            )

        previous = copy.deepcopy(self.state)
        try:
            report = self.executor.execute_turn(
                self.state, self.ai_engine, pending_actions, self.combat_factors
            )
        except Exception as e:
            phase = self.executor.current_phase.value
            message = f"Turn processing failed: {e}"
            logger.error(f"{message} (phase: {phase})")
            self.error_log.handle_turn_processing_error([message], previous.turn)
            return TurnResult(success=False, turn=self.state.turn, errors=[message])

        transition_errors = validate_state_transition(previous, self.state)
        for error in transition_errors:
            logger.warning(f"State transition check failed: {error}")
            self.error_log.record("validation", "medium", error, {"turn": previous.turn})

        return TurnResult(
            success=True,
            turn=self.state.turn,
            combat_events=report.combat_events,
            game_ended=self.state.is_game_over,
            winner=self.state.winner,
            victory_type=self.state.victory_type,
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_game_state(self) -> GameState:
        """Deep copy of the current state; changing it does not affect the game."""
        return copy.deepcopy(self.state)

    def is_game_over(self) -> bool:
        return self.state.is_game_over

    def get_winner(self) -> Side | None:
        return self.state.winner

    def get_victory_type(self) -> VictoryType | None:
        return self.state.victory_type

    def get_current_turn(self) -> int:
        return self.state.turn

    def get_game_phase(self) -> GamePhase:
        return self.state.phase

    def get_combat_log(self) -> list[CombatEvent]:
        return list(self.state.combat_log)

    def validate_game_state(self) -> list[str]:
        return validate_game_state(self.state)

    def get_game_statistics(self) -> dict:
        """Summary numbers for both sides."""
        stats = {
            "turn": self.state.turn,
            "phase": self.state.phase,
            "total_battles": len(self.state.combat_log),
            "ai_archetype": self.ai_engine.archetype,
        }
        for side in ("player", "ai"):
            player = self.state.get_side(side)
            net = get_net_income(player)
            stats[side] = {
                "total_fleet": player.total_fleet().total,
                "home_fleet": player.home_fleet.total,
                "fleets_in_transit": len(player.movements),
                "metal": player.resources.metal,
                "energy": player.resources.energy,
                "net_metal_income": net.metal,
                "net_energy_income": net.energy,
                "structures": player.economy.reactors + player.economy.mines,
                "battles_started": sum(1 for e in self.state.combat_log if e.attacker == side),
            }
        return stats

    def reset_game(self, config: GameConfig | None = None):
        """Start over with the same or a new configuration."""
        self._setup(config or self.config)
        logger.info(f"Game reset (AI: {self.config.ai_archetype}, seed: {self.config.seed})")
