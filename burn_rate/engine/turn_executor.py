"""Main turn execution orchestrator.

This module coordinates the turn phases in the correct order:
1. Income: income, construction and intelligence ageing for both sides
2. Actions: player actions were already applied on submission; the pending
   list is drained here
3. AI: the AI policy makes one decision, which is applied if valid
4. Combat: player attacks resolve first, then AI attacks; returning fleets
   that are due merge into their home fleets
5. Victory: economic defeat, then military defeat
6. Next: the turn counter advances and the game phase is recomputed,
   unless the game ended this turn

Architecture:
Each phase is an independent method. The orchestration method composes them
in order and records which phase is running, so a failure can be traced to
the phase that raised.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..models.ai import Decision
from ..models.fleet import FleetComposition
from ..models.game import CombatEvent, GameState, Side
from ..models.player import PlayerState
from ..utils.rng import GameRNG
from .ai import AIEngine
from .combat import CombatFactors, resolve_combat
from .economy import calculate_fleet_upkeep, calculate_income, process_construction, queue_build
from .intelligence import age_intelligence, perform_scan
from .movement import create_returning_fleet, launch_fleet, process_fleet_movements
from .victory import VictoryResult, check_victory

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Phases of one turn, in execution order."""

    INCOME = "income"
    ACTIONS = "actions"
    AI = "ai"
    COMBAT = "combat"
    VICTORY = "victory"
    NEXT = "next"


@dataclass
class TurnReport:
    """Everything that happened while processing one turn."""

    combat_events: list[CombatEvent] = field(default_factory=list)
    ai_decision: Decision | None = None
    victory: VictoryResult | None = None
    actions_processed: int = 0


def other_side(side: Side) -> Side:
    return "ai" if side == "player" else "player"


class TurnExecutor:
    """Orchestrates the turn phases in the correct order.

    Each phase is an independent method that can be tested separately.
    """

    def __init__(self, rng: GameRNG | None = None):
        self.rng = rng or GameRNG()
        self.current_phase = TurnPhase.ACTIONS

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_income(self, game_state: GameState):
        """Apply income, advance construction and age intelligence.

        Args:
            game_state: Current game state (modified in place)
        """
        for side in ("player", "ai"):
            player = game_state.get_side(side)
            net = calculate_income(player)
            completed = process_construction(player)
            age_intelligence(player, game_state.turn)
            logger.debug(
                f"{side} income {net.metal}/{net.energy}, "
                f"{len(completed)} build order(s) completed"
            )

    def execute_phase_actions(self, pending_actions: list) -> int:
        """Drain the pending action list.

        Player actions mutate state when submitted, so there is nothing left
        to apply; the count is reported for the turn log.
        """
        count = len(pending_actions)
        pending_actions.clear()
        return count

    def execute_phase_ai(self, game_state: GameState, ai_engine: AIEngine) -> Decision:
        """Let the AI decide and apply the decision.

        Decisions that fail validation against the real economy are dropped
        and reported as a wait.

        Args:
            game_state: Current game state (modified in place)
            ai_engine: AI engine for the game

        Returns:
            The decision that was applied
        """
        decision = ai_engine.process_turn(game_state)
        errors = self.apply_decision(game_state, "ai", decision)
        if errors:
            logger.debug(f"AI decision dropped ({decision.describe()}): {'; '.join(errors)}")
            return Decision.wait()
        return decision

    def execute_phase_combat(
        self, game_state: GameState, factors: CombatFactors | None = None
    ) -> list[CombatEvent]:
        """Resolve arriving attacks and bring returning fleets home.

        The player's fleets are processed first, then the AI's.

        Args:
            game_state: Current game state (modified in place)
            factors: Optional fixed combat draws, applied to every battle

        Returns:
            Combat events for this turn, also appended to the combat log
        """
        events = []
        for side in ("player", "ai"):
            events.extend(self._process_side_movements(game_state, side, factors))
        game_state.combat_log.extend(events)
        return events

    def execute_phase_victory_check(self, game_state: GameState) -> VictoryResult | None:
        """End the game if either side has lost.

        Args:
            game_state: Current game state (terminal fields set on victory)

        Returns:
            VictoryResult if the game ended this turn
        """
        result = check_victory(game_state)
        if result is not None:
            game_state.end_game(result.winner, result.victory_type)
            logger.info(
                f"Game over on turn {game_state.turn}: {result.winner} wins "
                f"({result.victory_type})"
            )
        return result

    def execute_phase_next(self, game_state: GameState):
        """Advance the turn counter unless the game is over."""
        if not game_state.is_game_over:
            game_state.advance_turn()

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_turn(
        self,
        game_state: GameState,
        ai_engine: AIEngine,
        pending_actions: list | None = None,
        factors: CombatFactors | None = None,
    ) -> TurnReport:
        """Run every phase of one turn in order.

        Exceptions propagate to the caller; state changes made by earlier
        phases are kept.

        Args:
            game_state: Current game state (modified in place)
            ai_engine: AI engine for the game
            pending_actions: Player actions submitted this turn
            factors: Optional fixed combat draws

        Returns:
            TurnReport for the processed turn
        """
        report = TurnReport()

        self.current_phase = TurnPhase.INCOME
        self.execute_phase_income(game_state)

        self.current_phase = TurnPhase.ACTIONS
        report.actions_processed = self.execute_phase_actions(
            pending_actions if pending_actions is not None else []
        )

        self.current_phase = TurnPhase.AI
        report.ai_decision = self.execute_phase_ai(game_state, ai_engine)

        self.current_phase = TurnPhase.COMBAT
        report.combat_events = self.execute_phase_combat(game_state, factors)

        self.current_phase = TurnPhase.VICTORY
        report.victory = self.execute_phase_victory_check(game_state)

        self.current_phase = TurnPhase.NEXT
        self.execute_phase_next(game_state)

        self.current_phase = TurnPhase.ACTIONS
        return report

    # =========================================================================
    # HELPERS
    # =========================================================================

    def apply_decision(self, game_state: GameState, side: Side, decision: Decision) -> list[str]:
        """Apply a build, attack or scan for one side.

        Returns:
            List of error messages; empty means the decision was applied
        """
        player = game_state.get_side(side)
        if decision.kind == "build":
            return queue_build(player, decision.build_type, decision.quantity)
        if decision.kind == "attack":
            target = decision.target or f"{other_side(side)}_home"
            return launch_fleet(player, decision.attack_fleet, target, game_state.turn)
        if decision.kind == "scan":
            target = game_state.get_side(other_side(side))
            result = perform_scan(player, target, decision.scan_type, game_state.turn, self.rng)
            if result is None:
                return [f"Insufficient energy for {decision.scan_type} scan"]
        return []

    def _process_side_movements(
        self, game_state: GameState, side: Side, factors: CombatFactors | None
    ) -> list[CombatEvent]:
        attacker = game_state.get_side(side)
        defender = game_state.get_side(other_side(side))
        turn = game_state.turn

        partition = process_fleet_movements(attacker.movements, turn)
        remaining = list(partition.outbound)
        events = []

        for movement in partition.combat:
            defender_before = defender.home_fleet
            result = resolve_combat(movement.composition, defender_before, factors, self.rng)

            defender.home_fleet = result.defender_survivors
            defender.has_been_attacked = True
            _refund_upkeep(attacker, result.attacker_casualties)
            _refund_upkeep(defender, result.defender_casualties)

            returning = create_returning_fleet(result.attacker_survivors, movement, turn)
            if returning is not None:
                remaining.append(returning)

            events.append(
                CombatEvent(
                    turn=turn,
                    attacker=side,
                    attacker_fleet=movement.composition,
                    defender_fleet=defender_before,
                    outcome=result.outcome,
                    attacker_casualties=result.attacker_casualties,
                    defender_casualties=result.defender_casualties,
                    attacker_survivors=result.attacker_survivors,
                    defender_survivors=result.defender_survivors,
                )
            )
            logger.info(
                f"Turn {turn}: {side} attack {movement.composition} vs "
                f"{defender_before} -> {result.outcome}"
            )

        for movement in partition.returning:
            attacker.home_fleet = attacker.home_fleet + movement.composition

        attacker.movements = remaining
        return events


def _refund_upkeep(player: PlayerState, casualties: FleetComposition):
    """Give back one turn of upkeep for ships lost in battle."""
    refund = calculate_fleet_upkeep(casualties)
    player.resources.metal += refund.metal
    player.resources.energy += refund.energy
