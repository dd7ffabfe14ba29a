"""AI decision engine: picks an archetype policy and runs it each turn."""

import logging
from collections.abc import Callable

from ...models.ai import AIState, Archetype, Decision
from ...models.game import GameState
from ...utils.rng import GameRNG
from . import aggressor, economist, hybrid, trickster
from .base import validate_decision

logger = logging.getLogger(__name__)

Policy = Callable[[GameState, AIState, GameRNG], Decision]

ARCHETYPE_POLICIES: dict[str, Policy] = {
    "aggressor": aggressor.decide,
    "economist": economist.decide,
    "trickster": trickster.decide,
    "hybrid": hybrid.decide,
}

DECISION_HISTORY_LIMIT = 20


class AIEngine:
    """Runs one archetype policy for the AI side.

    The policy is fixed at construction. Decisions are suggestions: the turn
    orchestrator validates them against the real economy and drops any that
    cannot be applied.
    """

    def __init__(self, archetype: Archetype, rng: GameRNG | None = None):
        """Initialize the engine for an archetype.

        Args:
            archetype: "aggressor", "economist", "trickster" or "hybrid"
            rng: Source of randomness shared with the rest of the game

        Raises:
            ValueError: If the archetype is unknown
        """
        if archetype not in ARCHETYPE_POLICIES:
            raise ValueError(f"Unknown AI archetype: {archetype}")
        self.rng = rng or GameRNG()
        self.policy = ARCHETYPE_POLICIES[archetype]
        self.state = AIState.for_archetype(archetype)
        if archetype == "hybrid":
            self.state.current_strategy = hybrid.select_initial_strategy(self.rng)

    @property
    def archetype(self) -> Archetype:
        return self.state.archetype

    def process_turn(self, game_state: GameState) -> Decision:
        """Ask the policy for this turn's decision.

        Decisions the AI plainly cannot afford are replaced by a wait.

        Args:
            game_state: Current game state (read only)

        Returns:
            Decision to apply
        """
        decision = self.policy(game_state, self.state, self.rng)
        if not validate_decision(decision, game_state.ai):
            logger.debug(f"AI {self.archetype} decision not affordable: {decision.describe()}")
            decision = Decision.wait()

        self.state.last_decision = decision
        self.state.decision_history.append(decision)
        if len(self.state.decision_history) > DECISION_HISTORY_LIMIT:
            self.state.decision_history = self.state.decision_history[-DECISION_HISTORY_LIMIT:]
        return decision
