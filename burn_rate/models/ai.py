"""AI data models: behaviour profiles, policy memory and decisions."""

from dataclasses import dataclass, field
from typing import Literal

from ..utils.constants import AI_ARCHETYPES, HYBRID_STRATEGY_DURATION, TRICKSTER_DECEPTION_COOLDOWN
from .economy import BUILD_TYPES, BuildType
from .fleet import FleetComposition
from .intelligence import SCAN_TYPES, ScanType

Archetype = Literal["aggressor", "economist", "trickster", "hybrid"]
DecisionKind = Literal["build", "attack", "scan", "wait"]
HybridStrategy = Literal["aggressive", "economic", "defensive", "opportunistic"]
TricksterMode = Literal["straightforward", "deceptive", "balanced"]

DECISION_KINDS = ("build", "attack", "scan", "wait")
HYBRID_STRATEGIES = ("aggressive", "economic", "defensive", "opportunistic")


@dataclass(frozen=True)
class BehaviorProbabilities:
    """Probability weights steering an archetype's choices.

    Attributes:
        military_focus: Chance of taking the military branch
        economic_focus: Chance of taking the economic branch
        aggression_level: Willingness to commit fleets
        deception_chance: Chance of a deceptive move (trickster)
        adaptive_variation: Chance of reacting to the current situation
    """

    military_focus: float
    economic_focus: float
    aggression_level: float
    deception_chance: float
    adaptive_variation: float

    def __post_init__(self):
        for name in (
            "military_focus",
            "economic_focus",
            "aggression_level",
            "deception_chance",
            "adaptive_variation",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Invalid {name}: {value} (must be in [0, 1])")


ARCHETYPE_BEHAVIORS: dict[str, BehaviorProbabilities] = {
    "aggressor": BehaviorProbabilities(0.8, 0.2, 0.9, 0.1, 0.2),
    "economist": BehaviorProbabilities(0.25, 0.75, 0.3, 0.1, 0.25),
    "trickster": BehaviorProbabilities(0.4, 0.3, 0.6, 0.7, 0.3),
    "hybrid": BehaviorProbabilities(0.6, 0.6, 0.5, 0.2, 0.4),
}


@dataclass
class Decision:
    """One action the AI wants to take this turn.

    Use the classmethod constructors rather than filling fields by hand.
    """

    kind: DecisionKind
    build_type: BuildType | None = None
    quantity: int = 0
    attack_fleet: FleetComposition | None = None
    target: str | None = None
    scan_type: ScanType | None = None

    def __post_init__(self):
        """Validate that the fields required by the kind are present."""
        if self.kind not in DECISION_KINDS:
            raise ValueError(f"Invalid kind: {self.kind}")
        if self.kind == "build":
            if self.build_type not in BUILD_TYPES:
                raise ValueError(f"Invalid build_type: {self.build_type}")
            if self.quantity <= 0:
                raise ValueError(f"Invalid quantity: {self.quantity} (must be > 0)")
        elif self.kind == "attack":
            if self.attack_fleet is None or self.attack_fleet.is_empty():
                raise ValueError("Invalid attack_fleet: attack needs ships")
        elif self.kind == "scan":
            if self.scan_type not in SCAN_TYPES:
                raise ValueError(f"Invalid scan_type: {self.scan_type}")

    @classmethod
    def build(cls, build_type: BuildType, quantity: int) -> "Decision":
        return cls(kind="build", build_type=build_type, quantity=quantity)

    @classmethod
    def attack(cls, fleet: FleetComposition, target: str = "player_home") -> "Decision":
        return cls(kind="attack", attack_fleet=fleet, target=target)

    @classmethod
    def scan(cls, scan_type: ScanType) -> "Decision":
        return cls(kind="scan", scan_type=scan_type)

    @classmethod
    def wait(cls) -> "Decision":
        return cls(kind="wait")

    def describe(self) -> str:
        if self.kind == "build":
            return f"build {self.quantity} {self.build_type}"
        if self.kind == "attack":
            return f"attack {self.target} with {self.attack_fleet}"
        if self.kind == "scan":
            return f"{self.scan_type} scan"
        return "wait"


@dataclass
class AIState:
    """AI assessments and per-policy memory.

    This is derived data, not the AI's authoritative holdings; those live in
    GameState.ai.
    """

    archetype: Archetype
    behavior: BehaviorProbabilities
    threat_level: float = 0.0  # 0 = safe, 1 = outmatched
    economic_advantage: float = 0.0  # -1 to 1, positive favours the AI
    last_decision: Decision | None = None
    # Trickster memory
    last_deception_turn: int = 0
    deception_cooldown: int = TRICKSTER_DECEPTION_COOLDOWN
    trickster_mode: TricksterMode | None = None
    # Hybrid memory
    current_strategy: HybridStrategy = "economic"
    strategy_timer: int = 0
    strategy_duration: int = HYBRID_STRATEGY_DURATION
    decision_history: list[Decision] = field(default_factory=list)

    def __post_init__(self):
        if self.archetype not in AI_ARCHETYPES:
            raise ValueError(f"Invalid archetype: {self.archetype}")
        if self.current_strategy not in HYBRID_STRATEGIES:
            raise ValueError(f"Invalid current_strategy: {self.current_strategy}")

    @classmethod
    def for_archetype(cls, archetype: Archetype) -> "AIState":
        if archetype not in ARCHETYPE_BEHAVIORS:
            raise ValueError(f"Invalid archetype: {archetype}")
        return cls(archetype=archetype, behavior=ARCHETYPE_BEHAVIORS[archetype])
