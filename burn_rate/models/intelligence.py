"""Intelligence data models: scan results and what a side knows."""

from dataclasses import dataclass, field
from typing import Literal

from .fleet import FleetComposition

ScanType = Literal["basic", "deep", "advanced"]

SCAN_TYPES = ("basic", "deep", "advanced")


@dataclass
class EconomicIntel:
    """Economic data revealed by deep and advanced scans."""

    reactors: int
    mines: int
    metal_income: int = 0
    energy_income: int = 0


@dataclass
class ScanResult:
    """Outcome of a single scan.

    Attributes:
        scan_type: Tier of scan that produced this result
        turn: Turn the scan was performed
        fleet_estimate: Reported enemy home fleet
        accuracy: Confidence in the estimate (0-1), decays with age
        economic_data: Structure and income data (deep and advanced only)
        strategic_intent: Inferred enemy plan (advanced only)
        is_misinformation: Whether the report was corrupted by enemy deception
        data_age: Turns since the scan was performed
    """

    scan_type: ScanType
    turn: int
    fleet_estimate: FleetComposition
    accuracy: float
    economic_data: EconomicIntel | None = None
    strategic_intent: str | None = None
    is_misinformation: bool = False
    data_age: int = 0

    def __post_init__(self):
        """Validate scan result after initialization."""
        if self.scan_type not in SCAN_TYPES:
            raise ValueError(f"Invalid scan_type: {self.scan_type}")
        if not 0.0 <= self.accuracy <= 1.0:
            raise ValueError(f"Invalid accuracy: {self.accuracy} (must be in [0, 1])")


@dataclass
class Intelligence:
    """What one side currently knows about the other.

    The estimate is never invalidated automatically; callers show its age
    alongside it instead.
    """

    last_scan_turn: int = 0
    known_enemy_fleet: FleetComposition = field(default_factory=FleetComposition.empty)
    scan_accuracy: float = 0.7
    scan_history: list[ScanResult] = field(default_factory=list)
    misinformation_chance: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.misinformation_chance <= 1.0:
            raise ValueError(
                f"Invalid misinformation_chance: {self.misinformation_chance} "
                "(must be in [0, 1])"
            )

    def age(self, current_turn: int) -> int:
        """Turns elapsed since the last scan."""
        return current_turn - self.last_scan_turn

    @property
    def has_scanned(self) -> bool:
        return self.last_scan_turn > 0
