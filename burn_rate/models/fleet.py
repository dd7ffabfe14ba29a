"""Fleet data models: ship counts and fleets in transit."""

from dataclasses import dataclass
from typing import Literal

UnitType = Literal["frigate", "cruiser", "battleship"]
MissionPhase = Literal["outbound", "combat", "returning"]

MISSION_PHASES = ("outbound", "combat", "returning")

# Unit type -> FleetComposition field name
UNIT_FIELDS = {
    "frigate": "frigates",
    "cruiser": "cruisers",
    "battleship": "battleships",
}


@dataclass
class FleetComposition:
    """Ship counts for each of the three unit types."""

    frigates: int = 0
    cruisers: int = 0
    battleships: int = 0

    def __post_init__(self):
        """Validate counts after initialization."""
        for name in ("frigates", "cruisers", "battleships"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Invalid {name}: {value!r} (must be an int)")
            if value < 0:
                raise ValueError(f"Invalid {name}: {value} (must be >= 0)")

    @classmethod
    def empty(cls) -> "FleetComposition":
        return cls(0, 0, 0)

    @classmethod
    def from_counts(cls, counts: dict[str, int]) -> "FleetComposition":
        """Build a composition keyed by unit type ("frigate", ...)."""
        for key in counts:
            if key not in UNIT_FIELDS:
                raise ValueError(f"Invalid unit type: {key}")
        return cls(
            frigates=counts.get("frigate", 0),
            cruisers=counts.get("cruiser", 0),
            battleships=counts.get("battleship", 0),
        )

    @property
    def total(self) -> int:
        return self.frigates + self.cruisers + self.battleships

    def is_empty(self) -> bool:
        return self.total == 0

    def count(self, unit_type: str) -> int:
        """Return the number of ships of the given unit type."""
        if unit_type not in UNIT_FIELDS:
            raise ValueError(f"Invalid unit type: {unit_type}")
        return getattr(self, UNIT_FIELDS[unit_type])

    def counts(self) -> dict[str, int]:
        """Return counts keyed by unit type."""
        return {unit_type: self.count(unit_type) for unit_type in UNIT_FIELDS}

    def __add__(self, other: "FleetComposition") -> "FleetComposition":
        return FleetComposition(
            frigates=self.frigates + other.frigates,
            cruisers=self.cruisers + other.cruisers,
            battleships=self.battleships + other.battleships,
        )

    def __sub__(self, other: "FleetComposition") -> "FleetComposition":
        # Clamped at zero per type
        return FleetComposition(
            frigates=max(0, self.frigates - other.frigates),
            cruisers=max(0, self.cruisers - other.cruisers),
            battleships=max(0, self.battleships - other.battleships),
        )

    def covers(self, other: "FleetComposition") -> bool:
        """True if this fleet has at least as many ships of every type."""
        return (
            self.frigates >= other.frigates
            and self.cruisers >= other.cruisers
            and self.battleships >= other.battleships
        )

    def __str__(self) -> str:
        return f"{self.frigates}F/{self.cruisers}C/{self.battleships}B"


@dataclass
class FleetMovement:
    """A fleet that has left its home system.

    Attack movements depart with phase "outbound" and fight on their arrival
    turn. Survivors come back as a separate "returning" movement whose arrival
    and return turns coincide.
    """

    composition: FleetComposition
    target: str  # "player_home", "ai_home" or "home" when returning
    arrival_turn: int
    return_turn: int
    mission_phase: MissionPhase = "outbound"

    def __post_init__(self):
        """Validate movement data after initialization."""
        if self.mission_phase not in MISSION_PHASES:
            raise ValueError(f"Invalid mission_phase: {self.mission_phase}")
        if self.composition.is_empty():
            raise ValueError("Invalid composition: fleet movement must contain ships")
        if self.arrival_turn < 1:
            raise ValueError(f"Invalid arrival_turn: {self.arrival_turn} (must be >= 1)")
        if self.arrival_turn > self.return_turn:
            raise ValueError(
                f"Invalid return_turn: {self.return_turn} "
                f"(must be >= arrival_turn {self.arrival_turn})"
            )
        if self.mission_phase == "outbound" and self.arrival_turn == self.return_turn:
            raise ValueError(
                f"Invalid return_turn: {self.return_turn} "
                f"(outbound fleets must return after arrival_turn {self.arrival_turn})"
            )
