"""Player state model."""

from dataclasses import dataclass, field

from .economy import Economy, Resources
from .fleet import FleetComposition, FleetMovement
from .intelligence import Intelligence


@dataclass
class PlayerState:
    """Everything one side owns.

    The game keeps two of these: the human player and the AI.
    """

    resources: Resources
    home_fleet: FleetComposition
    movements: list[FleetMovement] = field(default_factory=list)
    economy: Economy = field(default_factory=Economy)
    intelligence: Intelligence = field(default_factory=Intelligence)
    has_been_attacked: bool = False

    def total_fleet(self) -> FleetComposition:
        """Home fleet plus every fleet currently in transit."""
        total = self.home_fleet
        for movement in self.movements:
            total = total + movement.composition
        return total

    def has_fleets(self) -> bool:
        return not self.total_fleet().is_empty()
