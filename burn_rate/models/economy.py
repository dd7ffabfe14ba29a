"""Economy data models: stockpiles, structures and the construction queue."""

from dataclasses import dataclass, field
from typing import Literal

BuildType = Literal["frigate", "cruiser", "battleship", "reactor", "mine"]

BUILD_TYPES = ("frigate", "cruiser", "battleship", "reactor", "mine")


@dataclass
class Resources:
    """Current stockpile and last computed per-turn net income.

    Stock may dip below zero (down to RESOURCE_FLOOR) when upkeep outruns
    income; the income fields hold the net applied on the most recent turn.
    """

    metal: int
    energy: int
    metal_income: int = 0
    energy_income: int = 0


@dataclass
class BuildOrder:
    """An in-progress construction.

    Attributes:
        build_type: Unit or structure being built
        quantity: How many are being built
        turns_remaining: Turns left before completion
        drain_metal: Metal consumed from income each turn while active
        drain_energy: Energy consumed from income each turn while active
    """

    build_type: BuildType
    quantity: int
    turns_remaining: int
    drain_metal: int
    drain_energy: int

    def __post_init__(self):
        """Validate build order after initialization."""
        if self.build_type not in BUILD_TYPES:
            raise ValueError(f"Invalid build_type: {self.build_type}")
        if self.quantity <= 0:
            raise ValueError(f"Invalid quantity: {self.quantity} (must be > 0)")
        if self.turns_remaining < 0:
            raise ValueError(
                f"Invalid turns_remaining: {self.turns_remaining} (must be >= 0)"
            )
        if self.drain_metal < 0 or self.drain_energy < 0:
            raise ValueError(
                f"Invalid drain: {self.drain_metal} metal, {self.drain_energy} energy "
                "(must be >= 0)"
            )

    @property
    def is_structure(self) -> bool:
        return self.build_type in ("reactor", "mine")


@dataclass
class Economy:
    """Owned structures and queued construction."""

    reactors: int = 0
    mines: int = 0
    construction_queue: list[BuildOrder] = field(default_factory=list)

    def __post_init__(self):
        if self.reactors < 0:
            raise ValueError(f"Invalid reactors: {self.reactors} (must be >= 0)")
        if self.mines < 0:
            raise ValueError(f"Invalid mines: {self.mines} (must be >= 0)")

    def structure_count(self, structure_type: str) -> int:
        if structure_type == "reactor":
            return self.reactors
        if structure_type == "mine":
            return self.mines
        raise ValueError(f"Invalid structure type: {structure_type}")
