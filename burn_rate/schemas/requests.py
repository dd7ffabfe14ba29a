"""Pydantic schemas for player actions and game configuration."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from ..models.fleet import FleetComposition
from ..utils.constants import ERROR_LOG_CAPACITY, STARTING_FLEET, STARTING_RESOURCES


class BuildAction(BaseModel):
    """Order units or structures."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    type: Literal["build"] = "build"
    build_type: Literal["frigate", "cruiser", "battleship", "reactor", "mine"] = Field(
        alias="buildType", description="Unit or structure to build"
    )
    quantity: int = Field(gt=0, description="How many to build")


class FleetSpec(BaseModel):
    """Ship counts sent on an attack."""

    frigates: int = Field(default=0, ge=0)
    cruisers: int = Field(default=0, ge=0)
    battleships: int = Field(default=0, ge=0)

    def to_composition(self) -> FleetComposition:
        return FleetComposition(
            frigates=self.frigates,
            cruisers=self.cruisers,
            battleships=self.battleships,
        )


class AttackAction(BaseModel):
    """Send ships from home to attack the AI home system."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    type: Literal["attack"] = "attack"
    fleet: FleetSpec = Field(description="Ships to send")
    target: str = Field(default="ai_home", description="Target system")

    @model_validator(mode="after")
    def validate_fleet_not_empty(self):
        """Reject attacks that send no ships."""
        if self.fleet.frigates + self.fleet.cruisers + self.fleet.battleships == 0:
            raise ValueError("Cannot send empty fleet")
        return self


class ScanAction(BaseModel):
    """Spend energy to scan the AI home system."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    type: Literal["scan"] = "scan"
    scan_type: Literal["basic", "deep", "advanced"] = Field(
        alias="scanType", description="Scan tier"
    )


PlayerAction = Annotated[BuildAction | AttackAction | ScanAction, Field(discriminator="type")]

_action_adapter = TypeAdapter(PlayerAction)


def parse_action(data: dict) -> BuildAction | AttackAction | ScanAction:
    """Validate a raw action payload.

    Raises:
        pydantic.ValidationError: If the payload is not a valid action
    """
    return _action_adapter.validate_python(data)


class GameConfig(BaseModel):
    """Settings for a new game."""

    ai_archetype: Literal["aggressor", "economist", "trickster", "hybrid"] = Field(
        default="hybrid", description="AI personality"
    )
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")
    starting_metal: int = Field(default=STARTING_RESOURCES["metal"], ge=0)
    starting_energy: int = Field(default=STARTING_RESOURCES["energy"], ge=0)
    starting_frigates: int = Field(default=STARTING_FLEET["frigates"], ge=0)
    starting_cruisers: int = Field(default=STARTING_FLEET["cruisers"], ge=0)
    starting_battleships: int = Field(default=STARTING_FLEET["battleships"], ge=0)
    error_log_capacity: int = Field(default=ERROR_LOG_CAPACITY, gt=0)

    @field_validator("ai_archetype", mode="before")
    @classmethod
    def normalize_archetype(cls, v):
        """Accept archetype names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def starting_fleet(self) -> FleetComposition:
        return FleetComposition(
            frigates=self.starting_frigates,
            cruisers=self.starting_cruisers,
            battleships=self.starting_battleships,
        )
