"""Pydantic schemas for engine results."""

from pydantic import BaseModel, Field

from ..models.game import CombatEvent


class ExecutionResult(BaseModel):
    """Outcome of submitting a single player action."""

    success: bool
    message: str
    state_changed: bool = False
    errors: list[str] = Field(default_factory=list)


class TurnResult(BaseModel):
    """Outcome of processing one turn."""

    success: bool
    turn: int = Field(description="Turn number after processing")
    combat_events: list[CombatEvent] = Field(default_factory=list)
    game_ended: bool = False
    winner: str | None = None
    victory_type: str | None = None
    errors: list[str] = Field(default_factory=list)
