"""AI decision policies for Burn Rate."""

from .ai_engine import ARCHETYPE_POLICIES, AIEngine

__all__ = [
    "ARCHETYPE_POLICIES",
    "AIEngine",
]
