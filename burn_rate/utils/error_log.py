"""Bounded error log owned by a game engine instance.

Errors are classified by type and severity. The log keeps the most recent
entries only and decides whether play can continue after each one.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

from .constants import ERROR_LOG_CAPACITY

logger = logging.getLogger(__name__)

ErrorType = Literal["validation", "runtime", "user_input", "system", "game_logic"]
Severity = Literal["low", "medium", "high", "critical"]

ERROR_TYPES = ("validation", "runtime", "user_input", "system", "game_logic")
SEVERITIES = ("low", "medium", "high", "critical")

_LOG_LEVELS = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass
class GameError:
    """A single recorded error.

    Attributes:
        error_type: Category of the failure
        severity: How badly the failure affects play
        message: Human-readable description
        context: Extra data about where the error happened
        timestamp: When the error was recorded (UTC)
        recoverable: Whether play can continue after this error
    """

    error_type: ErrorType
    severity: Severity
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    recoverable: bool = True

    def __post_init__(self):
        """Validate error classification."""
        if self.error_type not in ERROR_TYPES:
            raise ValueError(f"Invalid error_type: {self.error_type}")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")


@dataclass
class ErrorResponse:
    """What the caller should do after an error."""

    can_continue: bool
    user_message: str
    should_restart: bool


def is_recoverable(error_type: ErrorType, severity: Severity) -> bool:
    """Decide whether an error of this kind leaves the game playable.

    Args:
        error_type: Category of the failure
        severity: Severity of the failure

    Returns:
        True if play can continue
    """
    if severity == "critical":
        return False
    if error_type == "user_input":
        return True
    if error_type == "runtime":
        return severity in ("low", "medium")
    if error_type == "system":
        return severity == "low"
    # validation and game_logic
    return severity != "high"


class ErrorLog:
    """Ring buffer of GameError records.

    Each GameEngine owns its own log; there is no process-wide instance.
    """

    def __init__(self, capacity: int = ERROR_LOG_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Invalid capacity: {capacity} (must be > 0)")
        self.capacity = capacity
        self._errors: deque[GameError] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._errors)

    def record(
        self,
        error_type: ErrorType,
        severity: Severity,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> GameError:
        """Append an error, evicting the oldest entry when full."""
        error = GameError(
            error_type=error_type,
            severity=severity,
            message=message,
            context=context or {},
            recoverable=is_recoverable(error_type, severity),
        )
        self._errors.append(error)
        logger.log(_LOG_LEVELS[severity], f"[{error_type}] {message}")
        return error

    def handle_error(
        self,
        error_type: ErrorType,
        severity: Severity,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> ErrorResponse:
        """Record an error and decide how the caller should proceed.

        Args:
            error_type: Category of the failure
            severity: Severity of the failure
            message: Description of what went wrong
            context: Optional extra data

        Returns:
            ErrorResponse describing whether play can continue
        """
        error = self.record(error_type, severity, message, context)

        if severity == "critical":
            return ErrorResponse(
                can_continue=False,
                user_message=f"Critical error: {message}. The game must be restarted.",
                should_restart=True,
            )
        if severity == "high":
            return ErrorResponse(
                can_continue=error.recoverable,
                user_message=f"Serious error: {message}",
                should_restart=not error.recoverable,
            )
        if severity == "medium":
            return ErrorResponse(
                can_continue=True,
                user_message=f"Warning: {message}",
                should_restart=False,
            )
        return ErrorResponse(can_continue=True, user_message=message, should_restart=False)

    def handle_turn_processing_error(self, errors: list[str], turn: int) -> ErrorResponse:
        """Record the failure of a whole turn.

        A turn failure with more than one underlying error is treated as high
        severity since the state may be partially advanced.
        """
        severity: Severity = "high" if len(errors) > 1 else "medium"
        message = "; ".join(errors) if errors else "Unknown turn processing failure"
        return self.handle_error("game_logic", severity, message, {"turn": turn})

    def recent(self, count: int = 10) -> list[GameError]:
        """Return up to `count` most recent errors, oldest first."""
        if count <= 0:
            return []
        return list(self._errors)[-count:]

    def by_type(self, error_type: ErrorType) -> list[GameError]:
        return [e for e in self._errors if e.error_type == error_type]

    def clear(self):
        self._errors.clear()
