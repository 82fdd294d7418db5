"""
Nim Masters error hierarchy.

Player-facing problems (an illegal move, a move on an empty pile) are never
exceptions: the reducer reports them as failed results and the front-end
ignores them. The exceptions below are raised for driver programming errors
only.

Usage:
    from nim_masters.errors import MatchOverError

    try:
        result = apply_move(state, move.pile_index, move.amount)
    except MatchOverError as e:
        logger.error(f"Driver bug: {e.message}")
"""

from __future__ import annotations
from typing import Any

__all__ = [
    "NimError",
    "InvariantViolation",
    "MatchOverError",
    "EmptyBoardError",
    "ConfigurationError",
]


class NimError(Exception):
    """Base exception for all Nim Masters errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "NIM_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class InvariantViolation(NimError):
    """A driver called the engine in a state it must never be called in."""
    code: str = "INVARIANT_VIOLATION"


class MatchOverError(InvariantViolation):
    """Raised when a decided match is asked to change."""
    code: str = "MATCH_OVER"


class EmptyBoardError(InvariantViolation):
    """Raised when the decision engine is asked to move on an empty board."""
    code: str = "EMPTY_BOARD"


class ConfigurationError(NimError):
    """Invalid settings or match configuration."""
    code: str = "CONFIGURATION_ERROR"
