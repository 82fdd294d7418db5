"""
API Module - Front-end interface.

Exposes the engine to a presentation layer:
1. Start a match from menu settings
2. Send intents on human turns
3. Tick the match every frame
4. Poll read-only snapshots
5. Ask the CPU for a move suggestion

All state is session-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    MatchConfigRequest,
    IntentRequest,
    SuggestRequest,
    # Responses
    MatchSnapshot,
    StepResponse,
    SuggestResponse,
    ErrorResponse,
    # Shared
    OutcomeInfo,
    EventInfo,
    IntentKind,
    ErrorCode,
)
from .service import GameService

__all__ = [
    # Requests
    "MatchConfigRequest",
    "IntentRequest",
    "SuggestRequest",
    # Responses
    "MatchSnapshot",
    "StepResponse",
    "SuggestResponse",
    "ErrorResponse",
    # Shared
    "OutcomeInfo",
    "EventInfo",
    "IntentKind",
    "ErrorCode",
    # Service
    "GameService",
]
