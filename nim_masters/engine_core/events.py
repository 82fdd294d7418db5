"""
Events - Notifications for the presentation and audio layers.

The engine emits events; sinks consume them. A sink is fire-and-forget:
whatever it does (play a tone, spawn particles, log), its failure never
reaches the engine.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .state import EndReason

logger = logging.getLogger(__name__)

# A take of any size produces at most this many stone_removed sub-events
MAX_STONE_EVENTS = 4


class EventKind(Enum):
    MOVE_TAKEN = "move_taken"
    STONE_REMOVED = "stone_removed"
    MATCH_DECIDED = "match_decided"


@dataclass(frozen=True)
class MoveTaken:
    pile_index: int
    amount: int
    mover: int
    kind: EventKind = EventKind.MOVE_TAKEN


@dataclass(frozen=True)
class StoneRemoved:
    """One audible 'clack' of a take; index counts 0..MAX_STONE_EVENTS-1."""
    index: int
    mover: int
    kind: EventKind = EventKind.STONE_REMOVED


@dataclass(frozen=True)
class MatchDecided:
    winner: int
    reason: EndReason
    kind: EventKind = EventKind.MATCH_DECIDED


def take_events(pile_index: int, amount: int, mover: int) -> list:
    """Events for one applied move: the take plus its capped sub-events."""
    events: list = [MoveTaken(pile_index=pile_index, amount=amount, mover=mover)]
    events.extend(
        StoneRemoved(index=i, mover=mover)
        for i in range(min(amount, MAX_STONE_EVENTS))
    )
    return events


class EventSink(ABC):
    """Receiver of engine events."""

    @abstractmethod
    def notify(self, event) -> None:
        pass


class RecordingSink(EventSink):
    """Keeps every event in order."""

    def __init__(self):
        self.events: list = []

    def notify(self, event) -> None:
        self.events.append(event)

    def drain(self) -> list:
        """Return and clear the recorded events."""
        events, self.events = self.events, []
        return events


def dispatch(sink: EventSink | None, events: Iterable) -> None:
    """
    Deliver events to a sink.

    Sink errors are logged and dropped so that a broken audio or
    rendering layer cannot fail a match.
    """
    if sink is None:
        return
    for event in events:
        try:
            sink.notify(event)
        except Exception:
            logger.warning(f"Event sink failed on {event.kind.value}", exc_info=True)
