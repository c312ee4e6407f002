"""
Events - The ordered log a turn hands back to its caller.

Phases build events with an empty id; the turn resolver stamps ids in
emission order so that a replayed turn produces identical ids.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState
    from .random_source import RandomSource


class EventPriority(Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    POSITIVE = "positive"


@dataclass
class GameEvent:
    turn: int
    priority: EventPriority
    category: str  # free-form tag: "science", "corporation", "colony", "market"
    title: str
    description: str = ""
    related_entity_ids: list[str] = field(default_factory=list)
    dismissed: bool = False
    id: str = ""


def make_event(
    turn: int,
    priority: EventPriority,
    category: str,
    title: str,
    description: str = "",
    related: list[str] | None = None,
) -> GameEvent:
    """Create an un-stamped event."""
    return GameEvent(
        turn=turn,
        priority=priority,
        category=category,
        title=title,
        description=description,
        related_entity_ids=list(related or []),
    )


@dataclass
class PhaseResult:
    """Output of one turn phase: the new snapshot plus what happened."""
    new_state: GameState
    events: list[GameEvent] = field(default_factory=list)


# A phase is a pure function of the snapshot and the injected random source.
Phase = Callable[["GameState", "RandomSource"], PhaseResult]
