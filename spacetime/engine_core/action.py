"""
Action System - Player requests, payloads, and results.

Actions are the explicit, user-driven requests the engine accepts between
turns (the turn pipeline itself needs no actions). Failures are reported
as tagged error codes, never raised, so callers can branch on the kind
of failure without parsing messages.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import InfraDomain, ScienceSectorType


class ActionType(Enum):
    """Types of player actions."""
    INVEST_PLANET = "invest_planet"
    SET_SCIENCE_FOCUS = "set_science_focus"


class ActionErrorCode:
    """Symbolic failure kinds returned in ActionResult.error_code."""
    COLONY_NOT_FOUND = "COLONY_NOT_FOUND"
    INSUFFICIENT_BP = "INSUFFICIENT_BP"
    NO_MATCHING_DEPOSIT = "NO_MATCHING_DEPOSIT"
    AT_CAP = "AT_CAP"
    UNKNOWN_DOMAIN = "UNKNOWN_DOMAIN"
    UNKNOWN_SCIENCE_DOMAIN = "UNKNOWN_SCIENCE_DOMAIN"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    Different action types use different fields; the reducer validates.
    """
    colony_id: str | None = None
    domain: InfraDomain | None = None
    science_domain: ScienceSectorType | None = None


@dataclass
class Action:
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def invest_planet(cls, colony_id: str, domain: InfraDomain) -> Action:
        """Spend BP for one public infrastructure level."""
        return cls(
            action_type=ActionType.INVEST_PLANET,
            payload=ActionPayload(colony_id=colony_id, domain=domain),
        )

    @classmethod
    def set_science_focus(cls, science_domain: ScienceSectorType | None) -> Action:
        """Focus one science domain, or clear the focus with None."""
        return cls(
            action_type=ActionType.SET_SCIENCE_FOCUS,
            payload=ActionPayload(science_domain=science_domain),
        )

    def __str__(self) -> str:
        parts = [self.action_type.value]
        if self.payload.colony_id:
            parts.append(self.payload.colony_id)
        if self.payload.domain:
            parts.append(self.payload.domain.value)
        if self.payload.science_domain:
            parts.append(self.payload.science_domain.value)
        return " ".join(parts)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    - Human-readable changes
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
