"""
Engine Core - Deterministic economic state and player action handling.

The core owns:
1. The GameState snapshot and its records
2. Events and phase results
3. Injectable random sources
4. Player actions applied via the reducer

Turn phases live in `spacetime.phases`; the pipeline that runs them lives
in `spacetime.session.turn_resolver`.
"""

from .state import (
    GameState,
    Colony,
    Planet,
    Corporation,
    InfraDomain,
    InfraState,
    ResourceType,
    ScienceSectorType,
)
from .events import GameEvent, EventPriority, PhaseResult
from .random_source import RandomSourceExhausted, ScriptedRandom, seeded_source
from .action import Action, ActionType, ActionPayload, ActionResult, ActionErrorCode
from .reducer import Reducer, apply_action

__all__ = [
    "GameState",
    "Colony",
    "Planet",
    "Corporation",
    "InfraDomain",
    "InfraState",
    "ResourceType",
    "ScienceSectorType",
    "GameEvent",
    "EventPriority",
    "PhaseResult",
    "RandomSourceExhausted",
    "ScriptedRandom",
    "seeded_source",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ActionErrorCode",
    "Reducer",
    "apply_action",
]
