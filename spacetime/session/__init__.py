"""
Session Module - Runs simulations turn by turn.

A session is one play-through of an economy:
- Created from a starting snapshot and a seed
- Holds the current snapshot and the accumulated event log
- Advances through the turn resolver
- Destroyed when the caller ends it

Sessions are in-memory only. A session can always be recreated from its
starting snapshot and seed.
"""

from .turn_resolver import TurnResolver, TurnResult, PhaseLogEntry, DEFAULT_PHASES, resolve_turn
from .manager import SimulationSession, SessionManager, SessionState

__all__ = [
    "TurnResolver",
    "TurnResult",
    "PhaseLogEntry",
    "DEFAULT_PHASES",
    "resolve_turn",
    "SimulationSession",
    "SessionManager",
    "SessionState",
]
