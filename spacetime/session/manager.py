"""
Session Manager - Creates and manages simulation sessions.

LIFECYCLE:
1. Caller starts a session from a snapshot and a seed
2. During play:
   - Player actions are applied between turns via the reducer
   - Turns are advanced through the turn resolver
   - Events accumulate in the session log
3. Session ends -> removed from memory, ALL state dropped

PERSISTENCE RULES:
- No database
- A session is fully reconstructible from its starting snapshot, its seed
  and the actions applied in order
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
import uuid

from ..engine_core.state import GameState
from ..engine_core.events import GameEvent
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.random_source import RandomSource, seeded_source
from .turn_resolver import TurnResolver, TurnResult

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a simulation session."""
    ACTIVE = "active"
    ENDED = "ended"


@dataclass
class SimulationSession:
    """
    An ephemeral simulation.

    Holds the current canonical snapshot, the random stream seeded at
    creation and every event emitted so far.
    """
    session_id: str
    seed: int
    game_state: GameState
    rng: RandomSource
    created_at: float

    state: SessionState = SessionState.ACTIVE
    events: list[GameEvent] = field(default_factory=list)
    action_log: list[Action] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    @property
    def turn(self) -> int:
        return self.game_state.turn

    def events_for_turn(self, turn: int) -> list[GameEvent]:
        return [event for event in self.events if event.turn == turn]


class SessionManager:
    """
    Manages simulation sessions.

    Responsibilities:
    - Create sessions from snapshots
    - Advance turns and apply actions
    - Clean up ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, resolver: TurnResolver | None = None, reducer: Reducer | None = None):
        self._sessions: dict[str, SimulationSession] = {}
        self.resolver = resolver or TurnResolver()
        self.reducer = reducer or Reducer()

    def create_session(self, game_state: GameState, seed: int | None = None) -> SimulationSession:
        """
        Create a new session.

        Args:
            game_state: Starting snapshot (copied, never mutated)
            seed: Random seed; a fresh one is drawn when omitted

        Returns:
            New active SimulationSession
        """
        if seed is None:
            seed = random.randrange(2**32)

        session = SimulationSession(
            session_id=str(uuid.uuid4()),
            seed=seed,
            game_state=game_state.clone(),
            rng=seeded_source(seed),
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s (seed=%d, turn=%d)", session.session_id, seed, session.turn)
        return session

    def get_session(self, session_id: str) -> SimulationSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def advance(self, session_id: str, turns: int = 1) -> list[TurnResult]:
        """
        Resolve `turns` turns for a session.

        Raises KeyError for an unknown or ended session.
        """
        session = self._require(session_id)
        results = self.resolver.run(session.game_state, session.rng, turns)
        for result in results:
            session.events.extend(result.events)
        if results:
            session.game_state = results[-1].new_state
        return results

    def apply_action(self, session_id: str, action: Action) -> ActionResult:
        """Apply a player action; the snapshot only changes on success."""
        session = self._require(session_id)
        result = self.reducer.apply(session.game_state, action)
        if result.success:
            session.game_state = result.new_state
            session.action_log.append(action)
        else:
            logger.debug("Action %s rejected: %s", action, result.error_code)
        return result

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop its state.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.state = SessionState.ENDED
        session.events.clear()
        session.action_log.clear()
        logger.info("Ended session %s at turn %d", session_id, session.turn)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """End sessions older than max_age. Returns how many were removed."""
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)

    def _require(self, session_id: str) -> SimulationSession:
        session = self._sessions.get(session_id)
        if session is None or not session.is_active():
            raise KeyError(session_id)
        return session
