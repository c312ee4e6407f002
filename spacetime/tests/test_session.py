"""
Tests for session management.
"""

import time

import pytest

from ..engine_core.state import InfraDomain
from ..engine_core.action import Action, ActionErrorCode
from ..session import SessionManager, SessionState


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_session(self, manager, starter_state):
        """A session copies the snapshot and starts active."""
        session = manager.create_session(starter_state, seed=5)

        assert session.is_active()
        assert session.seed == 5
        assert session.turn == 1
        assert session.game_state == starter_state
        assert session.game_state is not starter_state
        assert manager.get_session(session.session_id) is session

    def test_random_seed_when_omitted(self, manager, starter_state):
        """A seed is always recorded."""
        session = manager.create_session(starter_state)
        assert isinstance(session.seed, int)

    def test_advance(self, manager, starter_state):
        """Advancing moves the snapshot forward and logs events."""
        session = manager.create_session(starter_state, seed=5)
        results = manager.advance(session.session_id, 3)

        assert len(results) == 3
        assert session.turn == 4
        assert len(session.events) == sum(len(r.events) for r in results)
        assert session.events_for_turn(1) == results[0].events
        assert starter_state.turn == 1

    def test_same_seed_same_history(self, manager, starter_state):
        """Two sessions with one seed evolve identically."""
        first = manager.create_session(starter_state, seed=99)
        second = manager.create_session(starter_state, seed=99)
        manager.advance(first.session_id, 4)
        manager.advance(second.session_id, 4)
        assert first.game_state == second.game_state

    def test_apply_action_success(self, manager, starter_state):
        """A successful action updates the snapshot and the action log."""
        session = manager.create_session(starter_state, seed=1)
        action = Action.invest_planet("col_terra_nova", InfraDomain.LOW_INDUSTRY)

        result = manager.apply_action(session.session_id, action)

        assert result.success
        assert session.game_state.current_bp == 17
        assert session.action_log == [action]

    def test_apply_action_failure_keeps_state(self, manager, starter_state):
        """A failed action leaves the snapshot alone."""
        session = manager.create_session(starter_state, seed=1)
        before = session.game_state

        result = manager.apply_action(
            session.session_id, Action.invest_planet("col_missing", InfraDomain.MINING)
        )

        assert result.error_code == ActionErrorCode.COLONY_NOT_FOUND
        assert session.game_state is before
        assert session.action_log == []

    def test_end_session(self, manager, starter_state):
        """Ending removes the session; further use raises KeyError."""
        session = manager.create_session(starter_state, seed=1)

        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ENDED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)
        with pytest.raises(KeyError):
            manager.advance(session.session_id)

    def test_unknown_session(self, manager):
        """Unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            manager.advance("missing")
        with pytest.raises(KeyError):
            manager.apply_action("missing", Action.set_science_focus(None))

    def test_list_and_cleanup(self, manager, starter_state):
        """Stale sessions are ended by age."""
        old = manager.create_session(starter_state, seed=1)
        fresh = manager.create_session(starter_state, seed=2)
        old.created_at = time.time() - 7200

        assert set(manager.list_active_sessions()) == {old.session_id, fresh.session_id}
        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert manager.list_active_sessions() == [fresh.session_id]
