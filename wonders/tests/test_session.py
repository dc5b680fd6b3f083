"""
Tests for session management.

Tests:
- Session creation and lookup
- Moves through a session
- Game over and reset
- Ending and cleaning up sessions
"""

import time

import pytest

from ..engine_core.state import PlayerColor
from ..session import SessionManager, SessionState

W = PlayerColor.WHITE
B = PlayerColor.BLACK


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionLifecycle:
    """Creating, finding and ending sessions."""

    def test_create_session(self, manager):
        """A new session starts in the game's starting position."""
        session = manager.create_session("colossus")

        assert session.session_id
        assert session.game_id == "colossus"
        assert session.is_active()
        assert session.game_state.turn_number == 1
        assert manager.get_session(session.session_id) is session

    def test_unknown_game(self, manager):
        """Unknown game ids are rejected."""
        with pytest.raises(ValueError, match="Unknown game"):
            manager.create_session("hanging-gardens")

    def test_sessions_are_independent(self, manager):
        """Moves in one session leave the other alone."""
        first = manager.create_session("colossus")
        second = manager.create_session("colossus")

        first.select((9, 3))

        assert first.game_state.turn.origin is not None
        assert second.game_state.turn.origin is None

    def test_end_session(self, manager):
        """Ended sessions are forgotten."""
        session = manager.create_session("temple")

        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_list_active_sessions(self, manager):
        """Only games in progress are listed as active."""
        first = manager.create_session("pharos")
        second = manager.create_session("statue")
        second.state = SessionState.GAME_OVER

        assert manager.list_active_sessions() == [first.session_id]
        assert len(manager.list_sessions()) == 2

    def test_cleanup_stale_sessions(self, manager):
        """Idle sessions past the age limit are removed."""
        stale = manager.create_session("gardens")
        fresh = manager.create_session("gardens")
        stale.last_active = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [stale.session_id]
        assert manager.get_session(fresh.session_id) is fresh


class TestSessionMoves:
    """Turn operations through a session."""

    def test_select_and_move(self, manager):
        """Selecting a stone and applying a highlighted move passes the turn."""
        session = manager.create_session("colossus")

        selected = session.select((9, 3))
        assert selected.success
        assert session.game_state.legal_moves

        moved = session.move(0)
        assert moved.success
        assert session.game_state.current_player is B
        assert session.last_events == moved.events

    def test_move_index_out_of_range(self, manager):
        """A move index beyond the highlighted moves is rejected."""
        session = manager.create_session("colossus")
        session.select((9, 3))
        before = session.game_state

        result = session.move(99)

        assert not result.success
        assert result.error_code == "ILLEGAL_MOVE"
        assert session.game_state is before

    def test_rejection_keeps_state(self, manager):
        """A rejected selection leaves the session's state in place."""
        session = manager.create_session("colossus")
        before = session.game_state

        result = session.select((1, 3))

        assert result.error_code == "NOT_YOUR_PIECE"
        assert session.game_state is before

    def test_game_over_and_reset(self, manager, make_state):
        """Reaching an outcome marks the session over; reset reopens it."""
        session = manager.create_session("colossus")
        session.game_state = make_state("colossus", {
            (5, 5): B, (4, 5): W, (6, 5): W, (5, 4): W, (3, 6): W,
            (1, 1): B, (1, 2): B, (1, 3): B,
        })
        session.select((3, 6))
        session.select((5, 6))

        assert session.state == SessionState.GAME_OVER
        assert session.game_state.outcome.winner is W
        assert session.select((3, 6)).error_code == "GAME_OVER"

        result = session.reset()

        assert result.success
        assert session.state == SessionState.ACTIVE
        assert session.game_state.outcome is None
        assert session.game_state.board.count(B) == 12
