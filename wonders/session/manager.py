"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller picks a game → create an ephemeral session (in-memory only)
2. During the game every selection, action and move goes through the
   session's TurnController; the session keeps the latest GameState
3. Game ends → the session stays readable until ended or cleaned up
4. Reset starts the same game over inside the same session

PERSISTENCE RULES:
- No database, no save/load
- Sessions never share state; each owns its own GameState
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable
import logging
import time
import uuid

from ..engine_core.move import MoveResult
from ..engine_core.reducer import TurnController
from ..engine_core.state import GameState
from ..games import get_rules

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Outcome reached, waiting for reset or end
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The turn controller for the session's game
    - The current canonical game state
    - Session metadata
    """
    session_id: str
    game_id: str
    controller: TurnController
    game_state: GameState
    created_at: float
    last_active: float = 0.0

    state: SessionState = SessionState.ACTIVE
    last_events: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if the game is still in progress."""
        return self.state == SessionState.ACTIVE

    def _commit(self, result: MoveResult) -> MoveResult:
        """Adopt the result's state if the operation succeeded."""
        self.last_active = time.time()
        if result.success:
            self.game_state = result.new_state
            self.last_events = list(result.events)
            if self.game_state.outcome is not None:
                self.state = SessionState.GAME_OVER
        return result

    def select(self, cell: int | Hashable) -> MoveResult:
        return self._commit(self.controller.select_cell(self.game_state, cell))

    def choose_action(self, name: str) -> MoveResult:
        return self._commit(self.controller.choose_action(self.game_state, name))

    def move(self, index: int) -> MoveResult:
        """Apply the highlighted move at `index` of the current legal moves."""
        moves = self.game_state.legal_moves
        if not 0 <= index < len(moves):
            return MoveResult.failure(
                f"No highlighted move with index {index}.", "ILLEGAL_MOVE", self.game_state
            )
        return self._commit(self.controller.apply_move(self.game_state, moves[index]))

    def cancel(self) -> MoveResult:
        return self._commit(self.controller.cancel_selection(self.game_state))

    def end_turn(self) -> MoveResult:
        return self._commit(self.controller.end_turn(self.game_state))

    def reset(self) -> MoveResult:
        result = self._commit(self.controller.reset(self.game_state))
        self.state = SessionState.ACTIVE
        return result


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions for a game id
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, game_id: str) -> Session:
        """
        Create a new game session.

        Raises ValueError for an unknown game id.
        """
        controller = TurnController(get_rules(game_id))
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game_id=game_id,
            controller=controller,
            game_state=controller.new_game(),
            created_at=now,
            last_active=now,
        )
        if session.game_state.outcome is not None:
            session.state = SessionState.GAME_OVER
        self._sessions[session.session_id] = session
        logger.info("Created %s session %s", game_id, session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.is_active():
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still in progress."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove sessions idle for longer than max_age_seconds.

        Called periodically to free memory. Returns the removed IDs.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale
