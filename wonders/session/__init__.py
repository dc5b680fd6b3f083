"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when a player starts a game
- Holds the current game state
- Routes every selection and move through the turn controller
- Destroyed when ended or when idle for too long

Sessions are EPHEMERAL: no persistence of any kind.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
