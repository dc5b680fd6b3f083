"""
API Module - Browser presentation layer interface.

Exposes the turn controller via REST API. The presentation layer:
1. Lists games and creates a session
2. Sends cell clicks, action names and highlighted-move indices
3. Receives the new board, the moves to highlight and any outcome

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectCellRequest,
    ActionRequest,
    ApplyMoveRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    MoveResponse,
    GameListResponse,
    ErrorResponse,
    # Shared
    CellInfo,
    MoveInfo,
    OutcomeInfo,
    GameInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectCellRequest",
    "ActionRequest",
    "ApplyMoveRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "MoveResponse",
    "GameListResponse",
    "ErrorResponse",
    # Shared
    "CellInfo",
    "MoveInfo",
    "OutcomeInfo",
    "GameInfo",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
