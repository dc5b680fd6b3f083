"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a browser presentation layer and
the engine. The presentation layer sends a cell, an action name or the
index of a highlighted move; it receives the full board and the moves to
highlight next.

Cells are addressed by their topology key as a JSON list, e.g. [5, 3]
for a grid cell or ["garden", 1] for a Gardens garden. A bare integer is
accepted as a node index.

Error Codes:
- INVALID_GAME: Game id not found
- SESSION_NOT_FOUND: Session does not exist or has expired
- GAME_OVER, UNKNOWN_CELL, NOT_YOUR_PIECE, NO_LEGAL_MOVES, ILLEGAL_MOVE,
  INVALID_PHASE, UNKNOWN_ACTION, CANNOT_CANCEL, CANNOT_END_TURN:
  the controller rejected the input; the game state is unchanged
"""

from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field


CellKey = list[Union[int, str]]


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_GAME = "INVALID_GAME"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_CELL = "UNKNOWN_CELL"
    NOT_YOUR_PIECE = "NOT_YOUR_PIECE"
    NO_LEGAL_MOVES = "NO_LEGAL_MOVES"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    INVALID_PHASE = "INVALID_PHASE"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    CANNOT_CANCEL = "CANNOT_CANCEL"
    CANNOT_END_TURN = "CANNOT_END_TURN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class DieInfo(BaseModel):
    """A Statue die."""
    die_id: int
    value: int = Field(ge=1, le=6)


class CellInfo(BaseModel):
    """One board cell and what stands on it."""
    index: int
    key: CellKey
    position: tuple[float, float]
    zones: dict[str, Union[bool, int, str]] = Field(default_factory=dict)
    owner: Optional[str] = Field(None, description="Controlling color, if any")
    stack: list[str] = Field(
        default_factory=list, description="Gardens discs, bottom to top"
    )
    die: Optional[DieInfo] = None
    lit_by: Optional[str] = Field(None, description="Pharos beacon owner")


class MoveInfo(BaseModel):
    """A highlighted move the player may choose."""
    index: int
    kind: str
    origin: Optional[CellKey] = None
    destination: CellKey
    push_to: Optional[CellKey] = None
    via: Optional[CellKey] = None
    captured: list[CellKey] = Field(default_factory=list)
    light_source: Optional[CellKey] = None
    description: str


class OutcomeInfo(BaseModel):
    """Final result of a game."""
    winner: Optional[str] = Field(None, description="None for a draw")
    reason: str
    message: str


class GameInfo(BaseModel):
    """A playable game."""
    game_id: str
    title: str
    summary: str
    cell_count: int
    actions: list[str] = Field(default_factory=list)


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a new game session."""
    game_id: str = Field(..., description="One of the ids from GET /api/v1/games")


class SelectCellRequest(BaseModel):
    """Click on a cell."""
    cell: Union[int, CellKey] = Field(..., description="Topology key or node index")


class ActionRequest(BaseModel):
    """Choose a named action (Statue: place, diminish)."""
    action: str


class ApplyMoveRequest(BaseModel):
    """Apply one of the currently highlighted moves."""
    move_index: int = Field(..., ge=0)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    game_id: str
    status: SessionStatus
    phase: str
    current_player: str
    turn_number: int
    cells: list[CellInfo] = Field(default_factory=list)
    legal_moves: list[MoveInfo] = Field(default_factory=list)
    selected: Optional[CellKey] = None
    actions: list[str] = Field(default_factory=list)
    reserves: dict[str, int] = Field(default_factory=dict)
    hand: list[str] = Field(default_factory=list)
    moves_left: int = 0
    forced: bool = False
    outcome: Optional[OutcomeInfo] = None
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Response to a selection, action, move, cancel, end turn or reset."""
    session_id: str
    events: list[str] = Field(default_factory=list)
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    game_id: str
    title: str
    status: SessionStatus
    current_player: str
    turn_number: int
    created_at: float = 0.0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class GameListResponse(BaseModel):
    """All playable games."""
    games: list[GameInfo]
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
