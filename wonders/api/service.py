"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to controller calls
2. Manages sessions
3. Formats board, highlighted moves and outcome for display

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Hashable, Union

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectCellRequest,
    ActionRequest,
    ApplyMoveRequest,
    # Responses
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    MoveResponse,
    SessionResponse,
    # Shared
    CellInfo,
    DieInfo,
    GameInfo,
    MoveInfo,
    OutcomeInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core.move import Move, MoveResult
from ..engine_core.state import Die, GameState, PlayerColor, occupant_owner
from ..engine_core.topology import Topology
from ..games import available_games
from ..session import Session, SessionManager

Reply = Union[MoveResponse, ErrorResponse]


def key_to_json(key: Hashable) -> list[Any]:
    return list(key) if isinstance(key, tuple) else [key]


def _zone_value(value: Any) -> Any:
    return value.value if isinstance(value, PlayerColor) else value


@dataclass
class APIService:
    """
    Main API service for the browser presentation layer.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest(game_id="colossus"))

        # Click a stone, then a highlighted destination
        service.select_cell(session_id, SelectCellRequest(cell=[9, 4]))
        service.apply_move(session_id, ApplyMoveRequest(move_index=0))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def list_games(self) -> GameListResponse:
        return GameListResponse(
            games=[
                GameInfo(
                    game_id=rules.game_id,
                    title=rules.title,
                    summary=rules.summary,
                    cell_count=len(rules.topology),
                    actions=list(rules.actions),
                )
                for rules in available_games()
            ]
        )

    def create_session(
        self, request: CreateSessionRequest
    ) -> SessionResponse | ErrorResponse:
        """Create a new game session."""
        try:
            session = self.session_manager.create_session(request.game_id)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_GAME)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._build_game_state(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a game session. Returns False if it did not exist."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    def cleanup(self, max_age_seconds: int) -> list[str]:
        return self.session_manager.cleanup_stale_sessions(max_age_seconds)

    # =========================================================================
    # Game loop
    # =========================================================================

    def select_cell(self, session_id: str, request: SelectCellRequest) -> Reply:
        cell = request.cell
        if isinstance(cell, list):
            cell = tuple(cell)
        return self._run(session_id, lambda session: session.select(cell))

    def choose_action(self, session_id: str, request: ActionRequest) -> Reply:
        return self._run(session_id, lambda session: session.choose_action(request.action))

    def apply_move(self, session_id: str, request: ApplyMoveRequest) -> Reply:
        return self._run(session_id, lambda session: session.move(request.move_index))

    def cancel_selection(self, session_id: str) -> Reply:
        return self._run(session_id, lambda session: session.cancel())

    def end_turn(self, session_id: str) -> Reply:
        return self._run(session_id, lambda session: session.end_turn())

    def reset(self, session_id: str) -> Reply:
        return self._run(session_id, lambda session: session.reset())

    def _run(self, session_id: str, operation) -> Reply:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        result: MoveResult = operation(session)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Rejected.",
                error_code=ErrorCode(result.error_code or ErrorCode.ILLEGAL_MOVE.value),
            )
        return MoveResponse(
            session_id=session_id,
            events=result.events,
            game_state=self._build_game_state(session),
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        state = session.game_state
        return SessionResponse(
            session_id=session.session_id,
            game_id=session.game_id,
            title=session.controller.rules.title,
            status=SessionStatus(session.state.value),
            current_player=state.current_player.value,
            turn_number=state.turn_number,
            created_at=session.created_at,
        )

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """Build complete game state response."""
        state = session.game_state
        topology = state.topology
        turn = state.turn
        outcome = None
        if state.outcome is not None:
            outcome = OutcomeInfo(
                winner=state.outcome.winner.value if state.outcome.winner else None,
                reason=state.outcome.reason,
                message=state.outcome.describe(),
            )

        return GameStateResponse(
            session_id=session.session_id,
            game_id=state.game_id,
            status=SessionStatus(session.state.value),
            phase=state.phase.value,
            current_player=state.current_player.value,
            turn_number=state.turn_number,
            cells=[self._build_cell(state, cell) for cell in range(len(topology))],
            legal_moves=[
                self._build_move(topology, i, move)
                for i, move in enumerate(state.legal_moves)
            ],
            selected=(
                key_to_json(topology.key(turn.origin)) if turn.origin is not None else None
            ),
            actions=list(session.controller.rules.actions),
            reserves={color.value: count for color, count in state.reserves.items()},
            hand=[disc.value for disc in turn.hand],
            moves_left=turn.moves_left,
            forced=turn.forced,
            outcome=outcome,
        )

    def _build_cell(self, state: GameState, cell: int) -> CellInfo:
        node = state.topology.nodes[cell]
        occupant = state.board[cell]
        owner = occupant_owner(occupant)
        lit = state.beacons.get(cell)
        return CellInfo(
            index=cell,
            key=key_to_json(node.key),
            position=node.position,
            zones={tag: _zone_value(value) for tag, value in node.zones.items()},
            owner=owner.value if owner else None,
            stack=[disc.value for disc in occupant] if isinstance(occupant, tuple) else [],
            die=(
                DieInfo(die_id=occupant.die_id, value=occupant.value)
                if isinstance(occupant, Die) else None
            ),
            lit_by=lit.value if lit else None,
        )

    def _build_move(self, topology: Topology, index: int, move: Move) -> MoveInfo:
        def cell_key(cell: int | None) -> list[Any] | None:
            return key_to_json(topology.key(cell)) if cell is not None else None

        return MoveInfo(
            index=index,
            kind=move.kind.value,
            origin=cell_key(move.origin),
            destination=cell_key(move.destination),
            push_to=cell_key(move.push_to),
            via=cell_key(move.via),
            captured=[cell_key(cell) for cell in move.captured],
            light_source=cell_key(move.light_source),
            description=move.describe(topology),
        )
