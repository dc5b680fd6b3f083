"""
FastAPI Application - REST API for a browser presentation layer.

Endpoints:
    GET    /api/v1/games                        List playable games
    POST   /api/v1/sessions                     Create game session
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session status
    DELETE /api/v1/sessions/{id}                End session
    GET    /api/v1/sessions/{id}/state          Get board and highlighted moves
    POST   /api/v1/sessions/{id}/select         Click a cell
    POST   /api/v1/sessions/{id}/action         Choose a named action
    POST   /api/v1/sessions/{id}/move           Apply a highlighted move
    POST   /api/v1/sessions/{id}/cancel         Cancel the current selection
    POST   /api/v1/sessions/{id}/end-turn       End a chain that may stop early
    POST   /api/v1/sessions/{id}/reset          Start the game over

Run with:
    uvicorn wonders.api.app:create_app --factory

All responses are JSON with explicit Pydantic schemas. Rejected input
returns an ErrorResponse and leaves the game unchanged.
"""

from typing import Optional, Union
import logging
import os

# Environment configuration
WONDERS_ENV = os.getenv("WONDERS_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
WONDERS_SESSION_TTL = int(os.getenv("WONDERS_SESSION_TTL", "3600"))

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        SelectCellRequest,
        ActionRequest,
        ApplyMoveRequest,
        # Response models
        EndSessionResponse,
        ErrorResponse,
        GameListResponse,
        GameStateResponse,
        HealthResponse,
        MoveResponse,
        SessionListResponse,
        SessionResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Seven Wonders Engine API",
        description="""
Rule engine for the seven Wonders board games: Colossus, Pyramid, Temple,
Mausoleum, Pharos, Statue and Gardens.

## Turn Flow

1. `POST /select` with one of your pieces; the response lists `legal_moves`
2. `POST /move` with the index of a highlighted move
3. Chained moves (Temple leaps, Statue strides, Gardens drops) keep the
   phase at `select_destination`; `POST /end-turn` stops a chain that may stop
4. Statue actions (`place`, `diminish`) go through `POST /action`

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_GAME` | Game id not found |
| `SESSION_NOT_FOUND` | Session does not exist |
| `ILLEGAL_MOVE` | Cell or move not allowed right now |
| `NO_LEGAL_MOVES` | Selected piece cannot move |
| `GAME_OVER` | The game has already ended |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_codes = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.GAME_OVER: 409,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def reply(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Games
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List playable games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Unknown game id"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session in its starting position.

        Idle sessions older than WONDERS_SESSION_TTL seconds are dropped first.
        """
        stale = api_service.cleanup(WONDERS_SESSION_TTL)
        if stale:
            logger.info("Dropped %d stale session(s)", len(stale))
        return reply(api_service.create_session(body))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return reply(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Optional[str] = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Board, phase, highlighted moves and outcome."""
        return reply(api_service.get_game_state(session_id))

    move_responses = {
        400: {"model": ErrorResponse, "description": "Input rejected"},
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Game already over"},
    }

    @app.post(
        "/api/v1/sessions/{session_id}/select",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Game Loop"],
        summary="Click a cell",
    )
    async def select_cell(
        session_id: str, body: SelectCellRequest
    ) -> Union[MoveResponse, JSONResponse]:
        """
        Select a piece, a highlighted destination or a light source.

        Clicking the selected piece again ends a chain, or for a Gardens
        garden changes how many discs are picked up.
        """
        return reply(api_service.select_cell(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/action",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Game Loop"],
        summary="Choose a named action",
    )
    async def choose_action(
        session_id: str, body: ActionRequest
    ) -> Union[MoveResponse, JSONResponse]:
        return reply(api_service.choose_action(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Game Loop"],
        summary="Apply a highlighted move",
    )
    async def apply_move(
        session_id: str, body: ApplyMoveRequest
    ) -> Union[MoveResponse, JSONResponse]:
        return reply(api_service.apply_move(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/cancel",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Game Loop"],
        summary="Cancel the current selection",
    )
    async def cancel_selection(session_id: str) -> Union[MoveResponse, JSONResponse]:
        return reply(api_service.cancel_selection(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/end-turn",
        response_model=MoveResponse,
        responses=move_responses,
        tags=["Game Loop"],
        summary="End the current turn",
    )
    async def end_turn(session_id: str) -> Union[MoveResponse, JSONResponse]:
        return reply(api_service.end_turn(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Start the game over",
    )
    async def reset(session_id: str) -> Union[MoveResponse, JSONResponse]:
        return reply(api_service.reset(session_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="wonders-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Seven Wonders Engine API",
            "version": __version__,
            "environment": WONDERS_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
