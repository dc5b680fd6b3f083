"""
Tests for API layer.

Tests:
- API service methods
- Board and move formatting
- Session lifecycle via HTTP
- Error handling and status codes
"""

import pytest

from ..api.schemas import (
    ActionRequest,
    ApplyMoveRequest,
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    SelectCellRequest,
    SessionStatus,
)
from ..api.service import APIService, key_to_json


@pytest.fixture
def service():
    """Create a fresh API service."""
    return APIService()


@pytest.fixture
def session_id(service):
    """A Colossus session in its starting position."""
    return service.create_session(CreateSessionRequest(game_id="colossus")).session_id


class TestAPIService:
    """Tests for APIService."""

    def test_list_games(self, service):
        """All seven games are listed."""
        response = service.list_games()

        ids = [game.game_id for game in response.games]
        assert ids == ["colossus", "pyramid", "temple", "mausoleum", "pharos", "statue", "gardens"]
        statue = next(game for game in response.games if game.game_id == "statue")
        assert statue.actions == ["place", "diminish"]
        assert statue.cell_count == 105

    def test_create_session(self, service):
        """Can create a session for any game."""
        response = service.create_session(CreateSessionRequest(game_id="temple"))

        assert response.session_id
        assert response.title == "Temple"
        assert response.status == SessionStatus.ACTIVE
        assert response.current_player == "white"
        assert response.turn_number == 1

    def test_create_unknown_game(self, service):
        """Unknown game ids produce INVALID_GAME."""
        response = service.create_session(CreateSessionRequest(game_id="lighthouse"))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_GAME

    def test_get_nonexistent_session(self, service):
        """Getting nonexistent session returns error."""
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND
        assert response.error == "Session nonexistent-id not found"

    def test_game_state(self, service, session_id):
        """The state lists every cell with its occupant and zones."""
        state = service.get_game_state(session_id)

        assert state.phase == "select_origin"
        assert state.current_player == "white"
        assert state.legal_moves == []
        cells = {tuple(cell.key): cell for cell in state.cells}
        assert cells[(9, 3)].owner == "white"
        assert cells[(1, 1)].owner == "black"
        assert cells[(5, 5)].owner is None
        assert any("arrow" in cell.zones for cell in state.cells)

    def test_select_and_move(self, service, session_id):
        """Selecting and moving returns the new state and events."""
        selected = service.select_cell(session_id, SelectCellRequest(cell=[9, 3]))

        assert selected.game_state.phase == "select_destination"
        assert selected.game_state.selected == [9, 3]
        assert selected.game_state.legal_moves
        first = selected.game_state.legal_moves[0]
        assert first.index == 0
        assert first.origin == [9, 3]

        moved = service.apply_move(session_id, ApplyMoveRequest(move_index=0))

        assert moved.game_state.current_player == "black"
        assert moved.game_state.turn_number == 2

    def test_select_by_index(self, service, session_id):
        """A node index is accepted in place of a key."""
        index = service.session_manager.get_session(session_id).game_state.topology.index((9, 3))
        response = service.select_cell(session_id, SelectCellRequest(cell=index))
        assert response.game_state.selected == [9, 3]

    def test_rejected_selection(self, service, session_id):
        """Controller error codes pass through unchanged."""
        response = service.select_cell(session_id, SelectCellRequest(cell=[1, 1]))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.NOT_YOUR_PIECE

    def test_unknown_action(self, service, session_id):
        """Colossus has no named actions."""
        response = service.choose_action(session_id, ActionRequest(action="place"))
        assert response.error_code == ErrorCode.UNKNOWN_ACTION

    def test_statue_place(self, service):
        """Statue place flows through choose_action and apply_move."""
        session_id = service.create_session(CreateSessionRequest(game_id="statue")).session_id
        chosen = service.choose_action(session_id, ActionRequest(action="place"))

        assert len(chosen.game_state.legal_moves) == 105
        assert chosen.game_state.reserves == {"white": 8, "black": 8}

        moved = service.apply_move(session_id, ApplyMoveRequest(move_index=0))

        placed = next(cell for cell in moved.game_state.cells if cell.die is not None)
        assert placed.die.value == 1
        assert placed.owner == "white"
        assert moved.game_state.reserves["white"] == 7

    def test_gardens_stacks(self, service):
        """Garden stacks are listed bottom to top."""
        session_id = service.create_session(CreateSessionRequest(game_id="gardens")).session_id
        state = service.get_game_state(session_id)

        home = next(cell for cell in state.cells if cell.key == ["garden", 1])
        assert home.stack == ["white"] * 10
        assert home.zones["home"] == "white"

    def test_cancel_and_reset(self, service, session_id):
        """Cancelling drops the selection; reset restarts the game."""
        service.select_cell(session_id, SelectCellRequest(cell=[9, 3]))
        cancelled = service.cancel_selection(session_id)
        assert cancelled.game_state.selected is None

        service.select_cell(session_id, SelectCellRequest(cell=[9, 3]))
        service.apply_move(session_id, ApplyMoveRequest(move_index=0))
        reset = service.reset(session_id)

        assert reset.game_state.turn_number == 1
        assert reset.events == ["Game reset."]

    def test_end_turn_without_move(self, service, session_id):
        """Ending a turn before moving is rejected."""
        response = service.end_turn(session_id)
        assert response.error_code == ErrorCode.CANNOT_END_TURN

    def test_end_session(self, service, session_id):
        """Can end a session."""
        assert service.end_session(session_id)
        assert service.list_sessions() == []
        assert not service.end_session(session_id)


class TestKeyFormatting:
    """Topology keys in JSON."""

    def test_tuple_key(self):
        assert key_to_json((0, 6, 3)) == [0, 6, 3]

    def test_mixed_key(self):
        assert key_to_json(("garden", 2)) == ["garden", 2]


class TestHTTP:
    """FastAPI endpoints."""

    @pytest.fixture
    def client(self):
        from fastapi.testclient import TestClient

        from ..api.app import create_app

        return TestClient(create_app())

    def test_health(self, client):
        """Health endpoint reports the service."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "wonders-engine"

    def test_list_games(self, client):
        response = client.get("/api/v1/games")

        assert response.status_code == 200
        assert len(response.json()["games"]) == 7

    def test_play_a_move(self, client):
        """Create a session, select a stone and apply a move."""
        created = client.post("/api/v1/sessions", json={"game_id": "colossus"})
        assert created.status_code == 200
        session_id = created.json()["session_id"]

        selected = client.post(f"/api/v1/sessions/{session_id}/select", json={"cell": [9, 3]})
        assert selected.status_code == 200
        assert selected.json()["game_state"]["phase"] == "select_destination"

        moved = client.post(f"/api/v1/sessions/{session_id}/move", json={"move_index": 0})
        assert moved.status_code == 200
        assert moved.json()["game_state"]["current_player"] == "black"

        state = client.get(f"/api/v1/sessions/{session_id}/state")
        assert state.json()["turn_number"] == 2

        listed = client.get("/api/v1/sessions")
        assert listed.json()["sessions"] == [session_id]

        ended = client.delete(f"/api/v1/sessions/{session_id}")
        assert ended.json() == {"success": True, "session_id": session_id}

    def test_missing_session(self, client):
        """Unknown sessions are 404."""
        response = client.get("/api/v1/sessions/missing/state")

        assert response.status_code == 404
        assert response.json()["error_code"] == "SESSION_NOT_FOUND"

    def test_invalid_game(self, client):
        """Unknown game ids are 400."""
        response = client.post("/api/v1/sessions", json={"game_id": "lighthouse"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_GAME"

    def test_rejected_move(self, client):
        """Controller rejections are 400 with their error code."""
        session_id = client.post("/api/v1/sessions", json={"game_id": "colossus"}).json()["session_id"]
        response = client.post(f"/api/v1/sessions/{session_id}/select", json={"cell": [0, 0]})

        assert response.status_code == 400
        assert response.json()["error_code"] == "UNKNOWN_CELL"

    def test_negative_move_index(self, client):
        """Request validation happens before the service is called."""
        session_id = client.post("/api/v1/sessions", json={"game_id": "colossus"}).json()["session_id"]
        response = client.post(f"/api/v1/sessions/{session_id}/move", json={"move_index": -1})
        assert response.status_code == 422
