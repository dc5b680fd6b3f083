"""
Pytest fixtures for Wonders tests.
"""

import pytest

from ..engine_core.reducer import TurnController
from ..engine_core.state import GameState, PlayerColor, TurnState
from ..games import get_rules

W = PlayerColor.WHITE
B = PlayerColor.BLACK


def build_state(game_id: str, pieces: dict, to_move: PlayerColor = W) -> GameState:
    """A game's starting state with the board replaced by `pieces` ({key: occupant})."""
    rules = get_rules(game_id)
    state = rules.initial_state()
    state.board.clear(() if game_id == "gardens" else None)
    for key, occupant in pieces.items():
        state.board.place(key, occupant)
    state.turn = TurnState(player=to_move)
    return state


@pytest.fixture
def controller():
    """Factory for a TurnController of any game."""
    def make(game_id: str) -> TurnController:
        return TurnController(get_rules(game_id))
    return make


@pytest.fixture
def make_state():
    """Factory for a custom position (see build_state)."""
    return build_state


@pytest.fixture
def colossus(controller) -> TurnController:
    return controller("colossus")


@pytest.fixture
def colossus_start(colossus) -> GameState:
    """Colossus in its starting position."""
    return colossus.new_game()
