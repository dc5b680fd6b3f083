"""
Tests for Temple.

Tests:
- Forward and sideways walks
- Leap chains with captures
- Artemis victory
"""

import pytest

from ..engine_core.move import MoveKind
from ..engine_core.state import GamePhase, PlayerColor

W = PlayerColor.WHITE
B = PlayerColor.BLACK


@pytest.fixture
def game(controller):
    return controller("temple")


def destinations(state, kind=None):
    topology = state.topology
    return {
        topology.key(m.destination) for m in state.legal_moves
        if kind is None or m.kind is kind
    }


class TestWalk:
    """Single steps."""

    def test_walks_never_go_backwards(self, game, make_state):
        """White walks towards row 0 or sideways only."""
        state = make_state("temple", {(5, 2): W, (0, 0): B, (1, 0): B})
        state = game.select_cell(state, (5, 2)).new_state

        rows = {key[0] for key in destinations(state, MoveKind.WALK)}
        assert rows <= {4, 5}
        assert (4, 2) in destinations(state, MoveKind.WALK)
        assert (5, 1) in destinations(state, MoveKind.WALK)

    def test_black_walks_down(self, game, make_state):
        """Black walks towards row 9."""
        state = make_state("temple", {(4, 2): B, (9, 0): W, (8, 1): W}, to_move=B)
        state = game.select_cell(state, (4, 2)).new_state

        rows = {key[0] for key in destinations(state, MoveKind.WALK)}
        assert rows <= {4, 5}
        assert (5, 2) in destinations(state, MoveKind.WALK)


class TestLeaps:
    """Leaps and chains."""

    def test_leap_chain_captures_twice(self, game, make_state):
        """A stone keeps leaping and captures every opponent it passes."""
        state = make_state("temple", {
            (6, 2): W,
            (5, 2): B, (4, 3): B, (0, 0): B, (1, 0): B,
        })
        state = game.select_cell(state, (6, 2)).new_state
        assert (4, 2) in destinations(state, MoveKind.LEAP)

        first = game.select_cell(state, (4, 2))
        assert first.success
        mid = first.new_state
        assert mid.phase == GamePhase.SELECT_DESTINATION
        assert mid.current_player is W
        assert mid.board.at((5, 2)) is None
        assert destinations(mid) == {(4, 4)}

        second = game.select_cell(mid, (4, 4))
        assert second.success
        final = second.new_state
        assert final.board.at((4, 4)) is W
        assert final.board.at((4, 3)) is None
        assert final.board.count(B) == 2
        assert final.current_player is B
        assert len(final.move_history) == 2

    def test_chain_can_stop_early(self, game, make_state):
        """After a leap the player may end the turn instead of leaping on."""
        state = make_state("temple", {
            (6, 2): W,
            (5, 2): B, (4, 3): B, (0, 0): B, (1, 0): B,
        })
        state = game.select_cell(state, (6, 2)).new_state
        mid = game.select_cell(state, (4, 2)).new_state

        assert game.cancel_selection(mid).error_code == "CANNOT_CANCEL"
        result = game.end_turn(mid)

        assert result.success
        assert result.new_state.current_player is B
        assert result.new_state.board.at((4, 3)) is B

    def test_clicking_piece_ends_chain(self, game, make_state):
        """Clicking the leaping stone again ends the turn."""
        state = make_state("temple", {
            (6, 2): W,
            (5, 2): B, (4, 3): B, (0, 0): B, (1, 0): B,
        })
        state = game.select_cell(state, (6, 2)).new_state
        mid = game.select_cell(state, (4, 2)).new_state

        result = game.select_cell(mid, (4, 2))
        assert result.new_state.current_player is B

    def test_no_leap_back_to_visited_cell(self, game, make_state):
        """A chain never lands where the stone has already been."""
        state = make_state("temple", {
            (6, 2): W, (5, 2): W, (0, 0): B, (1, 0): B,
        })
        state = game.select_cell(state, (6, 2)).new_state
        mid = game.select_cell(state, (4, 2)).new_state

        assert mid.board.at((5, 2)) is W
        assert (6, 2) not in destinations(mid)

    def test_leaping_friend_captures_nothing(self, game, make_state):
        """Own stones are leapt without capture."""
        state = make_state("temple", {
            (6, 2): W, (5, 2): W, (0, 0): B, (1, 0): B,
        })
        state = game.select_cell(state, (6, 2)).new_state
        leap = next(m for m in state.legal_moves
                    if m.kind is MoveKind.LEAP and state.topology.key(m.destination) == (4, 2))
        assert leap.captured == ()


class TestArtemis:
    """Reaching the opponent's Artemis field."""

    def test_white_reaches_top(self, game, make_state):
        """White wins on Black's home field."""
        state = make_state("temple", {(1, 0): W, (5, 0): B, (6, 0): B})
        state = game.select_cell(state, (1, 0)).new_state
        result = game.select_cell(state, (0, 0))

        assert result.new_state.outcome.winner is W
        assert result.new_state.outcome.reason == "White reached the Artemis field."

    def test_own_artemis_is_not_a_win(self, game, make_state):
        """Standing on one's own home field wins nothing."""
        state = make_state("temple", {(8, 1): W, (5, 0): B, (2, 0): B})
        rules = game.rules
        state.board.place((9, 0), W)
        assert rules.evaluate(state) is None
