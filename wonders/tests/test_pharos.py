"""
Tests for Pharos.

Tests:
- Light sources and their capacity
- Choosing between light sources
- Light exhaustion
- Lighting beacons
"""

import pytest

from ..engine_core.state import GamePhase, PlayerColor, TurnState

W = PlayerColor.WHITE
B = PlayerColor.BLACK


@pytest.fixture
def game(controller):
    return controller("pharos")


def source_keys(state):
    topology = state.topology
    return {topology.key(m.light_source) for m in state.legal_moves}


class TestLightSources:
    """Who can pay for a step."""

    def test_lone_stone_uses_own_light(self, game, make_state):
        """A stone with no friend in sight lights itself."""
        state = make_state("pharos", {(2, 2): W, (6, 6): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state

        assert source_keys(state) == {(2, 2)}
        assert len(state.legal_moves) == 4

    def test_friend_in_line_of_sight(self, game, make_state):
        """A friendly stone on the same line adds a source."""
        state = make_state("pharos", {(2, 2): W, (2, 5): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        assert source_keys(state) == {(2, 2), (2, 5)}

    def test_opponent_blocks_sight(self, game, make_state):
        """Opponent stones block the line."""
        state = make_state("pharos", {(2, 2): W, (2, 4): B, (2, 6): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        assert source_keys(state) == {(2, 2)}

    def test_lit_beacon_in_sight(self, game, make_state):
        """An empty beacon lit by the mover's colour is a source."""
        state = make_state("pharos", {(4, 1): W, (7, 0): B})
        state.beacons[state.topology.index((4, 4))] = W
        state = game.select_cell(state, (4, 1)).new_state
        assert source_keys(state) == {(4, 1), (4, 4)}

    def test_opponent_beacon_gives_no_light(self, game, make_state):
        """Beacons lit by the opponent are not sources."""
        state = make_state("pharos", {(4, 1): W, (7, 0): B})
        state.beacons[state.topology.index((4, 4))] = B
        state = game.select_cell(state, (4, 1)).new_state
        assert source_keys(state) == {(4, 1)}


class TestStepping:
    """Steps, captures and chains."""

    def test_choose_light_source(self, game, make_state):
        """An ambiguous target asks which source to use."""
        state = make_state("pharos", {(2, 2): W, (2, 5): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state

        asked = game.select_cell(state, (1, 2))
        assert asked.success
        assert asked.new_state.phase == GamePhase.SELECT_ACTION
        assert asked.new_state.turn.pending_light == state.topology.index((1, 2))

        stepped = game.select_cell(asked.new_state, (2, 5))
        assert stepped.success
        after = stepped.new_state
        assert after.board.at((1, 2)) is W
        assert after.turn.light_usage == {state.topology.index((2, 5)): 1}
        assert after.phase == GamePhase.SELECT_DESTINATION
        assert source_keys(after) == {(1, 2)}

    def test_cancel_source_choice(self, game, make_state):
        """Cancelling a source choice returns to the highlighted targets."""
        state = make_state("pharos", {(2, 2): W, (2, 5): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        asked = game.select_cell(state, (1, 2)).new_state

        result = game.cancel_selection(asked)
        assert result.new_state.phase == GamePhase.SELECT_DESTINATION
        assert result.new_state.turn.pending_light is None
        assert len(result.new_state.legal_moves) == len(state.legal_moves)

    def test_chain_ends_when_light_runs_out(self, game, make_state):
        """A lone stone steps once, then its turn is over."""
        state = make_state("pharos", {(2, 2): W, (6, 6): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        result = game.select_cell(state, (2, 3))

        assert result.new_state.current_player is B
        assert result.new_state.board.at((2, 3)) is W

    def test_capture(self, game, make_state):
        """Stepping onto an opponent captures it."""
        state = make_state("pharos", {(2, 2): W, (2, 3): B, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        result = game.select_cell(state, (2, 3))

        assert result.new_state.board.at((2, 3)) is W
        assert result.new_state.board.count(B) == 1
        assert "White captured a black stone!" in result.events

    def test_light_exhaustion(self, game, make_state):
        """A stone that spent its own light this turn and has no other source cannot move."""
        state = make_state("pharos", {(2, 2): W, (6, 6): W, (7, 0): B})
        state.turn = TurnState(player=W, mover_light_used=1)

        result = game.select_cell(state, (2, 2))

        assert not result.success
        assert result.error_code == "NO_LEGAL_MOVES"

    def test_light_resets_each_turn(self, game, make_state):
        """Spent light comes back on the player's next turn."""
        state = make_state("pharos", {(2, 2): W, (6, 6): W, (7, 0): B})
        state = game.select_cell(state, (2, 2)).new_state
        state = game.select_cell(state, (2, 3)).new_state
        state = game.select_cell(state, (7, 0)).new_state
        state = game.select_cell(state, (7, 1)).new_state

        assert state.current_player is W
        result = game.select_cell(state, (2, 3))
        assert result.success


class TestBeacons:
    """Lighting beacons."""

    def test_step_lights_beacon(self, game, make_state):
        """Stepping onto a beacon lights it for the mover."""
        state = make_state("pharos", {(3, 4): W, (7, 0): B})
        state = game.select_cell(state, (3, 4)).new_state
        result = game.select_cell(state, (4, 4))

        beacon = state.topology.index((4, 4))
        assert result.new_state.beacons[beacon] is W
        assert "Beacon at (4, 4) is now lit by white!" in result.events

    def test_new_beacon_pays_one_more_step(self, game, make_state):
        """A stone that lights a beacon may step once more on its light, then stops."""
        state = make_state("pharos", {(3, 4): W, (7, 0): B})
        state = game.select_cell(state, (3, 4)).new_state
        lit = game.select_cell(state, (4, 4)).new_state

        assert lit.phase == GamePhase.SELECT_DESTINATION
        assert source_keys(lit) == {(4, 4)}

        result = game.select_cell(lit, (4, 5))
        assert result.new_state.board.at((4, 5)) is W
        assert result.new_state.current_player is B

    def test_beacon_capacity(self, game, make_state):
        """A stone on its own lit beacon gives two units; an empty lit beacon one."""
        rules = game.rules
        state = make_state("pharos", {(4, 4): W, (0, 0): W, (8, 8): B})
        index = state.topology.index
        state.beacons[index((4, 4))] = W
        state.beacons[index((8, 0))] = W

        assert rules.capacity(state, index((4, 4)), W) == 2
        assert rules.capacity(state, index((0, 0)), W) == 1
        assert rules.capacity(state, index((8, 0)), W) == 1
        assert rules.capacity(state, index((0, 8)), W) == 0
        assert rules.capacity(state, index((8, 8)), W) == 0

    def test_beacon_light_after_leaving(self, game, make_state):
        """The stone spends its own light first; the beacon left behind pays the next step."""
        state = make_state("pharos", {(4, 4): W, (7, 0): B})
        state.beacons[state.topology.index((4, 4))] = W
        state = game.select_cell(state, (4, 4)).new_state
        after_one = game.select_cell(state, (4, 5)).new_state

        assert after_one.phase == GamePhase.SELECT_DESTINATION
        assert after_one.turn.mover_light_used == 1
        assert after_one.turn.light_usage == {}
        assert source_keys(after_one) == {(4, 4)}

    def test_beacon_pays_only_once(self, game, make_state):
        """Own light plus one beacon unit: a third step is refused."""
        state = make_state("pharos", {(4, 4): W, (7, 0): B})
        beacon = state.topology.index((4, 4))
        state.beacons[beacon] = W
        state = game.select_cell(state, (4, 4)).new_state
        state = game.select_cell(state, (4, 5)).new_state

        result = game.select_cell(state, (4, 4))

        final = result.new_state
        assert final.board.at((4, 4)) is W
        assert final.current_player is B
        assert final.phase == GamePhase.SELECT_ORIGIN
        assert len(final.move_history) == 2

    def test_beacon_under_mover_shares_budget(self, game, make_state):
        """Returning to a beacon already drawn from gives no further light."""
        state = make_state("pharos", {(4, 4): W, (7, 0): B})
        beacon = state.topology.index((4, 4))
        state.beacons[beacon] = W
        state.turn.mover_light_used = 1
        state.turn.light_usage = {beacon: 1}

        assert not game.rules.has_own_light(state, beacon)
        assert game.rules.light_sources(state, beacon) == []
