"""
Gardens rules.

- Pick up a stack you top: a field stack moves whole; from a garden take
  the top 1..5 discs (click the garden again to change the count)
- Drop the discs one at a time, top disc first, each onto a neighbour of
  the previous cell, never onto a cell already touched this turn
- Field stacks never exceed five discs and never receive a disc while
  topped by the mover's colour; gardens only accept discs while empty or
  topped by the mover's colour
- Only drops that still leave room to place the rest of the hand are
  offered; the turn ends when the hand is empty
- At the end of each turn a staircase lifts every disc of its colour to
  the garden above when that colour outnumbers the others in its garden
- Seven own discs in your High Garden win, checked once the hand is empty
"""

from __future__ import annotations

from ...engine_core.move import Move
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import GameState, Outcome, PlayerColor
from ...engine_core.topology import Topology
from ...engine_core.win import zone_count
from . import board as layout

WIN_DISCS = 7


class GardensRules(RuleSet):
    game_id = "gardens"
    title = "Gardens"
    summary = "Sow disc stacks across the fields into your High Garden."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    def is_garden(self, cell: int) -> bool:
        return self.topology.zone(cell, "garden") is not None

    def garden(self, index: int) -> int:
        return self.topology.index(layout.garden_key(index))

    # ------------------------------------------------------------------
    # Picking up
    # ------------------------------------------------------------------

    def max_pick(self, state: GameState, cell: int) -> int:
        return min(len(state.board[cell]), layout.MAX_PICK)

    def on_origin_selected(self, state: GameState, cell: int) -> None:
        stack = state.board[cell]
        count = 1 if self.is_garden(cell) else len(stack)
        self._pick(state, cell, count)

    def _pick(self, state: GameState, cell: int, count: int) -> None:
        state.turn.pick_count = count
        state.turn.hand = tuple(state.board[cell][-count:])
        state.turn.visited = [cell]

    def reselect_origin(self, state: GameState) -> bool:
        """Cycle the number of discs taken from a garden to the next workable count."""
        cell = state.turn.origin
        if not self.is_garden(cell):
            return False
        limit = self.max_pick(state, cell)
        count = state.turn.pick_count
        for _ in range(limit):
            count = count % limit + 1
            self._pick(state, cell, count)
            if self.moves_from(state, cell):
                return True
        return True

    # ------------------------------------------------------------------
    # Dropping
    # ------------------------------------------------------------------

    def accepts(self, state: GameState, cell: int, player: PlayerColor) -> bool:
        """Whether `player` may drop a disc onto `cell`, ignoring this turn's path."""
        stack = state.board[cell]
        top = stack[-1] if stack else None
        if self.is_garden(cell):
            return top is None or top is player
        return len(stack) < layout.MAX_FIELD_HEIGHT and top is not player

    def can_distribute(self, state: GameState, cell: int, remaining: int,
                       visited: set[int]) -> bool:
        """Depth-first search for a path that places `remaining` more discs."""
        if remaining == 0:
            return True
        player = state.current_player
        for target in self.topology.neighbors(cell):
            if target in visited or not self.accepts(state, target, player):
                continue
            visited.add(target)
            found = self.can_distribute(state, target, remaining - 1, visited)
            visited.discard(target)
            if found:
                return True
        return False

    def drops_from(self, state: GameState, cell: int) -> list[Move]:
        turn = state.turn
        if not turn.hand:
            return []
        player = state.current_player
        visited = set(turn.visited)
        moves = []
        for target in self.topology.neighbors(cell):
            if target in visited or not self.accepts(state, target, player):
                continue
            if self.can_distribute(state, target, len(turn.hand) - 1, visited | {target}):
                moves.append(Move.drop(cell, target))
        return moves

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        return self.drops_from(state, cell)

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        turn = state.turn
        if not turn.committed:
            start = turn.start
            board[start] = board[start][:len(board[start]) - turn.pick_count]
        disc = turn.hand[-1]
        turn.hand = turn.hand[:-1]
        board[move.destination] = board[move.destination] + (disc,)
        turn.visited.append(move.destination)

    def continuation(self, state: GameState) -> list[Move]:
        return self.drops_from(state, state.turn.origin)

    def can_stop_chain(self, state: GameState) -> bool:
        return not state.turn.hand

    # ------------------------------------------------------------------
    # Turn end
    # ------------------------------------------------------------------

    def finish_turn(self, state: GameState, events: list[str]) -> None:
        for stair in layout.STAIRCASES:
            self.climb(state, stair, events)

    def climb(self, state: GameState, stair: layout.Staircase, events: list[str]) -> bool:
        board = state.board
        source, target = self.garden(stair.source), self.garden(stair.target)
        stack = board[source]
        climbing = tuple(disc for disc in stack if disc is stair.color)
        staying = tuple(disc for disc in stack if disc is not stair.color)
        if len(climbing) <= len(staying):
            return False
        board[source] = staying
        board[target] = board[target] + climbing
        events.append(f"{len(climbing)} {stair.color.value} stones moved up the staircase.")
        return True

    def evaluate(self, state: GameState) -> Outcome | None:
        # Undecided while discs remain in hand. Staircases never add to a
        # colour's own High Garden, so finish_turn cannot change the result.
        if state.turn.hand:
            return None
        for color in PlayerColor:
            high = self.garden(layout.HIGH_GARDENS[color])
            if zone_count(state.board, [high], color) >= WIN_DISCS:
                return Outcome(
                    winner=color,
                    reason=f"{color.title} has {WIN_DISCS} stones in the High Garden.",
                )
        return None
