"""
Temple rules.

- Walk: one step to an empty connected node, forward or sideways only
  (White towards row 0, Black towards row 9)
- Leap: over an adjacent stone in a straight line onto an empty node;
  leaping an opponent's stone captures it
- Leaps chain: after a leap the same stone may keep leaping (never back
  onto a node it already occupied this turn) or the player ends the turn
- Reaching the opponent's Artemis field wins
"""

from __future__ import annotations

from ...engine_core.move import Move, MoveKind
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import GameState, Outcome, PlayerColor
from ...engine_core.topology import Topology
from . import board as layout


class TempleRules(RuleSet):
    game_id = "temple"
    title = "Temple"
    summary = "Leap and capture your way to the opponent's Artemis field."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    def on_origin_selected(self, state: GameState, cell: int) -> None:
        state.turn.visited = [cell]

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        return self._walks(state, cell) + self._leaps(state, cell)

    def _walks(self, state: GameState, cell: int) -> list[Move]:
        player = state.board.owner(cell)
        row = self.topology.key(cell)[0]
        moves = []
        for target in self.topology.neighbors(cell):
            if not state.board.is_empty(target):
                continue
            target_row = self.topology.key(target)[0]
            forward = target_row <= row if player is PlayerColor.WHITE else target_row >= row
            if forward:
                moves.append(Move.run(cell, target, kind=MoveKind.WALK))
        return moves

    def _leaps(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        player = board.owner(cell)
        moves = []
        for ray in self.topology.rays_from(cell):
            if len(ray) < 2:
                continue
            over, landing = ray[0], ray[1]
            if board.is_empty(over) or not board.is_empty(landing):
                continue
            if landing in state.turn.visited:
                continue
            moves.append(Move.leap(cell, over, landing, capture=board.owner(over) is not player))
        return moves

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        mover = board[move.origin]
        board[move.destination] = mover
        board[move.origin] = None
        for cell in move.captured:
            events.append(f"{mover.title} captured a {board[cell].title.lower()} stone!")
            board[cell] = None
        state.turn.visited.append(move.destination)

    def continuation(self, state: GameState) -> list[Move]:
        last = state.turn.history[-1]
        if last.kind is not MoveKind.LEAP:
            return []
        return self._leaps(state, last.destination)

    def evaluate(self, state: GameState) -> Outcome | None:
        for cell in self.topology.tagged("artemis"):
            home = self.topology.zone(cell, "artemis")
            if state.board.owner(cell) is home.opponent:
                return Outcome(
                    winner=home.opponent,
                    reason=f"{home.opponent.title} reached the Artemis field.",
                )
        return None
