"""
Mausoleum rules.

- A stone slides in one of six directions and stops on the last empty
  cell before another stone or the board edge
- A stone with no empty neighbour is trapped and cannot move
- After every move, a stone whose neighbours are all occupied is removed
  when opponent neighbours outnumber its own; removals repeat until stable
- A player with fewer than four stones loses
"""

from __future__ import annotations

from ...engine_core.cascade import sweep_until_stable
from ...engine_core.move import Move
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import Board, GameState, Outcome
from ...engine_core.topology import Topology
from ...engine_core.win import board_attrition
from . import board as layout

MIN_STONES = 4


class MausoleumRules(RuleSet):
    game_id = "mausoleum"
    title = "Mausoleum"
    summary = "Slide stones to the edge of their line and encircle the opponent."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        if is_trapped(board, cell):
            return []
        moves = []
        for ray in self.topology.rays_from(cell):
            stop = None
            for target in ray:
                if not board.is_empty(target):
                    break
                stop = target
            if stop is not None:
                moves.append(Move.run(cell, stop))
        return moves

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        board[move.destination] = board[move.origin]
        board[move.origin] = None
        removed = sweep_until_stable(board, is_encircled)
        if removed:
            events.append(f"{len(removed)} encircled stone(s) removed.")

    def evaluate(self, state: GameState) -> Outcome | None:
        return board_attrition(state.board, MIN_STONES)


def is_trapped(board: Board, cell: int) -> bool:
    return all(not board.is_empty(n) for n in board.topology.neighbors(cell))


def is_encircled(board: Board, cell: int) -> bool:
    """Fully surrounded and outnumbered by opponent neighbours."""
    neighbors = board.topology.neighbors(cell)
    if any(board.is_empty(n) for n in neighbors):
        return False
    owner = board.owner(cell)
    friendly = sum(1 for n in neighbors if board.owner(n) is owner)
    return len(neighbors) - friendly > friendly
