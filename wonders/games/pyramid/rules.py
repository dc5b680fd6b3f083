"""
Pyramid rules.

- Run: any distance along the rim of the current level over empty cells
- Descend: from a rim cell straight outward onto any lower level, landing
  on an empty cell or smashing whatever stone is there
- Jump: one step up onto the level above, if that cell is empty
- Push: move into an adjacent stone on the same level, shoving it one cell
  further; the stone pushed last cannot be pushed back on the next move
- Push-fall: on the base level a stone pushed past a corner leaves the board
- Attrition (fewer than four stones) is checked before the victory fields;
  four own stones on the level 2 corners win
"""

from __future__ import annotations

from ...engine_core.move import Move, MoveKind
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import GameState, Outcome, PlayerColor
from ...engine_core.topology import Topology
from ...engine_core.win import board_attrition, zone_count
from . import board as layout

MIN_STONES = 4
VICTORY_STONES = 4

ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


class PyramidRules(RuleSet):
    game_id = "pyramid"
    title = "Pyramid"
    summary = "Climb the pyramid and hold its four upper corners."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        return (
            self._runs(state, cell)
            + self._descents(state, cell)
            + self._jumps(state, cell)
            + self._pushes(state, cell)
        )

    def _runs(self, state: GameState, cell: int) -> list[Move]:
        moves = []
        for ray in self.topology.rays_from(cell):
            for target in ray:
                if not state.board.is_empty(target):
                    break
                moves.append(Move.run(cell, target))
        return moves

    def _descents(self, state: GameState, cell: int) -> list[Move]:
        """Outward moves onto every lower level beneath the cell's rim side."""
        level, r, c = self.topology.key(cell)
        last = layout.LEVEL_SIZES[level] - 1
        outward = []
        if r == 0:
            outward.append((-1, 0))
        if r == last:
            outward.append((1, 0))
        if c == 0:
            outward.append((0, -1))
        if c == last:
            outward.append((0, 1))

        moves = []
        for dr, dc in outward:
            for depth in range(1, level + 1):
                key = (level - depth, r + depth + dr * depth, c + depth + dc * depth)
                if key not in self.topology:
                    continue
                target = self.topology.index(key)
                if state.board.is_empty(target):
                    moves.append(Move.run(cell, target))
                else:
                    moves.append(Move.smash(cell, target))
        return moves

    def _jumps(self, state: GameState, cell: int) -> list[Move]:
        level, r, c = self.topology.key(cell)
        if level + 1 >= len(layout.LEVEL_SIZES):
            return []
        moves = []
        for dr, dc in ORTHOGONAL:
            key = (level + 1, r + dr - 1, c + dc - 1)
            if key not in self.topology:
                continue
            target = self.topology.index(key)
            if state.board.is_empty(target):
                moves.append(Move.run(cell, target, kind=MoveKind.JUMP))
        return moves

    def _pushes(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        level = self.topology.key(cell)[0]
        moves = []
        for ray in self.topology.rays_from(cell):
            first = ray[0]
            if board.is_empty(first):
                continue
            if len(ray) > 1:
                if board.is_empty(ray[1]) and first != state.last_pushed:
                    moves.append(Move.push(cell, first, ray[1]))
            elif level == 0:
                moves.append(Move.push_fall(cell, first))
        return moves

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        mover = board[move.origin]
        if move.kind is MoveKind.PUSH:
            board[move.push_to] = board[move.destination]
            state.last_pushed = move.push_to
        elif move.kind is MoveKind.SMASH:
            events.append(f"{mover.title} smashed {board[move.destination].title}!")
        elif move.kind is MoveKind.PUSH_FALL:
            events.append(f"{board[move.destination].title} stone pushed off the pyramid!")
        board[move.destination] = mover
        board[move.origin] = None

    def evaluate(self, state: GameState) -> Outcome | None:
        outcome = board_attrition(state.board, MIN_STONES)
        if outcome is not None:
            return outcome
        corners = self.topology.tagged("victory")
        for color in PlayerColor:
            if zone_count(state.board, corners, color) >= VICTORY_STONES:
                return Outcome(
                    winner=color,
                    reason=f"{color.title} holds all four victory fields.",
                )
        return None
