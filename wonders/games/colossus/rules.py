"""
Colossus rules.

- A stone runs any distance along a row or column over empty cells
- A stone pushes an adjacent stone one cell further if that cell is empty;
  the stone pushed last cannot be pushed again on the very next move
- A stone landing on an arrow field tilts the whole board that way; stones
  landing on arrows during a tilt trigger further tilts, and opposite
  arrows activated together cancel out
- Hades: any stone whose four neighbours are all occupied is removed
- A player with fewer than four stones loses
"""

from __future__ import annotations
from collections import deque

from ...engine_core.cascade import repeat_until_stable, sweep_until_stable
from ...engine_core.move import Move, MoveKind
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import Board, GameState, Outcome
from ...engine_core.topology import Topology
from ...engine_core.win import board_attrition
from . import board as layout

MIN_STONES = 4


class ColossusRules(RuleSet):
    game_id = "colossus"
    title = "Colossus"
    summary = "Run and push stones; arrow fields tilt the whole board."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        moves = []
        for ray in self.topology.rays_from(cell):
            for target in ray:
                if not board.is_empty(target):
                    break
                moves.append(Move.run(cell, target))

            first = ray[0]
            if board.is_empty(first) or len(ray) < 2 or not board.is_empty(ray[1]):
                continue
            if first == state.last_pushed:
                continue
            moves.append(Move.push(cell, first, ray[1]))
        return moves

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        landed = []
        if move.kind is MoveKind.PUSH:
            board[move.push_to] = board[move.destination]
            state.last_pushed = move.push_to
            landed.append(move.push_to)
        board[move.destination] = board[move.origin]
        board[move.origin] = None
        landed.append(move.destination)

        activations = [
            self.topology.zone(cell, "arrow") for cell in landed
            if self.topology.zone(cell, "arrow")
        ]
        if activations:
            self.resolve_tilts(board, activations, events)
        self.remove_hades(board, events)

    def evaluate(self, state: GameState) -> Outcome | None:
        return board_attrition(state.board, MIN_STONES)

    # ------------------------------------------------------------------
    # Cascades
    # ------------------------------------------------------------------

    def resolve_tilts(self, board: Board, activations: list[str], events: list[str]) -> None:
        """Process batches of activated arrows until no new arrow is reached."""
        queue = deque([activations])

        def next_batch() -> bool:
            if not queue:
                return False
            batch = list(dict.fromkeys(queue.popleft()))
            if any(layout.OPPOSITE[direction] in batch for direction in batch):
                events.append("Opposite direction fields activated - no tilt occurs.")
                return True
            for direction in batch:
                events.append(f"The board tilts {direction}.")
                reached = self.tilt(board, direction)
                self.remove_hades(board, events)
                if reached:
                    queue.append(reached)
            return True

        repeat_until_stable(next_batch, len(board))

    def tilt(self, board: Board, direction: str) -> list[str]:
        """
        Slide every stone towards `direction` until nothing moves.

        Each pass moves every stone at most one cell, scanning from the
        leading edge. Returns the arrows stones landed on.
        """
        topology = self.topology
        delta = layout.DIRECTIONS[direction]
        order = sorted(
            range(len(board)),
            key=lambda cell: -(topology.key(cell)[0] * delta[0] + topology.key(cell)[1] * delta[1]),
        )
        reached: list[str] = []

        def slide_pass() -> bool:
            moved = False
            for cell in order:
                if board.is_empty(cell):
                    continue
                target = topology.step(cell, delta)
                if target is None or not board.is_empty(target):
                    continue
                board[target] = board[cell]
                board[cell] = None
                moved = True
                arrow = topology.zone(target, "arrow")
                if arrow:
                    reached.append(arrow)
            return moved

        repeat_until_stable(slide_pass, len(board))
        return reached

    def remove_hades(self, board: Board, events: list[str]) -> list[int]:
        removed = sweep_until_stable(board, is_encircled)
        if removed:
            events.append(f"Hades formed! {len(removed)} stone(s) removed.")
        return removed


def is_encircled(board: Board, cell: int) -> bool:
    """All four grid neighbours exist and are occupied."""
    neighbors = board.topology.neighbors(cell)
    return len(neighbors) == 4 and all(not board.is_empty(n) for n in neighbors)
