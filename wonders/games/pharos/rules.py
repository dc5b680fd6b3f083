"""
Pharos rules.

- A stone steps to an orthogonal neighbour that does not hold its own
  colour, capturing an opponent stone there
- Every step consumes one unit of light from a source with capacity left:
    - the moving stone itself (1 per turn, carried with it) plus the unit
      of an own lit beacon it stands on
    - a friendly stone in an unblocked orthogonal line of sight (1, or 2
      on an own lit beacon)
    - an empty beacon lit by the mover's colour in line of sight (1)
  Opponent stones block lines of sight; friendly stones do not.
  A beacon gives one unit per turn whether or not a stone stands on it,
  so the mover cannot draw it once while standing there and again after
  leaving
- Stepping onto a beacon lights it for the mover's colour
- The same stone keeps stepping while targets and light remain; the player
  may end the chain at any time
- A player who cannot move at the start of their turn loses
"""

from __future__ import annotations

from ...engine_core.move import Move
from ...engine_core.ruleset import RuleSet
from ...engine_core.state import GameState, PlayerColor
from ...engine_core.topology import Topology
from . import board as layout

STONE_LIGHT = 1


class PharosRules(RuleSet):
    game_id = "pharos"
    title = "Pharos"
    summary = "Move by the light of your stones and beacons."

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        return self.new_state(layout.starting_board(self.topology))

    # ------------------------------------------------------------------
    # Light
    # ------------------------------------------------------------------

    def lit_by(self, state: GameState, cell: int, color: PlayerColor) -> bool:
        return self.topology.zone(cell, "beacon", False) and state.beacons.get(cell) is color

    def capacity(self, state: GameState, cell: int, color: PlayerColor) -> int:
        """Light units a cell can give `color` in one turn."""
        owner = state.board.owner(cell)
        lit = self.lit_by(state, cell, color)
        if owner is color:
            return STONE_LIGHT + 1 if lit else STONE_LIGHT
        if owner is None and lit:
            return 1
        return 0

    def has_own_light(self, state: GameState, cell: int) -> bool:
        """
        Whether the moving stone on `cell` can still light its own step.

        The stone's unit travels with it (`mover_light_used`); the beacon
        under it is charged to the cell in `light_usage`, the same budget
        it draws from once the stone has left.
        """
        turn = state.turn
        if turn.mover_light_used < STONE_LIGHT:
            return True
        beacon = 1 if self.lit_by(state, cell, state.board.owner(cell)) else 0
        return turn.light_usage.get(cell, 0) < beacon

    def light_sources(self, state: GameState, cell: int) -> list[int]:
        """Cells that can still pay for a step of the stone on `cell`."""
        color = state.board.owner(cell)
        turn = state.turn
        sources = []
        if self.has_own_light(state, cell):
            sources.append(cell)

        for ray in self.topology.rays_from(cell):
            for other in ray:
                owner = state.board.owner(other)
                if owner is color.opponent:
                    break
                if turn.light_usage.get(other, 0) < self.capacity(state, other, color):
                    sources.append(other)
        return sources

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        color = board.owner(cell)
        targets = [n for n in self.topology.neighbors(cell) if board.owner(n) is not color]
        if not targets:
            return []
        sources = self.light_sources(state, cell)
        moves = []
        for target in targets:
            captured = (target,) if board.owner(target) is color.opponent else ()
            for source in sources:
                moves.append(Move.walk(cell, target, captured=captured, light_source=source))
        return moves

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        turn = state.turn
        mover = board[move.origin]
        source = move.light_source
        if source == move.origin and turn.mover_light_used < STONE_LIGHT:
            turn.mover_light_used += 1
        else:
            turn.light_usage[source] = turn.light_usage.get(source, 0) + 1

        if move.captured:
            events.append(f"{mover.title} captured a {board[move.destination].title.lower()} stone!")
        board[move.destination] = mover
        board[move.origin] = None

        if self.topology.zone(move.destination, "beacon", False):
            if state.beacons.get(move.destination) is not mover:
                events.append(f"Beacon at {self.topology.key(move.destination)} is now lit by {mover.value}!")
            state.beacons[move.destination] = mover

    def continuation(self, state: GameState) -> list[Move]:
        return self.moves_from(state, state.turn.origin)
