"""
Pyramid board: four stacked square levels of size 7, 5, 3 and 1.

Only the outer rim of each level is playable. Cells are keyed
(level, row, col); level 0 is the base. The four corners of level 2 are
victory fields.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology

LEVEL_SIZES = (7, 5, 3, 1)
VICTORY_LEVEL = 2
LEVEL_SPACING = 100.0


def is_rim(size: int, r: int, c: int) -> bool:
    return r in (0, size - 1) or c in (0, size - 1)


def build_topology() -> Topology:
    cells = []
    edges = []
    for level, size in enumerate(LEVEL_SIZES):
        last = size - 1
        for r in range(size):
            for c in range(size):
                if not is_rim(size, r, c):
                    continue
                zones = {"level": level}
                if level == VICTORY_LEVEL and r in (0, last) and c in (0, last):
                    zones["victory"] = True
                cells.append(((level, r, c), (c + level * LEVEL_SPACING, float(r)), zones))
                if c + 1 < size and is_rim(size, r, c + 1):
                    edges.append(((level, r, c), (level, r, c + 1)))
                if r + 1 < size and is_rim(size, r + 1, c):
                    edges.append(((level, r, c), (level, r + 1, c)))
    return Topology.from_edges("pyramid", cells, edges)


def starting_board(topology: Topology) -> Board:
    board = Board.empty(topology)
    for c in range(LEVEL_SIZES[0]):
        board.place((0, LEVEL_SIZES[0] - 1, c), PlayerColor.WHITE)
        board.place((0, 0, c), PlayerColor.BLACK)
    return board
