"""
Pharos board: a 9x9 grid with beacons on the four corners and the centre.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology, grid_topology

BOARD_SIZE = 9
BEACONS = [(0, 0), (0, 8), (8, 0), (8, 8), (4, 4)]
START_SPAN = range(2, 7)


def build_topology() -> Topology:
    return grid_topology(
        "pharos",
        BOARD_SIZE,
        BOARD_SIZE,
        zones={cell: {"beacon": True} for cell in BEACONS},
    )


def starting_board(topology: Topology) -> Board:
    """White along the top and bottom edges, Black along the sides."""
    board = Board.empty(topology)
    last = BOARD_SIZE - 1
    for i in START_SPAN:
        board.place((0, i), PlayerColor.WHITE)
        board.place((last, i), PlayerColor.WHITE)
        board.place((i, 0), PlayerColor.BLACK)
        board.place((i, last), PlayerColor.BLACK)
    return board
