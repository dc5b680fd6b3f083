"""
Statue board: an 11x11 grid with four 2x2 blocks removed around the centre.

The board starts empty; each player has a reserve of eight dice.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology, grid_topology

BOARD_SIZE = 11
RESERVE_DICE = 8

REMOVED_SQUARES = frozenset({
    (3, 3), (3, 4), (3, 6), (3, 7),
    (4, 3), (4, 4), (4, 6), (4, 7),
    (6, 3), (6, 4), (6, 6), (6, 7),
    (7, 3), (7, 4), (7, 6), (7, 7),
})


def build_topology() -> Topology:
    return grid_topology(
        "statue",
        BOARD_SIZE,
        BOARD_SIZE,
        active=lambda r, c: (r, c) not in REMOVED_SQUARES,
    )


def starting_board(topology: Topology) -> Board:
    return Board.empty(topology)


def starting_reserves() -> dict[PlayerColor, int]:
    return {color: RESERVE_DICE for color in PlayerColor}
