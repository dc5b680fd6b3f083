"""
Colossus board: a 9x9 core with three-cell arms on each side.

Each arm's middle cell is a direction arrow pointing off the board.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology, grid_topology

BOARD_SIZE = 11

DIRECTIONS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

OPPOSITE = {"up": "down", "down": "up", "left": "right", "right": "left"}

ARROWS = {
    (0, 5): "up",
    (10, 5): "down",
    (5, 0): "left",
    (5, 10): "right",
}

BLACK_START = [
    (1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (3, 1),
    (7, 9), (8, 8), (8, 9), (9, 7), (9, 8), (9, 9),
]

WHITE_START = [
    (1, 7), (1, 8), (1, 9), (2, 8), (2, 9), (3, 9),
    (7, 1), (8, 1), (8, 2), (9, 1), (9, 2), (9, 3),
]


def is_active(r: int, c: int) -> bool:
    """Cross shape: the core plus the arms around each arrow."""
    if 1 <= r <= 9 and 1 <= c <= 9:
        return True
    if r in (0, 10) and 4 <= c <= 6:
        return True
    return c in (0, 10) and 4 <= r <= 6


def build_topology() -> Topology:
    return grid_topology(
        "colossus",
        BOARD_SIZE,
        BOARD_SIZE,
        active=is_active,
        zones={cell: {"arrow": direction} for cell, direction in ARROWS.items()},
    )


def starting_board(topology: Topology) -> Board:
    board = Board.empty(topology)
    for key in WHITE_START:
        board.place(key, PlayerColor.WHITE)
    for key in BLACK_START:
        board.place(key, PlayerColor.BLACK)
    return board
