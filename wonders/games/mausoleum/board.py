"""
Mausoleum board: nine rows of 4-5-6-7-8-7-6-5-4 cells on a hex grid.

Every cell links to its row neighbours and to the two touching cells in
the rows above and below, giving six straight directions.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology

ROW_LENGTHS = (4, 5, 6, 7, 8, 7, 6, 5, 4)
PADDING = 5.0
WIDTH = 100.0

WHITE_ROWS = (0, 1)
BLACK_ROWS = (7, 8)


def position(r: int, c: int) -> tuple[float, float]:
    max_len = max(ROW_LENGTHS)
    spacing = (WIDTH - 2 * PADDING) / (max_len - 1)
    offset = (max_len - ROW_LENGTHS[r]) * spacing / 2
    y = PADDING + r * (WIDTH - 2 * PADDING) / (len(ROW_LENGTHS) - 1)
    return (PADDING + offset + c * spacing, y)


def links() -> list[tuple[tuple[int, int], tuple[int, int]]]:
    """Row links plus the two downward links of every cell."""
    result = []
    for r, length in enumerate(ROW_LENGTHS):
        for c in range(length):
            if c + 1 < length:
                result.append(((r, c), (r, c + 1)))
            if r + 1 == len(ROW_LENGTHS):
                continue
            if ROW_LENGTHS[r + 1] > length:
                below = [(r + 1, c), (r + 1, c + 1)]
            else:
                below = [(r + 1, c - 1), (r + 1, c)]
            for br, bc in below:
                if 0 <= bc < ROW_LENGTHS[br]:
                    result.append(((r, c), (br, bc)))
    return result


def build_topology() -> Topology:
    cells = [
        ((r, c), position(r, c), {})
        for r, length in enumerate(ROW_LENGTHS)
        for c in range(length)
    ]
    return Topology.from_edges("mausoleum", cells, links())


def starting_board(topology: Topology) -> Board:
    board = Board.empty(topology)
    for r in WHITE_ROWS:
        for c in range(ROW_LENGTHS[r]):
            board.place((r, c), PlayerColor.WHITE)
    for r in BLACK_ROWS:
        for c in range(ROW_LENGTHS[r]):
            board.place((r, c), PlayerColor.BLACK)
    return board
