"""
Temple board: ten rows of 1, 2, 3, 5, 5, 5, 5, 5, 3, 1 nodes.

The single nodes at the top and bottom are the Artemis fields; the top
one is Black's home and White's goal, the bottom one the reverse.
Positions follow the drawn layout so straight lines can be traced by
vector continuation.
"""

from __future__ import annotations

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology

ROW_COUNTS = (1, 2, 3, 5, 5, 5, 5, 5, 3, 1)
ROW_Y = (5.0, 18.0, 31.0, 44.0, 57.0, 70.0, 83.0, 96.0, 109.0, 135.0)

TOP_ARTEMIS = (0, 0)
BOTTOM_ARTEMIS = (9, 0)

# Links that do not follow the regular 5-wide grid of rows 3-7
IRREGULAR_LINKS = [
    ((0, 0), (1, 0)), ((0, 0), (1, 1)),
    ((1, 0), (2, 0)), ((1, 0), (2, 1)), ((1, 1), (2, 1)), ((1, 1), (2, 2)),
    ((1, 0), (1, 1)),
    ((2, 0), (3, 0)), ((2, 0), (3, 1)), ((2, 1), (3, 2)),
    ((2, 2), (3, 3)), ((2, 2), (3, 4)),
    ((2, 0), (3, 2)), ((2, 2), (3, 2)),
    ((2, 0), (2, 1)), ((2, 1), (2, 2)),
    ((7, 0), (8, 0)), ((7, 1), (8, 0)), ((7, 2), (8, 1)),
    ((7, 3), (8, 2)), ((7, 4), (8, 2)),
    ((8, 0), (9, 0)), ((8, 1), (9, 0)), ((8, 2), (9, 0)),
    ((8, 0), (8, 1)), ((8, 1), (8, 2)),
]

WHITE_START = [(7, 1), (7, 2), (7, 3), (8, 0), (8, 1), (8, 2), (9, 0)]
BLACK_START = [(0, 0), (1, 0), (1, 1), (2, 0), (2, 1), (2, 2)]


def node_x(count: int, col: int) -> float:
    """Evenly spaced x positions across a width of 100."""
    if count == 1:
        return 50.0
    if count == 2:
        return 100.0 / 3 * (col + 1)
    if count == 3:
        return 25.0 * (col + 1)
    return 100.0 / 6 * (col + 1)


def grid_links() -> list[tuple[tuple[int, int], tuple[int, int]]]:
    """Orthogonal and diagonal links of the 5-wide middle rows."""
    links = []
    for r in range(3, 7):
        for c in range(5):
            links.append(((r, c), (r + 1, c)))
            if c < 4:
                links.append(((r, c), (r, c + 1)))
                links.append(((r, c), (r + 1, c + 1)))
                links.append(((r, c + 1), (r + 1, c)))
    links.extend(((7, c), (7, c + 1)) for c in range(4))
    return links


def build_topology() -> Topology:
    cells = []
    for r, count in enumerate(ROW_COUNTS):
        for c in range(count):
            zones = {}
            if (r, c) == TOP_ARTEMIS:
                zones["artemis"] = PlayerColor.BLACK
            elif (r, c) == BOTTOM_ARTEMIS:
                zones["artemis"] = PlayerColor.WHITE
            cells.append(((r, c), (node_x(count, c), ROW_Y[r]), zones))
    return Topology.from_edges("temple", cells, IRREGULAR_LINKS + grid_links())


def starting_board(topology: Topology) -> Board:
    board = Board.empty(topology)
    for key in WHITE_START:
        board.place(key, PlayerColor.WHITE)
    for key in BLACK_START:
        board.place(key, PlayerColor.BLACK)
    return board
