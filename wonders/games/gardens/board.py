"""
Gardens board: two 3x5 playing fields and four gardens.

Cells hold stacks of discs, bottom to top, as tuples of PlayerColor.
Keys are ('top', r, c), ('bottom', r, c) and ('garden', i):

    G0 (White high)  [ top field ]  G3 (Black high)
    G1 (White home)  [bottom field] G2 (Black home)

The top field's last row borders the bottom field's first row. Each
garden borders the three cells of the field column beside it. Two
staircases link each home garden to the high garden above it.
"""

from __future__ import annotations
from dataclasses import dataclass

from ...engine_core.state import Board, PlayerColor
from ...engine_core.topology import Topology

FIELD_ROWS = 3
FIELD_COLS = 5
MAX_FIELD_HEIGHT = 5
MAX_PICK = 5
START_DISCS = 10

G_TOP_LEFT, G_BOTTOM_LEFT, G_BOTTOM_RIGHT, G_TOP_RIGHT = 0, 1, 2, 3

GARDEN_FIELDS = {
    G_TOP_LEFT: ("top", 0),
    G_BOTTOM_LEFT: ("bottom", 0),
    G_BOTTOM_RIGHT: ("bottom", FIELD_COLS - 1),
    G_TOP_RIGHT: ("top", FIELD_COLS - 1),
}

HOME_GARDENS = {PlayerColor.WHITE: G_BOTTOM_LEFT, PlayerColor.BLACK: G_BOTTOM_RIGHT}
HIGH_GARDENS = {PlayerColor.WHITE: G_TOP_LEFT, PlayerColor.BLACK: G_TOP_RIGHT}


@dataclass(frozen=True)
class Staircase:
    """Discs of `color` climb from one garden to another when they outnumber the rest."""
    source: int
    target: int
    color: PlayerColor


STAIRCASES = (
    Staircase(source=G_BOTTOM_LEFT, target=G_TOP_LEFT, color=PlayerColor.BLACK),
    Staircase(source=G_BOTTOM_RIGHT, target=G_TOP_RIGHT, color=PlayerColor.WHITE),
)


def garden_key(index: int) -> tuple[str, int]:
    return ("garden", index)


def build_topology() -> Topology:
    cells = []
    edges = []
    for area, y_offset in (("top", 0), ("bottom", FIELD_ROWS)):
        for r in range(FIELD_ROWS):
            for c in range(FIELD_COLS):
                cells.append(((area, r, c), (float(c + 1), float(r + y_offset)), {"field": area}))
                if c + 1 < FIELD_COLS:
                    edges.append(((area, r, c), (area, r, c + 1)))
                if r + 1 < FIELD_ROWS:
                    edges.append(((area, r, c), (area, r + 1, c)))
    for c in range(FIELD_COLS):
        edges.append((("top", FIELD_ROWS - 1, c), ("bottom", 0, c)))

    home = {index: color for color, index in HOME_GARDENS.items()}
    high = {index: color for color, index in HIGH_GARDENS.items()}
    for index, (area, col) in GARDEN_FIELDS.items():
        x = 0.0 if col == 0 else float(FIELD_COLS + 1)
        y = 1.0 if area == "top" else float(FIELD_ROWS + 1)
        zones = {"garden": index}
        if index in home:
            zones["home"] = home[index]
        if index in high:
            zones["high"] = high[index]
        cells.append((garden_key(index), (x, y), zones))
        for r in range(FIELD_ROWS):
            edges.append((garden_key(index), (area, r, col)))
    return Topology.from_edges("gardens", cells, edges)


def starting_board(topology: Topology) -> Board:
    board = Board.empty(topology, vacant=())
    for color, index in HOME_GARDENS.items():
        board.place(garden_key(index), (color,) * START_DISCS)
    return board
