"""
Cascades - Bounded fixed-point loops.

Tilts, encirclement sweeps and staircase transports all repeat a
transformation until a pass changes nothing. Every loop is capped at a
bound derived from board size so a faulty rule cannot spin forever.
"""

from __future__ import annotations
import logging
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Board

logger = logging.getLogger(__name__)


def repeat_until_stable(step: Callable[[], bool], limit: int) -> int:
    """
    Call `step` until it reports no change or `limit` passes have run.

    `step` returns True when it changed something. Returns the number of
    passes that made a change.
    """
    changed_passes = 0
    for _ in range(limit):
        if not step():
            return changed_passes
        changed_passes += 1
    logger.warning("Cascade stopped after %d passes without reaching a fixed point", limit)
    return changed_passes


def sweep_until_stable(
    board: Board,
    is_captured: Callable[[Board, int], bool],
    limit: int | None = None,
) -> list[int]:
    """
    Remove captured occupants until no cell newly qualifies.

    Each pass evaluates every occupied cell against the same snapshot and
    removes all qualifying occupants at once. Returns removed cells in
    removal order.
    """
    removed: list[int] = []

    def sweep() -> bool:
        doomed = [cell for cell in board.occupied_cells() if is_captured(board, cell)]
        for cell in doomed:
            board[cell] = None
        removed.extend(doomed)
        return bool(doomed)

    repeat_until_stable(sweep, limit if limit is not None else len(board) + 1)
    return removed
