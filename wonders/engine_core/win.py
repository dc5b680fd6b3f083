"""
Win Evaluator helpers.

Three families of terminal conditions:
- Attrition: a side drops below a minimum piece count (both at once: draw)
- Zone occupancy: a side collects enough pieces in a goal zone
- Stalemate: the side to move has no piece with a legal move

Rule sets combine these in their own order; attrition always comes first.
"""

from __future__ import annotations
from typing import Iterable

from .state import Board, Outcome, PlayerColor, occupant_pieces

NUMBER_WORDS = {1: "one", 2: "two", 3: "three", 4: "four", 5: "five", 6: "six", 7: "seven"}


def attrition(
    counts: dict[PlayerColor, int],
    minimum: int,
    noun: str = "stones",
) -> Outcome | None:
    """Outcome when a side holds fewer than `minimum` pieces, else None."""
    short = [color for color in PlayerColor if counts.get(color, 0) < minimum]
    words = NUMBER_WORDS.get(minimum, str(minimum))
    if len(short) == 2:
        return Outcome(winner=None, reason=f"Both players have fewer than {words} {noun}.")
    if short:
        loser = short[0]
        return Outcome(
            winner=loser.opponent,
            reason=f"{loser.title} has fewer than {words} {noun}.",
        )
    return None


def board_attrition(board: Board, minimum: int, noun: str = "stones") -> Outcome | None:
    return attrition({color: board.count(color) for color in PlayerColor}, minimum, noun)


def zone_count(board: Board, cells: Iterable[int], color: PlayerColor) -> int:
    """Pieces of a color sitting on the given cells."""
    return sum(occupant_pieces(board[cell], color) for cell in cells)


def stalemate(player: PlayerColor) -> Outcome:
    return Outcome(winner=player.opponent, reason=f"{player.title} has no legal moves.")
