"""
Rule Sets - The per-game half of the engine.

A RuleSet supplies everything that differs between games:
- The board topology and the fixed starting layout
- Legal move generation for a selected piece
- Move execution with the game's cascades
- Chain continuation, end-of-turn effects and win evaluation

The TurnController drives a RuleSet through the turn state machine;
rule sets never switch players or set the outcome themselves.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from .move import Move
from .state import GameState, Outcome, PlayerColor, TurnState
from .topology import Topology


class MoveRejected(Exception):
    """A rule-specific rejection, reported to the caller as a failed MoveResult."""

    def __init__(self, message: str, error_code: str = "ILLEGAL_MOVE"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class RuleSet(ABC):
    """
    Abstract base class for a game's rules.

    Subclasses must implement build_topology, initial_state, moves_from
    and execute. The remaining hooks default to a plain single-move turn.
    """
    game_id: str = ""
    title: str = ""
    summary: str = ""
    actions: tuple[str, ...] = ()

    def __init__(self):
        self.topology = self.build_topology()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    @abstractmethod
    def build_topology(self) -> Topology:
        """Construct the board shape. Called once per rule set."""
        pass

    @abstractmethod
    def initial_state(self) -> GameState:
        """Fixed starting layout with White to move."""
        pass

    def new_state(self, board) -> GameState:
        return GameState(
            game_id=self.game_id,
            board=board,
            turn=TurnState(player=PlayerColor.WHITE),
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def check_origin(self, state: GameState, cell: int) -> str | None:
        """Error message if the cell cannot be picked up, else None."""
        if state.board.owner(cell) is not state.current_player:
            return "Select one of your own pieces."
        return None

    def on_origin_selected(self, state: GameState, cell: int) -> None:
        """Prepare turn bookkeeping after a piece is picked up."""
        pass

    def reselect_origin(self, state: GameState) -> bool:
        """
        Handle a second click on the selected piece before any sub-move.

        Return True if the selection was adjusted in place, False to
        cancel the selection.
        """
        return False

    def action_moves(self, state: GameState, name: str) -> list[Move]:
        """Moves offered by a named action (place, diminish)."""
        raise MoveRejected(f"Unknown action: {name}", "UNKNOWN_ACTION")

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    @abstractmethod
    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        """Legal moves for the piece on `cell` under the current turn state."""
        pass

    @abstractmethod
    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        """Apply a move and its cascades to `state` in place."""
        pass

    def continuation(self, state: GameState) -> list[Move]:
        """Further sub-moves available this turn after a committed move."""
        return []

    def can_stop_chain(self, state: GameState) -> bool:
        return True

    # ------------------------------------------------------------------
    # Turn boundaries
    # ------------------------------------------------------------------

    def finish_turn(self, state: GameState, events: list[str]) -> None:
        """End-of-turn effects for the player who just moved."""
        pass

    def start_turn(self, state: GameState, events: list[str]) -> None:
        """Start-of-turn setup for the player about to move."""
        pass

    def evaluate(self, state: GameState) -> Outcome | None:
        """Terminal condition reached by the board, if any."""
        return None

    def has_any_move(self, state: GameState, player: PlayerColor) -> bool:
        """
        Whether `player` could move anything on a fresh turn.

        Scans every own piece with clean per-turn counters so resources
        already spent this turn do not leak into the answer.
        """
        probe = state.clone()
        for cell in probe.board.cells_of(player):
            probe.turn = TurnState(player=player, forced=state.turn.forced
                                   if state.turn.player is player else False)
            if self.check_origin(probe, cell) is not None:
                continue
            probe.turn.origin = cell
            probe.turn.start = cell
            self.on_origin_selected(probe, cell)
            if self.moves_from(probe, cell):
                return True
        return False
