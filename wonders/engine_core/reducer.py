"""
Turn Controller - Applies selections and moves to game state.

The controller is the single point of state mutation.
All state changes must go through its operations.

Design principles:
- Pure operations: (state, input) -> MoveResult with a new state
- Validates before applying; a rejection returns the prior state untouched
- Delegates game-specific movement and cascades to the RuleSet
- Checks for a winner after every committed move and every turn end
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Hashable

from .move import Move, MoveResult
from .ruleset import MoveRejected, RuleSet
from .state import GamePhase, GameState, Outcome, TurnState
from .win import stalemate

logger = logging.getLogger(__name__)


@dataclass
class TurnController:
    """
    Orchestrates a full turn for one game.

    Stateless - all state is in GameState.
    The RuleSet provides the game's rules.
    """
    rules: RuleSet

    def new_game(self) -> GameState:
        """Fixed starting position, already checked for a stalemated first player."""
        state = self.rules.initial_state()
        events: list[str] = []
        self._check_stalemate(state, events)
        logger.debug("New %s game", self.rules.game_id)
        return state

    def reset(self, state: GameState | None = None) -> MoveResult:
        """Discard the session's board and start over."""
        return MoveResult.success_with_state(self.new_game(), ["Game reset."])

    def query_outcome(self, state: GameState) -> Outcome | None:
        return state.outcome

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_cell(self, state: GameState, cell: int | Hashable) -> MoveResult:
        """
        Begin or continue a selection.

        In SELECT_ORIGIN the cell picks up a piece. In SELECT_DESTINATION a
        highlighted cell commits that move, the selected piece itself
        cancels (or ends a started chain), and another own piece switches
        the selection. In SELECT_ACTION the cell chooses a light source.
        """
        if state.outcome is not None:
            return MoveResult.failure("The game is over.", "GAME_OVER", state)

        try:
            index = state.topology.resolve(cell)
        except KeyError:
            return MoveResult.failure(f"Unknown cell: {cell!r}", "UNKNOWN_CELL", state)

        if state.phase == GamePhase.SELECT_ORIGIN:
            return self._select_origin(state, index)

        if state.phase == GamePhase.SELECT_ACTION:
            chosen = [m for m in state.legal_moves if m.light_source == index]
            if not chosen:
                return MoveResult.failure(
                    "Choose one of the highlighted light sources.", "ILLEGAL_MOVE", state
                )
            return self.apply_move(state, chosen[0])

        matches = [m for m in state.legal_moves if m.destination == index]
        if matches:
            if len({m.light_source for m in matches}) > 1:
                return self._ask_for_source(state, index, matches)
            return self.apply_move(state, matches[0])

        turn = state.turn
        if turn.origin is not None and index == turn.origin:
            if turn.committed:
                return self.end_turn(state)
            adjusted = state.clone()
            if self.rules.reselect_origin(adjusted):
                return self._offer_moves(adjusted, turn.origin, fallback=state)
            return self.cancel_selection(state)

        if not turn.committed and state.board.owner(index) is turn.player:
            return self._select_origin(state, index)

        return MoveResult.failure("That cell is not a legal destination.", "ILLEGAL_MOVE", state)

    def choose_action(self, state: GameState, name: str) -> MoveResult:
        """Start a named action (e.g. place or diminish) instead of moving a piece."""
        if state.outcome is not None:
            return MoveResult.failure("The game is over.", "GAME_OVER", state)
        if name not in self.rules.actions:
            return MoveResult.failure(
                f"Unknown action for {self.rules.title}: {name}", "UNKNOWN_ACTION", state
            )
        if state.turn.committed:
            return MoveResult.failure(
                "Actions are only available at the start of a turn.", "INVALID_PHASE", state
            )

        try:
            moves = self.rules.action_moves(state, name)
        except MoveRejected as e:
            return MoveResult.failure(e.message, e.error_code, state)
        if not moves:
            return MoveResult.failure(f"No legal target for {name}.", "NO_LEGAL_MOVES", state)

        new_state = state.clone()
        new_state.turn = new_state.turn.fresh()
        new_state.phase = GamePhase.SELECT_DESTINATION
        new_state.legal_moves = moves
        logger.debug("%s chose action %s", state.current_player.title, name)
        return MoveResult.success_with_state(new_state)

    def cancel_selection(self, state: GameState) -> MoveResult:
        """Roll back an uncommitted selection (or a pending light-source choice)."""
        if state.outcome is not None:
            return MoveResult.failure("The game is over.", "GAME_OVER", state)

        if state.phase == GamePhase.SELECT_ACTION:
            new_state = state.clone()
            new_state.turn.pending_light = None
            new_state.phase = GamePhase.SELECT_DESTINATION
            new_state.legal_moves = self._current_moves(new_state)
            return MoveResult.success_with_state(new_state)

        if state.turn.committed:
            return MoveResult.failure(
                "A move was already made this turn; end the turn instead.", "CANNOT_CANCEL", state
            )
        if state.phase != GamePhase.SELECT_DESTINATION:
            return MoveResult.failure("Nothing is selected.", "CANNOT_CANCEL", state)

        new_state = state.clone()
        new_state.turn = new_state.turn.fresh()
        new_state.phase = GamePhase.SELECT_ORIGIN
        new_state.legal_moves = []
        return MoveResult.success_with_state(new_state)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def apply_move(self, state: GameState, move: Move) -> MoveResult:
        """
        Commit a highlighted move and all of its cascades.

        Afterwards the turn either continues with the same piece (chain
        moves) or ends and passes to the opponent.
        """
        if state.outcome is not None:
            return MoveResult.failure("The game is over.", "GAME_OVER", state)
        if state.phase not in (GamePhase.SELECT_DESTINATION, GamePhase.SELECT_ACTION):
            return MoveResult.failure("Select a piece first.", "INVALID_PHASE", state)
        if move not in state.legal_moves:
            return MoveResult.failure("That move is not legal.", "ILLEGAL_MOVE", state)

        new_state = state.clone()
        events: list[str] = []
        new_state.turn.pending_light = None
        new_state.last_pushed = None
        self.rules.execute(new_state, move, events)
        new_state.turn.history.append(move)
        new_state.move_history.append(move)
        if new_state.turn.origin is None or new_state.turn.origin == move.origin:
            new_state.turn.origin = move.destination
        logger.debug("%s: %s", state.current_player.title, move.describe(state.topology))

        outcome = self.rules.evaluate(new_state)
        if outcome is not None:
            return self._finish(new_state, outcome, events)

        follow_up = self.rules.continuation(new_state)
        if follow_up:
            new_state.phase = GamePhase.SELECT_DESTINATION
            new_state.legal_moves = follow_up
            return MoveResult.success_with_state(new_state, events)

        return self._end_turn(new_state, events)

    def end_turn(self, state: GameState) -> MoveResult:
        """Stop a chain early, committing the sub-moves already made."""
        if state.outcome is not None:
            return MoveResult.failure("The game is over.", "GAME_OVER", state)
        if not state.turn.committed:
            return MoveResult.failure(
                "Make a move before ending the turn.", "CANNOT_END_TURN", state
            )
        if not self.rules.can_stop_chain(state):
            return MoveResult.failure(
                "The turn cannot end here; finish the move first.", "CANNOT_END_TURN", state
            )
        return self._end_turn(state.clone(), [])

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _select_origin(self, state: GameState, index: int) -> MoveResult:
        error = self.rules.check_origin(state, index)
        if error:
            return MoveResult.failure(error, "NOT_YOUR_PIECE", state)

        new_state = state.clone()
        new_state.turn = new_state.turn.fresh()
        new_state.turn.origin = index
        new_state.turn.start = index
        self.rules.on_origin_selected(new_state, index)
        return self._offer_moves(new_state, index, fallback=state)

    def _offer_moves(self, new_state: GameState, index: int,
                     fallback: GameState | None = None) -> MoveResult:
        moves = self.rules.moves_from(new_state, index)
        if not moves:
            return MoveResult.failure(
                "That piece has no legal moves.", "NO_LEGAL_MOVES", fallback or new_state
            )
        new_state.phase = GamePhase.SELECT_DESTINATION
        new_state.legal_moves = moves
        return MoveResult.success_with_state(new_state)

    def _ask_for_source(self, state: GameState, target: int, moves: list[Move]) -> MoveResult:
        new_state = state.clone()
        new_state.phase = GamePhase.SELECT_ACTION
        new_state.turn.pending_light = target
        new_state.legal_moves = moves
        return MoveResult.success_with_state(
            new_state, [f"Choose a light source for {state.topology.key(target)}."]
        )

    def _current_moves(self, state: GameState) -> list[Move]:
        if state.turn.committed:
            return self.rules.continuation(state)
        if state.turn.origin is None:
            return []
        return self.rules.moves_from(state, state.turn.origin)

    def _end_turn(self, state: GameState, events: list[str]) -> MoveResult:
        """Finish the mover's turn on an already cloned state and hand over."""
        self.rules.finish_turn(state, events)
        outcome = self.rules.evaluate(state)
        if outcome is not None:
            return self._finish(state, outcome, events)

        player = state.turn.player.opponent
        state.turn = TurnState(player=player)
        state.turn_number += 1
        state.phase = GamePhase.SELECT_ORIGIN
        state.legal_moves = []
        self.rules.start_turn(state, events)
        logger.debug("Turn %d: %s to move", state.turn_number, player.title)

        self._check_stalemate(state, events)
        return MoveResult.success_with_state(state, events)

    def _check_stalemate(self, state: GameState, events: list[str]) -> None:
        player = state.turn.player
        if not self.rules.has_any_move(state, player):
            self._finish(state, stalemate(player), events)

    def _finish(self, state: GameState, outcome: Outcome, events: list[str]) -> MoveResult:
        state.outcome = outcome
        state.phase = GamePhase.GAME_OVER
        state.legal_moves = []
        events.append(outcome.describe())
        logger.info("%s game over: %s", self.rules.game_id, outcome.describe())
        return MoveResult.success_with_state(state, events)


def controller_for(state_or_game: GameState | str) -> TurnController:
    """Controller for a game id or for the game a state belongs to."""
    from ..games import get_rules

    game_id = state_or_game if isinstance(state_or_game, str) else state_or_game.game_id
    return TurnController(get_rules(game_id))


def initialize(game_id: str) -> GameState:
    """Fixed starting state for a game."""
    return controller_for(game_id).new_game()


def select_cell(state: GameState, cell: Any) -> MoveResult:
    return controller_for(state).select_cell(state, cell)


def choose_action(state: GameState, name: str) -> MoveResult:
    return controller_for(state).choose_action(state, name)


def apply_move(state: GameState, move: Move) -> MoveResult:
    return controller_for(state).apply_move(state, move)


def cancel_selection(state: GameState) -> MoveResult:
    return controller_for(state).cancel_selection(state)


def end_turn(state: GameState) -> MoveResult:
    return controller_for(state).end_turn(state)


def query_outcome(state: GameState) -> Outcome | None:
    return state.outcome


def reset(state: GameState) -> MoveResult:
    return controller_for(state).reset(state)
