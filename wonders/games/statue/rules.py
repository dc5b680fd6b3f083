"""
Statue rules.

A turn is exactly one of:
- Place: put a new value-1 die from the reserve on any empty square
- Stride: move one own die as many orthogonal steps as its value, onto
  empty squares or capturing opponent dice that show more than 1; the die
  then turns to its next value (6 wraps to 1)
- Diminish: lower one own die showing more than 1 by a pip; allowed only
  if the opponent has a movable value-1 die, which their next turn is then
  forced to stride

A player whose dice on board plus in reserve drop below three loses.
"""

from __future__ import annotations
from dataclasses import replace

from ...engine_core.move import Move, MoveKind
from ...engine_core.ruleset import MoveRejected, RuleSet
from ...engine_core.state import Die, GameState, Outcome, PlayerColor
from ...engine_core.topology import Topology
from ...engine_core.win import attrition
from . import board as layout

MIN_DICE = 3
MAX_VALUE = 6


class StatueRules(RuleSet):
    game_id = "statue"
    title = "Statue"
    summary = "Place, stride and diminish dice; value-1 dice cannot be captured."
    actions = ("place", "diminish")

    def build_topology(self) -> Topology:
        return layout.build_topology()

    def initial_state(self) -> GameState:
        state = self.new_state(layout.starting_board(self.topology))
        state.reserves = layout.starting_reserves()
        return state

    # ------------------------------------------------------------------
    # Stride
    # ------------------------------------------------------------------

    def check_origin(self, state: GameState, cell: int) -> str | None:
        die = state.board[cell]
        if not isinstance(die, Die) or die.owner is not state.current_player:
            return "Select one of your own dice."
        if state.turn.forced and die.value != 1:
            return "You are under a forced move; select a die with value 1."
        return None

    def on_origin_selected(self, state: GameState, cell: int) -> None:
        state.turn.moves_left = state.board[cell].value

    def stride_targets(self, state: GameState, cell: int) -> list[Move]:
        board = state.board
        player = board.owner(cell)
        moves = []
        for target in self.topology.neighbors(cell):
            occupant = board[target]
            if occupant is None:
                moves.append(Move.stride(cell, target))
            elif occupant.owner is not player and occupant.value > 1:
                moves.append(Move.stride(cell, target, captured=(target,)))
        return moves

    def moves_from(self, state: GameState, cell: int) -> list[Move]:
        if state.turn.moves_left <= 0:
            return []
        return self.stride_targets(state, cell)

    def continuation(self, state: GameState) -> list[Move]:
        if state.turn.history[-1].kind is not MoveKind.STRIDE:
            return []
        return self.moves_from(state, state.turn.origin)

    def can_stop_chain(self, state: GameState) -> bool:
        return False

    # ------------------------------------------------------------------
    # Place / Diminish
    # ------------------------------------------------------------------

    def action_moves(self, state: GameState, name: str) -> list[Move]:
        player = state.current_player
        if state.turn.forced:
            raise MoveRejected(
                "You are under a forced move and must stride a value-1 die.", "INVALID_PHASE"
            )

        if name == "place":
            if state.reserves.get(player, 0) <= 0:
                raise MoveRejected("No dice left in reserve.", "NO_LEGAL_MOVES")
            return [Move.place(cell) for cell in range(len(state.board)) if state.board[cell] is None]

        if name == "diminish":
            candidates = [
                cell for cell in state.board.cells_of(player) if state.board[cell].value > 1
            ]
            if not candidates:
                raise MoveRejected(
                    "You must have a die with value > 1 to diminish.", "NO_LEGAL_MOVES"
                )
            if not self.movable_ones(state, player.opponent):
                raise MoveRejected(
                    f"Diminish is not possible: {player.opponent.title} has no movable value-1 dice.",
                    "NO_LEGAL_MOVES",
                )
            return [Move.diminish(cell) for cell in candidates]

        return super().action_moves(state, name)

    def movable_ones(self, state: GameState, player: PlayerColor) -> list[int]:
        """Value-1 dice of `player` with at least one stride target."""
        return [
            cell for cell in state.board.cells_of(player)
            if state.board[cell].value == 1 and self.stride_targets(state, cell)
        ]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self, state: GameState, move: Move, events: list[str]) -> None:
        board = state.board
        player = state.current_player
        key = self.topology.key(move.destination)

        if move.kind is MoveKind.PLACE:
            board[move.destination] = Die(owner=player, value=1, die_id=state.next_die_id)
            state.next_die_id += 1
            state.reserves[player] -= 1
            events.append(f"{player.title} placed a new die at {key}.")
        elif move.kind is MoveKind.DIMINISH:
            die = board[move.destination]
            board[move.destination] = replace(die, value=die.value + move.value_delta)
            state.forced_next = True
            events.append(
                f"Die {die.die_id} reduced to {die.value + move.value_delta}. "
                f"{player.opponent.title} must move a value-1 die."
            )
        else:
            if move.captured:
                events.append(f"{player.title} captured the die at {key}.")
            board[move.destination] = board[move.origin]
            board[move.origin] = None
            state.turn.moves_left -= 1

    def finish_turn(self, state: GameState, events: list[str]) -> None:
        last = state.turn.history[-1]
        if last.kind is not MoveKind.STRIDE:
            return
        die = state.board[state.turn.origin]
        turned = replace(die, value=die.value % MAX_VALUE + 1)
        state.board[state.turn.origin] = turned
        events.append(f"Move finished. New value: {turned.value}.")

    def start_turn(self, state: GameState, events: list[str]) -> None:
        if state.forced_next:
            state.forced_next = False
            state.turn.forced = True
            events.append(f"Forced move: {state.current_player.title} must move a value-1 die.")

    # ------------------------------------------------------------------
    # Outcome
    # ------------------------------------------------------------------

    def evaluate(self, state: GameState) -> Outcome | None:
        totals = {
            color: state.board.count(color) + state.reserves.get(color, 0)
            for color in PlayerColor
        }
        return attrition(totals, MIN_DICE, "dice")

    def has_any_move(self, state: GameState, player: PlayerColor) -> bool:
        if state.turn.player is player and state.turn.forced:
            return bool(self.movable_ones(state, player))
        if state.reserves.get(player, 0) > 0 and any(occ is None for occ in state.board.occupants):
            return True
        own = state.board.cells_of(player)
        if any(self.stride_targets(state, cell) for cell in own):
            return True
        return (
            any(state.board[cell].value > 1 for cell in own)
            and bool(self.movable_ones(state, player.opponent))
        )
