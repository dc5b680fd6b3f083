"""
Move System - Moves and results.

Moves represent one atomic displacement:
1. Plain movement (run, walk, stride, jump)
2. Movement with a secondary effect (push, leap, smash, push-fall)
3. Piece supply changes (place, diminish, drop)

All board changes flow through moves.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .topology import Topology


class MoveKind(Enum):
    """Types of moves in the system."""
    RUN = "run"  # slide along a ray
    PUSH = "push"  # displace an adjacent piece one step
    JUMP = "jump"  # climb a pyramid level
    LEAP = "leap"  # hop over an adjacent piece
    SMASH = "smash"  # descend onto an occupied lower cell
    PUSH_FALL = "push_fall"  # push a piece off the board
    PLACE = "place"  # bring a die in from reserve
    DIMINISH = "diminish"  # lower a die by one pip
    WALK = "walk"  # single step to a neighbour
    STRIDE = "stride"  # one step of a die's multi-step move
    DROP = "drop"  # drop one disc from the hand


@dataclass(frozen=True)
class Move:
    """
    One candidate or committed sub-move.

    Cells are topology node indices. `origin` is None for placements.
    """
    kind: MoveKind
    origin: int | None
    destination: int

    push_to: int | None = None  # where a pushed piece lands
    via: int | None = None  # cell jumped over by a leap
    captured: tuple[int, ...] = ()  # cells whose occupant is removed
    light_source: int | None = None  # pharos light consumed
    value_delta: int = 0  # die pip change

    @classmethod
    def run(cls, origin: int, destination: int, kind: MoveKind = MoveKind.RUN) -> Move:
        """Factory for a plain displacement (run, walk, jump)."""
        return cls(kind=kind, origin=origin, destination=destination)

    @classmethod
    def push(cls, origin: int, destination: int, push_to: int) -> Move:
        """Factory for a push: the mover takes `destination`, its occupant goes to `push_to`."""
        return cls(kind=MoveKind.PUSH, origin=origin, destination=destination, push_to=push_to)

    @classmethod
    def push_fall(cls, origin: int, destination: int) -> Move:
        return cls(
            kind=MoveKind.PUSH_FALL, origin=origin, destination=destination,
            captured=(destination,),
        )

    @classmethod
    def smash(cls, origin: int, destination: int) -> Move:
        return cls(
            kind=MoveKind.SMASH, origin=origin, destination=destination,
            captured=(destination,),
        )

    @classmethod
    def leap(cls, origin: int, via: int, destination: int, capture: bool) -> Move:
        """Factory for a leap over `via`, capturing it when it holds an opponent."""
        return cls(
            kind=MoveKind.LEAP, origin=origin, destination=destination, via=via,
            captured=(via,) if capture else (),
        )

    @classmethod
    def walk(cls, origin: int, destination: int, captured: tuple[int, ...] = (),
             light_source: int | None = None) -> Move:
        return cls(
            kind=MoveKind.WALK, origin=origin, destination=destination,
            captured=captured, light_source=light_source,
        )

    @classmethod
    def place(cls, destination: int) -> Move:
        return cls(kind=MoveKind.PLACE, origin=None, destination=destination, value_delta=1)

    @classmethod
    def diminish(cls, cell: int) -> Move:
        return cls(kind=MoveKind.DIMINISH, origin=cell, destination=cell, value_delta=-1)

    @classmethod
    def stride(cls, origin: int, destination: int, captured: tuple[int, ...] = ()) -> Move:
        return cls(kind=MoveKind.STRIDE, origin=origin, destination=destination, captured=captured)

    @classmethod
    def drop(cls, origin: int, destination: int) -> Move:
        return cls(kind=MoveKind.DROP, origin=origin, destination=destination)

    def describe(self, topology: Topology | None = None) -> str:
        """Human-readable description, using topology keys when available."""
        def name(cell: int | None) -> str:
            if cell is None:
                return "reserve"
            return str(topology.key(cell)) if topology is not None else str(cell)

        text = f"{self.kind.value} {name(self.origin)} -> {name(self.destination)}"
        if self.push_to is not None:
            text += f" (pushing to {name(self.push_to)})"
        if self.via is not None:
            text += f" (over {name(self.via)})"
        if self.light_source is not None:
            text += f" (light from {name(self.light_source)})"
        return text


@dataclass
class MoveResult:
    """
    Result of a controller operation.

    Contains:
    - Whether the operation succeeded
    - The resulting state (the unchanged prior state on failure)
    - Error message and code (if failed)
    - Human-readable events (captures, tilts, wins) for display
    - The moves to highlight next
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    events: list[str] = field(default_factory=list)
    legal_moves: list[Move] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, state: Any = None) -> MoveResult:
        """Create a failure result carrying the untouched prior state."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, events: list[str] | None = None) -> MoveResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            events=events or [],
            legal_moves=list(state.legal_moves),
        )
