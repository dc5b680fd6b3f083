"""
Game State - Board, turn and session-level state shared by every game.

Design principles:
- One explicit GameState value per session, passed to and returned from
  every controller operation (no module-level globals)
- The Board is the single mutable source of truth; committed transitions
  always operate on a clone
- Occupancy is explicit: None for empty, a PlayerColor for plain stones,
  a Die for Statue, a tuple of colors for Gardens towers
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING
from copy import deepcopy
from enum import Enum

if TYPE_CHECKING:
    from .topology import Topology
    from .move import Move


class PlayerColor(Enum):
    """The two sides of every game."""
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> PlayerColor:
        return PlayerColor.BLACK if self is PlayerColor.WHITE else PlayerColor.WHITE

    @property
    def title(self) -> str:
        return self.value.capitalize()


class GamePhase(Enum):
    """Turn state machine phases."""
    SELECT_ORIGIN = "select_origin"
    SELECT_ACTION = "select_action"  # light source, diminish, forced select
    SELECT_DESTINATION = "select_destination"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Die:
    """A Statue die: owner, face value (1-6) and a stable identity."""
    owner: PlayerColor
    value: int
    die_id: int


def occupant_owner(occupant: Any) -> PlayerColor | None:
    """Color controlling an occupant (stone color, die owner, tower top)."""
    if occupant is None:
        return None
    if isinstance(occupant, PlayerColor):
        return occupant
    if isinstance(occupant, Die):
        return occupant.owner
    if isinstance(occupant, tuple):
        return occupant[-1] if occupant else None
    raise TypeError(f"Unknown occupant: {occupant!r}")


def occupant_pieces(occupant: Any, color: PlayerColor) -> int:
    """Number of pieces of a color held by an occupant."""
    if isinstance(occupant, tuple):
        return sum(1 for disc in occupant if disc is color)
    return 1 if occupant_owner(occupant) is color else 0


def is_vacant(occupant: Any) -> bool:
    return occupant is None or occupant == ()


@dataclass
class Board:
    """
    Occupants laid over a fixed topology.

    Cells are addressed by node index; `at()` / `place()` accept
    topology keys for convenience.
    """
    topology: Topology
    occupants: list[Any]

    @classmethod
    def empty(cls, topology: Topology, vacant: Any = None) -> Board:
        return cls(topology=topology, occupants=[vacant] * len(topology))

    def __len__(self) -> int:
        return len(self.occupants)

    def __getitem__(self, cell: int) -> Any:
        return self.occupants[cell]

    def __setitem__(self, cell: int, occupant: Any):
        self.occupants[cell] = occupant

    def at(self, key: Any) -> Any:
        """Occupant at a topology key."""
        return self.occupants[self.topology.index(key)]

    def place(self, key: Any, occupant: Any) -> Board:
        """Put an occupant on the cell with this key (returns self for chaining)."""
        self.occupants[self.topology.index(key)] = occupant
        return self

    def clear(self, vacant: Any = None) -> Board:
        self.occupants = [vacant] * len(self.occupants)
        return self

    def owner(self, cell: int) -> PlayerColor | None:
        return occupant_owner(self.occupants[cell])

    def is_empty(self, cell: int) -> bool:
        return is_vacant(self.occupants[cell])

    def cells_of(self, color: PlayerColor) -> list[int]:
        """Cells controlled by a color, in node order."""
        return [i for i, occ in enumerate(self.occupants) if occupant_owner(occ) is color]

    def count(self, color: PlayerColor) -> int:
        """Total pieces of a color on the board."""
        return sum(occupant_pieces(occ, color) for occ in self.occupants)

    def occupied_cells(self) -> list[int]:
        return [i for i, occ in enumerate(self.occupants) if not is_vacant(occ)]

    def copy(self) -> Board:
        return Board(topology=self.topology, occupants=list(self.occupants))


@dataclass(frozen=True)
class Outcome:
    """Terminal result. winner is None for a draw."""
    winner: PlayerColor | None
    reason: str

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def describe(self) -> str:
        if self.winner is None:
            return f"Draw! {self.reason}"
        return f"{self.winner.title} wins! {self.reason}"


@dataclass
class TurnState:
    """
    Per-turn state, created at turn start and discarded at turn end.

    Only the fields relevant to the active game are used.
    """
    player: PlayerColor

    # Selection
    origin: int | None = None  # current position of the selected piece
    start: int | None = None  # where the piece started this turn
    history: list[Move] = field(default_factory=list)  # committed sub-moves

    # Pharos light bookkeeping
    light_usage: dict[int, int] = field(default_factory=dict)
    mover_light_used: int = 0
    pending_light: int | None = None

    # Gardens hand
    pick_count: int = 0
    hand: tuple[PlayerColor, ...] = ()
    visited: list[int] = field(default_factory=list)

    # Statue stride
    moves_left: int = 0
    forced: bool = False

    @property
    def committed(self) -> bool:
        """At least one sub-move has been applied this turn."""
        return bool(self.history)

    def fresh(self) -> TurnState:
        """Clear the selection, keeping the forced flag and light already spent."""
        return TurnState(
            player=self.player,
            forced=self.forced,
            light_usage=dict(self.light_usage),
            mover_light_used=self.mover_light_used,
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the controller operates on.
    All state changes go through the TurnController.
    """
    game_id: str
    board: Board
    turn: TurnState

    phase: GamePhase = GamePhase.SELECT_ORIGIN
    turn_number: int = 1

    # Moves currently offered to the presentation layer
    legal_moves: list[Move] = field(default_factory=list)

    # Colossus / Pyramid anti-oscillation marker
    last_pushed: int | None = None

    # Pharos: beacon cell -> color that lit it
    beacons: dict[int, PlayerColor] = field(default_factory=dict)

    # Statue
    reserves: dict[PlayerColor, int] = field(default_factory=dict)
    forced_next: bool = False
    next_die_id: int = 1

    # History (for replay and logging)
    move_history: list[Move] = field(default_factory=list)

    outcome: Outcome | None = None

    @property
    def current_player(self) -> PlayerColor:
        return self.turn.player

    @property
    def topology(self) -> Topology:
        return self.board.topology

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def _copy_with(self, **kwargs) -> GameState:
        """Create a shallow copy with some fields replaced."""
        values = {name: getattr(self, name) for name in self.__dataclass_fields__}
        values.update(kwargs)
        return GameState(**values)

    def clone(self) -> GameState:
        """Deep copy the state, sharing the immutable topology."""
        return deepcopy(self, memo={id(self.board.topology): self.board.topology})
