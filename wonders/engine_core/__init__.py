"""
Engine core: state, moves, topology, rule sets and the turn controller.
"""

from .state import (
    PlayerColor, GamePhase, Die, Board, TurnState, GameState, Outcome,
    occupant_owner,
)
from .move import MoveKind, Move, MoveResult
from .topology import Topology, Node, TopologyError, grid_topology, validate_topology
from .ruleset import RuleSet, MoveRejected
from .cascade import repeat_until_stable, sweep_until_stable
from .reducer import (
    TurnController, controller_for, initialize, select_cell, choose_action,
    apply_move, cancel_selection, end_turn, query_outcome, reset,
)

__all__ = [
    "PlayerColor", "GamePhase", "Die", "Board", "TurnState", "GameState", "Outcome",
    "occupant_owner",
    "MoveKind", "Move", "MoveResult",
    "Topology", "Node", "TopologyError", "grid_topology", "validate_topology",
    "RuleSet", "MoveRejected",
    "repeat_until_stable", "sweep_until_stable",
    "TurnController", "controller_for", "initialize", "select_cell", "choose_action",
    "apply_move", "cancel_selection", "end_turn", "query_outcome", "reset",
]
