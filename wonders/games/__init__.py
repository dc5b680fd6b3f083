"""
Games module - Game-specific rule sets.

Each game has its own subpackage with:
- board.py: topology construction and the starting layout
- rules.py: the RuleSet (move generation, execution, cascades, win check)

Rule sets are stateless and built once per process.
"""

from __future__ import annotations

from ..engine_core.ruleset import RuleSet
from .colossus.rules import ColossusRules
from .pyramid.rules import PyramidRules
from .temple.rules import TempleRules
from .mausoleum.rules import MausoleumRules
from .pharos.rules import PharosRules
from .statue.rules import StatueRules
from .gardens.rules import GardensRules

GAMES: dict[str, type[RuleSet]] = {
    rules.game_id: rules
    for rules in (
        ColossusRules, PyramidRules, TempleRules, MausoleumRules,
        PharosRules, StatueRules, GardensRules,
    )
}

_instances: dict[str, RuleSet] = {}


def get_rules(game_id: str) -> RuleSet:
    """Shared RuleSet instance for a game id. Raises ValueError if unknown."""
    if game_id not in GAMES:
        raise ValueError(f"Unknown game: {game_id}. Available: {', '.join(GAMES)}")
    if game_id not in _instances:
        _instances[game_id] = GAMES[game_id]()
    return _instances[game_id]


def available_games() -> list[RuleSet]:
    return [get_rules(game_id) for game_id in GAMES]
