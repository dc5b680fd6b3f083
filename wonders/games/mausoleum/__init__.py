"""
Mausoleum - slide stones across a hex board and encircle the opponent.
"""

from .rules import MausoleumRules

__all__ = ["MausoleumRules"]
