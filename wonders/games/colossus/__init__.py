"""
Colossus - run and push on a cross-shaped board; arrow fields tilt the board.
"""

from .rules import ColossusRules

__all__ = ["ColossusRules"]
