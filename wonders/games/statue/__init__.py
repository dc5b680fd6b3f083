"""
Statue - place, stride and diminish dice; capture dice showing more than one pip.
"""

from .rules import StatueRules

__all__ = ["StatueRules"]
