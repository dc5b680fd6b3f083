"""
Temple - walk forward, leap and capture, reach the opponent's Artemis field.
"""

from .rules import TempleRules

__all__ = ["TempleRules"]
