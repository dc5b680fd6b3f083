"""
Gardens - sow stacks of discs across the fields and into your High Garden.
"""

from .rules import GardensRules

__all__ = ["GardensRules"]
