"""
Pyramid - climb a four-level pyramid; descend to smash, push stones off the base.
"""

from .rules import PyramidRules

__all__ = ["PyramidRules"]
