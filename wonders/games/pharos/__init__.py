"""
Pharos - every step needs light; light beacons to gain more of it.
"""

from .rules import PharosRules

__all__ = ["PharosRules"]
