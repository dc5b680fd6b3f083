"""
Wonders - Seven Wonders Board Game Rule Engine

A deterministic, rules-driven engine for seven two-player abstract strategy
games (Colossus, Pyramid, Temple, Mausoleum, Pharos, Statue, Gardens).
The engine provides:
- Board topology (cells, adjacency, rays, zones)
- Legal move generation per selected piece
- Move execution with cascading side effects
- Win / loss / draw evaluation
"""

__version__ = "0.1.0"
