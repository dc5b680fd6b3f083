"""
Board Topology - Cells, adjacency, straight-line rays and zone tags.

A Topology is a node-id arena built once per game:
- Every cell has an integer index and a hashable key (e.g. (row, col))
- Adjacency is an explicit, symmetric table built at construction
- Rays follow a direction by vector continuation over layout positions,
  so non-rectangular boards (temple, mausoleum) work the same as grids
- Zones are free-form tags: arrows, beacons, victory corners, gardens

Malformed tables raise TopologyError at construction time.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Sequence


EPSILON = 0.01


class TopologyError(ValueError):
    """Static board data is malformed."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


@dataclass
class Node:
    """A single playable cell."""
    index: int
    key: Hashable
    position: tuple[float, float]
    zones: dict[str, Any] = field(default_factory=dict)


class Topology:
    """
    Fixed board shape: nodes, adjacency and rays.

    Read-only once built; shared by every state of a session.
    """

    def __init__(self, name: str, nodes: list[Node], adjacency: list[list[int]]):
        self.name = name
        self.nodes = nodes
        self._adjacency = [tuple(neighbors) for neighbors in adjacency]
        self._index: dict[Hashable, int] = {}
        for node in nodes:
            self._index.setdefault(node.key, node.index)
        self._rays: dict[int, tuple[tuple[int, ...], ...]] = {}

        errors = validate_topology(self)
        if errors:
            raise TopologyError(f"Invalid topology '{name}': {errors[0]}", errors)

    @classmethod
    def from_edges(
        cls,
        name: str,
        cells: Sequence[tuple[Hashable, tuple[float, float], dict[str, Any]]],
        edges: Iterable[tuple[Hashable, Hashable]],
    ) -> Topology:
        """
        Build a topology from (key, position, zones) cells and key pairs.

        Each edge is added in both directions.
        """
        nodes = [
            Node(index=i, key=key, position=position, zones=dict(zones))
            for i, (key, position, zones) in enumerate(cells)
        ]
        index = {node.key: node.index for node in nodes}
        adjacency: list[list[int]] = [[] for _ in nodes]
        for a, b in edges:
            if a not in index or b not in index:
                raise TopologyError(
                    f"Invalid topology '{name}': edge {a!r}-{b!r} references an unknown cell"
                )
            i, j = index[a], index[b]
            if j not in adjacency[i]:
                adjacency[i].append(j)
            if i not in adjacency[j]:
                adjacency[j].append(i)
        return cls(name, nodes, adjacency)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    def index(self, key: Hashable) -> int:
        """Node index for a key. Raises KeyError for unknown keys."""
        try:
            return self._index[key]
        except KeyError:
            raise KeyError(f"Unknown cell: {key!r}") from None

    def key(self, cell: int) -> Hashable:
        return self.nodes[cell].key

    def resolve(self, cell: int | Hashable) -> int:
        """Accept a node index or a key; return the node index."""
        if isinstance(cell, int) and not isinstance(cell, bool):
            if 0 <= cell < len(self.nodes):
                return cell
            raise KeyError(f"Unknown cell: {cell!r}")
        if isinstance(cell, list):
            cell = tuple(cell)
        return self.index(cell)

    def neighbors(self, cell: int) -> tuple[int, ...]:
        return self._adjacency[cell]

    def position(self, cell: int) -> tuple[float, float]:
        return self.nodes[cell].position

    def zone(self, cell: int, tag: str, default: Any = None) -> Any:
        return self.nodes[cell].zones.get(tag, default)

    def tagged(self, tag: str) -> list[int]:
        """All cells carrying a zone tag, in node order."""
        return [node.index for node in self.nodes if tag in node.zones]

    def step(self, cell: int, delta: tuple[int, ...]) -> int | None:
        """Offset a tuple key by delta; None when the result is not a cell."""
        key = self.nodes[cell].key
        target = tuple(a + b for a, b in zip(key, delta))
        return self._index.get(target)

    def next_on_line(self, previous: int, current: int) -> int | None:
        """Neighbour of `current` continuing the direction previous -> current."""
        px, py = self.position(previous)
        cx, cy = self.position(current)
        dx, dy = cx - px, cy - py
        for candidate in self._adjacency[current]:
            if candidate == previous:
                continue
            nx, ny = self.position(candidate)
            if abs(nx - cx - dx) < EPSILON and abs(ny - cy - dy) < EPSILON:
                return candidate
        return None

    def rays_from(self, cell: int) -> tuple[tuple[int, ...], ...]:
        """
        Straight lines leaving a cell, one per neighbour.

        Each ray starts at the neighbour and follows the same direction
        until the board ends.
        """
        rays = self._rays.get(cell)
        if rays is None:
            built = []
            for first in self._adjacency[cell]:
                ray = [first]
                previous, current = cell, first
                while True:
                    following = self.next_on_line(previous, current)
                    if following is None or following in ray:
                        break
                    ray.append(following)
                    previous, current = current, following
                built.append(tuple(ray))
            rays = tuple(built)
            self._rays[cell] = rays
        return rays

    def ray_towards(self, cell: int, neighbor: int) -> tuple[int, ...]:
        """The ray from `cell` whose first step is `neighbor`."""
        for ray in self.rays_from(cell):
            if ray[0] == neighbor:
                return ray
        return ()


def validate_topology(topology: Topology) -> list[str]:
    """
    Check the static tables of a topology.

    Returns a list of error messages (empty if valid).
    """
    errors = []
    seen: set[Hashable] = set()
    for i, node in enumerate(topology.nodes):
        if node.index != i:
            errors.append(f"Node {node.key!r} has index {node.index}, expected {i}")
        if node.key in seen:
            errors.append(f"Duplicate cell key: {node.key!r}")
        seen.add(node.key)

    count = len(topology.nodes)
    if len(topology._adjacency) != count:
        errors.append(f"Adjacency table has {len(topology._adjacency)} rows for {count} nodes")
        return errors

    for i, neighbors in enumerate(topology._adjacency):
        for j in neighbors:
            if not 0 <= j < count:
                errors.append(f"Cell {topology.nodes[i].key!r} links to missing node {j}")
            elif j == i:
                errors.append(f"Cell {topology.nodes[i].key!r} links to itself")
            elif i not in topology._adjacency[j]:
                errors.append(
                    f"Asymmetric link {topology.nodes[i].key!r} -> {topology.nodes[j].key!r}"
                )
    return errors


def grid_topology(
    name: str,
    rows: int,
    cols: int,
    active: Any = None,
    zones: dict[tuple[int, int], dict[str, Any]] | None = None,
) -> Topology:
    """
    Build a 4-adjacency grid keyed by (row, col).

    `active(r, c)` filters playable cells (default: all). Positions are
    (col, row) so rays follow rows and columns.
    """
    zones = zones or {}
    cells = []
    for r in range(rows):
        for c in range(cols):
            if active is None or active(r, c):
                cells.append(((r, c), (float(c), float(r)), zones.get((r, c), {})))

    keys = {key for key, _, _ in cells}
    edges = []
    for (r, c), _, _ in cells:
        if (r, c + 1) in keys:
            edges.append(((r, c), (r, c + 1)))
        if (r + 1, c) in keys:
            edges.append(((r, c), (r + 1, c)))
    return Topology.from_edges(name, cells, edges)
