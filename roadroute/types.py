"""Core value types shared by the graph store, search and façade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

#: Externally assigned junction identifier.
JunctionID = int

#: Identifier of a road (one mirrored pair of directed edges).
RoadID = int

#: Identifier of a single directed edge inside the graph store.
EdgeID = int

#: Traversal cost in minutes.
Cost = Union[int, float]


@dataclass(frozen=True)
class Edge:
    """Snapshot of one directed arc as seen from its tail junction.

    Attributes:
        to: Target junction id.
        distance: Physical length in km; never used for routing.
        base_time: Nominal traversal time in minutes, fixed at insertion.
        current_time: Traversal time used for routing right now.
        road: Road this arc belongs to.
    """

    to: JunctionID
    distance: float
    base_time: float
    current_time: float
    road: RoadID

    @property
    def multiplier(self) -> float:
        """Congestion factor currently applied (1.0 for a zero base time)."""
        if self.base_time == 0:
            return 1.0
        return self.current_time / self.base_time


@dataclass(frozen=True)
class Road:
    """Snapshot of an undirected road between two junctions."""

    id: RoadID
    a: JunctionID
    b: JunctionID
    distance: float
    base_time: float
    current_time: float
