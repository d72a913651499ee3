"""Graph primitives.

This package provides the road graph store `RoadGraph` and the readers-writer
lock `SharedLock` the router uses to share it between requests.
"""

from roadroute.graph.lock import SharedLock
from roadroute.graph.road_graph import RoadGraph

__all__ = ["RoadGraph", "SharedLock"]
