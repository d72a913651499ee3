"""roadroute: traffic-aware shortest-path routing over a road network.

Roads join junctions in both directions. Each road keeps an immutable base
travel time and a current travel time derived from the latest congestion
multiplier; routes are always computed on the current time.

Primary API:
    Router - Thread-safe façade: add roads, update traffic, find routes
    Route - Result of a route query (junction ids, minutes, km)
    RoadGraph - Underlying mirrored-edge graph store
    JunctionDirectory, Junction - Name and record lookup for junctions
    load_network() - Read a YAML/JSON network file

Example:
    from roadroute import Router

    router = Router()
    router.add_road(1, 2, 3.5, 8)
    router.add_road(2, 3, 5.2, 12)
    router.find_shortest_path(1, 3).total_minutes   # 20.0
    router.update_traffic(1, 2, 2.0)
    router.find_shortest_path(1, 3).total_minutes   # 28.0
"""

from __future__ import annotations

from roadroute import logging
from roadroute._version import __version__
from roadroute.errors import (
    InvalidJunction,
    InvalidMultiplier,
    InvalidWeight,
    NoRoute,
    RoadNotFound,
    RoutingError,
    UnknownJunction,
)
from roadroute.graph import RoadGraph
from roadroute.junctions import Junction, JunctionDirectory, JunctionNameIndex
from roadroute.loader import NetworkData, default_network_path, load_network
from roadroute.route import Route
from roadroute.router import Router
from roadroute.types import Edge, Road

__all__ = [
    # Version
    "__version__",
    # Core
    "Router",
    "Route",
    "RoadGraph",
    "Edge",
    "Road",
    # Errors
    "RoutingError",
    "InvalidJunction",
    "InvalidWeight",
    "InvalidMultiplier",
    "RoadNotFound",
    "UnknownJunction",
    "NoRoute",
    # Directory and loading
    "Junction",
    "JunctionDirectory",
    "JunctionNameIndex",
    "NetworkData",
    "load_network",
    "default_network_path",
    # Utilities
    "logging",
]
