"""Routing façade over the shared road graph.

`Router` is the only object transports talk to. It validates inputs, guards
the graph with a readers-writer lock, and translates graph and search
outcomes into :mod:`roadroute.errors`. Callers only ever see junction ids,
:class:`~roadroute.route.Route` values, :class:`~roadroute.types.Road`
snapshots, or a ``RoutingError``.

Example:
    router = Router()
    router.add_road(1, 2, 3.5, 8)
    router.add_road(2, 3, 5.2, 12)
    router.update_traffic(1, 2, 2.0)
    route = router.find_shortest_path(1, 3)  # path (1, 2, 3), 28.0 minutes
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from roadroute.algorithms.spf import shortest_path
from roadroute.errors import (
    InvalidJunction,
    InvalidMultiplier,
    InvalidWeight,
    NoRoute,
    RoadNotFound,
    UnknownJunction,
)
from roadroute.graph.lock import SharedLock
from roadroute.graph.road_graph import RoadGraph
from roadroute.logging import get_logger
from roadroute.route import Route
from roadroute.types import Edge, JunctionID, Road, RoadID

logger = get_logger(__name__)


def _check_weight(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidWeight(
            f"{name} must be a number, got {value!r}.", {name: value}
        ) from None
    if not math.isfinite(number) or number < 0:
        raise InvalidWeight(
            f"{name} must be a finite non-negative number, got {value!r}.",
            {name: value},
        )
    return number


def _check_junction(junction: JunctionID) -> JunctionID:
    # bool is an int subclass but never a junction id
    if isinstance(junction, bool) or not isinstance(junction, int):
        raise InvalidJunction(junction)
    return junction


def check_multiplier(multiplier: float) -> float:
    """Return ``multiplier`` as a float if it is finite and strictly positive.

    Raises:
        InvalidMultiplier: Otherwise.
    """
    try:
        number = float(multiplier)
    except (TypeError, ValueError):
        raise InvalidMultiplier(
            f"Traffic multiplier must be a number, got {multiplier!r}.",
            {"multiplier": multiplier},
        ) from None
    if not math.isfinite(number) or number <= 0:
        raise InvalidMultiplier(
            f"Traffic multiplier must be a finite number greater than 0, got {multiplier!r}.",
            {"multiplier": multiplier},
        )
    return number


class Router:
    """Thread-safe traffic-aware router.

    Searches run under the shared side of the lock and see one consistent
    set of edge weights; insertions and traffic changes take the exclusive
    side, so a road's two directions always change together.

    Args:
        graph: Optional pre-built graph to take ownership of. A new empty
            graph is created when omitted.
    """

    def __init__(self, graph: Optional[RoadGraph] = None) -> None:
        self._graph = graph if graph is not None else RoadGraph()
        self._lock = SharedLock()

    #
    # Mutations
    #
    def add_road(
        self,
        from_id: JunctionID,
        to_id: JunctionID,
        distance_km: float,
        base_minutes: float,
    ) -> RoadID:
        """Insert a road between two junctions.

        Raises:
            InvalidJunction: If either id is not an integer.
            InvalidWeight: If distance or base time is negative or not finite.
        """
        _check_junction(from_id)
        _check_junction(to_id)
        distance = _check_weight("distance", distance_km)
        base_time = _check_weight("base_time", base_minutes)
        with self._lock.write():
            return self._graph.add_road(from_id, to_id, distance, base_time)

    def add_roads(
        self, roads: List[Tuple[JunctionID, JunctionID, float, float]]
    ) -> List[RoadID]:
        """Insert several roads; all are validated before any is added."""
        checked = [
            (
                _check_junction(u),
                _check_junction(v),
                _check_weight("distance", d),
                _check_weight("base_time", t),
            )
            for u, v, d, t in roads
        ]
        with self._lock.write():
            return [self._graph.add_road(u, v, d, t) for u, v, d, t in checked]

    def update_traffic(
        self, from_id: JunctionID, to_id: JunctionID, multiplier: float
    ) -> None:
        """Apply a congestion multiplier to the road between two junctions.

        Both directions become ``base_time * multiplier``. Applying the same
        multiplier twice leaves the times unchanged.

        Raises:
            InvalidMultiplier: If multiplier is not finite and > 0, or if the
                resulting travel time overflows to infinity or underflows to
                zero on a road with a positive base time.
            RoadNotFound: If no road joins the two junctions.
        """
        factor = check_multiplier(multiplier)
        with self._lock.write():
            road_id = self._graph.find_road(from_id, to_id)
            if road_id is None:
                raise RoadNotFound(from_id, to_id)
            base_time = self._graph.get_road(road_id).base_time
            current_time = base_time * factor
            if not math.isfinite(current_time) or (current_time == 0 and base_time > 0):
                raise InvalidMultiplier(
                    f"Traffic multiplier {multiplier!r} gives an unusable travel time "
                    f"on a {base_time}-minute road.",
                    {"multiplier": multiplier, "base_time": base_time},
                )
            self._graph.set_multiplier(road_id, factor)
        logger.info(f"Traffic on {from_id} <-> {to_id} set to x{factor}")

    def reset_traffic(self) -> None:
        """Restore every road to its base travel time."""
        with self._lock.write():
            self._graph.reset_traffic()
        logger.info("All traffic reset to normal")

    #
    # Queries
    #
    def find_shortest_path(self, source: JunctionID, destination: JunctionID) -> Route:
        """Return the fastest route under current traffic.

        Raises:
            UnknownJunction: If either id has never appeared in a road.
            NoRoute: If both are known but not connected.
        """
        with self._lock.read():
            for junction in (source, destination):
                if junction not in self._graph:
                    raise UnknownJunction(junction)
            route = shortest_path(self._graph, source, destination)

        if not route.reachable:
            logger.debug(f"No path found: {source} -> {destination}")
            raise NoRoute(source, destination)

        logger.debug(
            f"Path found {source} -> {destination}: "
            f"{list(route.path)} in {route.total_minutes} minutes"
        )
        return route

    def neighbors(self, junction: JunctionID) -> List[Edge]:
        """Outgoing edge snapshots of a junction; empty for unknown ids."""
        with self._lock.read():
            return list(self._graph.neighbors_of(junction))

    def roads(self) -> List[Road]:
        """Snapshots of every road in insertion order."""
        with self._lock.read():
            return self._graph.get_roads()

    def junction_ids(self) -> List[JunctionID]:
        with self._lock.read():
            return sorted(self._graph.nodes)

    def has_junction(self, junction: JunctionID) -> bool:
        with self._lock.read():
            return junction in self._graph

    @property
    def junction_count(self) -> int:
        with self._lock.read():
            return self._graph.number_of_nodes()

    @property
    def road_count(self) -> int:
        with self._lock.read():
            return self._graph.road_count
