"""Road graph: mirrored directed edges with base and current travel times.

`RoadGraph` extends `networkx.MultiDiGraph`. Every road inserted with
`add_road()` becomes exactly two directed edges, one per direction, that share
a road id, a distance and a base time. The routing weight ``current_time`` is
always recomputed from the immutable ``base_time`` so repeated traffic
updates never compound.
"""

from __future__ import annotations

from pickle import dumps, loads
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from roadroute.logging import get_logger
from roadroute.types import Edge, EdgeID, JunctionID, Road, RoadID

logger = get_logger(__name__)

#: ``(from, to, forward_edge, reverse_edge)`` for one road.
RoadTuple = Tuple[JunctionID, JunctionID, EdgeID, EdgeID]

DISTANCE = "distance"
BASE_TIME = "base_time"
CURRENT_TIME = "current_time"
ROAD = "road"


class RoadGraph(nx.MultiDiGraph):
    """A multi-directed graph whose edges come in mirrored road pairs.

    This class enforces:
      - Edges are only created through ``add_road()``, two at a time.
      - Junctions are created implicitly by the first road that touches them.
      - Edge keys are unique monotonically increasing integers.
      - ``current_time`` is written only as ``base_time * multiplier``.

    The graph holds no lock; callers that share it across threads go through
    ``roadroute.router.Router``.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize an empty RoadGraph.

        Attributes:
            _roads: Map road id to ``(from, to, forward_edge, reverse_edge)``.
        """
        super().__init__(*args, **kwargs)
        self._roads: Dict[RoadID, RoadTuple] = {}
        self._next_edge_id: EdgeID = 0
        self._next_road_id: RoadID = 0

    def new_edge_key(self, u: JunctionID, v: JunctionID, key: Optional[int] = None) -> int:  # type: ignore[override]
        """Return a new unique integer edge id.

        Signature matches NetworkX's ``new_edge_key(self, u, v, key=None)``.
        """
        next_edge_id = self._next_edge_id
        self._next_edge_id += 1
        return next_edge_id

    def add_edge(self, u_for_edge, v_for_edge, key=None, **attr):  # type: ignore[override]
        """Disallowed: a lone directed edge would break road symmetry.

        Raises:
            TypeError: Always. Use ``add_road()``.
        """
        raise TypeError("RoadGraph edges are created in pairs; use add_road().")

    def copy(self, as_view: bool = False) -> RoadGraph:  # type: ignore[override]
        """Return an independent deep copy of this graph.

        NetworkX's own copy re-adds edges one by one, which ``add_edge()``
        forbids here, so the copy goes through pickle instead.

        Args:
            as_view: Not supported; must be False.
        """
        if as_view:
            raise ValueError("RoadGraph does not support copy views.")
        return loads(dumps(self))

    #
    # Road management
    #
    def add_road(
        self,
        u: JunctionID,
        v: JunctionID,
        distance: float,
        base_time: float,
    ) -> RoadID:
        """Add an undirected road as two mirrored directed edges.

        Both junctions are created if they are not in the graph yet. The
        weights are stored as given; validation belongs to the caller.

        Args:
            u: One end of the road.
            v: The other end of the road. May equal ``u``.
            distance: Length in km.
            base_time: Free-flow traversal time in minutes.

        Returns:
            RoadID: Identifier of the new road.
        """
        road_id = self._next_road_id
        self._next_road_id += 1

        forward = self.new_edge_key(u, v)
        reverse = self.new_edge_key(v, u)
        attrs = {
            DISTANCE: distance,
            BASE_TIME: base_time,
            CURRENT_TIME: base_time,
            ROAD: road_id,
        }
        super().add_edge(u, v, key=forward, **attrs)
        super().add_edge(v, u, key=reverse, **attrs)
        self._roads[road_id] = (u, v, forward, reverse)

        logger.debug(
            f"Added road {road_id}: {u} <-> {v} ({distance}km, {base_time}min)"
        )
        return road_id

    def find_road(self, u: JunctionID, v: JunctionID) -> Optional[RoadID]:
        """Return the earliest inserted road joining ``u`` and ``v``.

        Orientation does not matter: a road added as ``(v, u)`` is found too.

        Returns:
            Optional[RoadID]: Road id, or None when the pair has no road.
        """
        if u not in self.succ or v not in self.succ[u]:
            return None
        edge_keys = self.succ[u][v]
        if not edge_keys:
            return None
        first_key = min(edge_keys)
        return edge_keys[first_key][ROAD]

    def set_multiplier(self, road_id: RoadID, multiplier: float) -> None:
        """Set both directions of a road to ``base_time * multiplier``.

        Raises:
            KeyError: If the road id is unknown.
        """
        u, v, forward, reverse = self._roads[road_id]
        for src, dst, key in ((u, v, forward), (v, u, reverse)):
            attr = self.succ[src][dst][key]
            attr[CURRENT_TIME] = attr[BASE_TIME] * multiplier

        logger.debug(f"Updated traffic on road {road_id}: {u} <-> {v} (x{multiplier})")

    def reset_traffic(self) -> None:
        """Restore every edge's current time to its base time."""
        for _, _, attr in self.edges(data=True):
            attr[CURRENT_TIME] = attr[BASE_TIME]
        logger.debug("All traffic reset to base times")

    #
    # Read-only views
    #
    def neighbors_of(self, node: JunctionID) -> Iterator[Edge]:
        """Yield outgoing edges of ``node`` in insertion order.

        Unknown junctions yield nothing.
        """
        if node not in self.succ:
            return
        outgoing: List[Tuple[EdgeID, JunctionID, Dict[str, Any]]] = [
            (key, dst, attr)
            for dst, keyed in self.succ[node].items()
            for key, attr in keyed.items()
        ]
        outgoing.sort(key=lambda item: item[0])
        for _, dst, attr in outgoing:
            yield _edge_from_attr(dst, attr)

    def get_road(self, road_id: RoadID) -> Road:
        """Return a snapshot of one road.

        Raises:
            KeyError: If the road id is unknown.
        """
        u, v, forward, _ = self._roads[road_id]
        attr = self.succ[u][v][forward]
        return Road(
            id=road_id,
            a=u,
            b=v,
            distance=attr[DISTANCE],
            base_time=attr[BASE_TIME],
            current_time=attr[CURRENT_TIME],
        )

    def get_roads(self) -> List[Road]:
        """Return snapshots of all roads in insertion order."""
        return [self.get_road(road_id) for road_id in self._roads]

    def edge_pair(self, road_id: RoadID) -> Tuple[Edge, Edge]:
        """Return the ``(forward, reverse)`` edge snapshots of a road."""
        u, v, forward, reverse = self._roads[road_id]
        return (
            _edge_from_attr(v, self.succ[u][v][forward]),
            _edge_from_attr(u, self.succ[v][u][reverse]),
        )

    @property
    def road_count(self) -> int:
        return len(self._roads)


def _edge_from_attr(dst: JunctionID, attr: Dict[str, Any]) -> Edge:
    return Edge(
        to=dst,
        distance=attr[DISTANCE],
        base_time=attr[BASE_TIME],
        current_time=attr[CURRENT_TIME],
        road=attr[ROAD],
    )
