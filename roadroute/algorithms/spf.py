"""Shortest-path-first (SPF) search over current travel times.

Implements Dijkstra on the ``current_time`` edge attribute of a
:class:`~roadroute.graph.RoadGraph`. Base times and distances are never
consulted for routing.

Notes:
    When a destination is given the search stops the moment the destination
    is popped from the frontier at its settled distance. This is only valid
    because every current time is non-negative, which the router enforces.
    Between parallel roads joining the same pair, the one with the lowest
    current time is relaxed.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Optional, Tuple

from roadroute.graph.road_graph import CURRENT_TIME, DISTANCE, RoadGraph
from roadroute.route import Route
from roadroute.types import Cost, EdgeID, JunctionID

#: For each reached junction, the ``(previous junction, edge id)`` it was reached by.
Pred = Dict[JunctionID, Tuple[JunctionID, EdgeID]]


def spf(
    graph: RoadGraph,
    src_node: JunctionID,
    dst_node: Optional[JunctionID] = None,
) -> Tuple[Dict[JunctionID, Cost], Pred]:
    """Compute least current-time costs from a source junction.

    Args:
        graph: Road graph to search. Read only.
        src_node: Source junction.
        dst_node: Optional destination. If provided, the search terminates as
            soon as ``dst_node`` is popped at minimal distance; costs of other
            junctions may then be incomplete.

    Returns:
        tuple[dict[JunctionID, Cost], dict[JunctionID, tuple[JunctionID, EdgeID]]]:
            Costs of reached junctions and the predecessor mapping. The source
            has cost 0 and no predecessor entry.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    outgoing_adjacencies = graph._adj  # type: ignore[attr-defined]
    if src_node not in outgoing_adjacencies:
        raise KeyError(f"Source junction '{src_node}' is not in the graph.")

    costs: Dict[JunctionID, Cost] = {src_node: 0.0}
    pred: Pred = {}
    min_pq: List[Tuple[Cost, JunctionID]] = [(0.0, src_node)]

    while min_pq:
        current_cost, node_id = heappop(min_pq)
        if current_cost > costs[node_id]:
            continue

        if dst_node is not None and node_id == dst_node:
            break

        for neighbor_id, edges_map in outgoing_adjacencies[node_id].items():
            min_edge_cost: Optional[Cost] = None
            selected_edge: Optional[EdgeID] = None

            # Cheapest of the parallel roads towards this neighbour
            for e_id, e_attr in edges_map.items():
                edge_cost = e_attr[CURRENT_TIME]
                if min_edge_cost is None or edge_cost < min_edge_cost:
                    min_edge_cost = edge_cost
                    selected_edge = e_id

            if min_edge_cost is None or selected_edge is None:
                continue

            new_cost = current_cost + min_edge_cost
            if (neighbor_id not in costs) or (new_cost < costs[neighbor_id]):
                costs[neighbor_id] = new_cost
                pred[neighbor_id] = (node_id, selected_edge)
                heappush(min_pq, (new_cost, neighbor_id))

    return costs, pred


def resolve_path(
    src_node: JunctionID, dst_node: JunctionID, pred: Pred
) -> List[Tuple[JunctionID, Optional[EdgeID]]]:
    """Walk predecessors back from ``dst_node`` and return the forward path.

    Each element is ``(junction, edge used to leave it)``; the last element
    carries ``None``. Returns an empty list when ``dst_node`` was not reached.
    """
    if dst_node != src_node and dst_node not in pred:
        return []

    reversed_path: List[Tuple[JunctionID, Optional[EdgeID]]] = [(dst_node, None)]
    current = dst_node
    while current != src_node:
        prev, edge_id = pred[current]
        reversed_path.append((prev, edge_id))
        current = prev
    reversed_path.reverse()
    return reversed_path


def shortest_path(graph: RoadGraph, src_node: JunctionID, dst_node: JunctionID) -> Route:
    """Return the minimum current-time route between two junctions.

    Args:
        graph: Road graph to search.
        src_node: Source junction; must exist in ``graph``.
        dst_node: Destination junction.

    Returns:
        Route: The route, or ``Route.unreachable()`` if no path exists.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    if src_node not in graph:
        raise KeyError(f"Source junction '{src_node}' is not in the graph.")
    if src_node == dst_node:
        return Route.trivial(src_node)

    costs, pred = spf(graph, src_node, dst_node=dst_node)
    steps = resolve_path(src_node, dst_node, pred)
    if not steps:
        return Route.unreachable()

    total_km = 0.0
    for (node, edge_id), (next_node, _) in zip(steps, steps[1:]):
        total_km += graph.succ[node][next_node][edge_id][DISTANCE]

    return Route(
        path=tuple(node for node, _ in steps),
        total_minutes=costs[dst_node],
        total_km=total_km,
    )
