"""Floor graph construction from location and connection records."""

from __future__ import annotations

import logging
import math
from typing import Iterable, NamedTuple

from clinicpath.models import Connection, Floor, Location

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class Edge(NamedTuple):
    """Directed half of a corridor segment."""

    neighbor_id: str
    cost: float


FloorGraph = dict[str, list[Edge]]


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def manhattan_distance(a: Point, b: Point) -> float:
    return abs(b[0] - a[0]) + abs(b[1] - a[1])


def build_floor_graph(locations: Iterable[Location], connections: Iterable[Connection]) -> FloorGraph:
    """Build an undirected adjacency mapping for one floor.

    Args:
        locations: Floor locations. On duplicate ids the first one wins.
        connections: Corridor segments. Explicit `distance` is used as the edge
            cost, otherwise the Euclidean distance between both endpoints.

    Returns:
        Mapping of every location id to its `(neighbor_id, cost)` edges, in
        connection order. Isolated locations map to an empty list.
    """
    by_id: dict[str, Location] = {}
    for loc in locations:
        by_id.setdefault(loc.id, loc)

    graph: FloorGraph = {loc_id: [] for loc_id in by_id}

    for idx, conn in enumerate(connections):
        a = by_id.get(conn.from_id)
        b = by_id.get(conn.to_id)
        if a is None or b is None:
            missing = conn.from_id if a is None else conn.to_id
            logger.warning(
                "Dropping connection %d (%s -> %s): unknown location '%s'",
                idx,
                conn.from_id,
                conn.to_id,
                missing,
            )
            continue
        if a.id == b.id:
            continue

        cost = float(conn.distance) if conn.distance is not None else euclidean_distance(a.position, b.position)
        graph[a.id].append(Edge(b.id, cost))
        graph[b.id].append(Edge(a.id, cost))

    return graph


def compute_graph(floor: Floor) -> FloorGraph:
    """Build the graph of a single floor."""
    return build_floor_graph(floor.locations, floor.connections)


def path_cost(graph: FloorGraph, path: list[str]) -> float:
    """Sum the cheapest edge cost between consecutive path ids.

    Raises:
        ValueError: If two consecutive ids are not connected.
    """
    total = 0.0
    for current, nxt in zip(path, path[1:]):
        costs = [edge.cost for edge in graph.get(current, []) if edge.neighbor_id == nxt]
        if not costs:
            raise ValueError(f"No edge between '{current}' and '{nxt}'")
        total += min(costs)
    return total
