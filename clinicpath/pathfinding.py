"""Shortest-path search over floor graphs.

Purpose:
- Compute minimum-cost location routes with Dijkstra or A*.
- Keep results reproducible through a fixed tie-breaking rule.

Tie-breaking: the frontier is a heap of `(priority, location_id)`, so among
entries with equal priority the lexicographically smallest id is expanded
first. A node keeps the first predecessor that reached it at its best cost.

Heuristics: Euclidean is admissible whenever edge costs are at least the
straight-line distance between their endpoints, which holds for computed
costs. Manhattan can overestimate on diagonal corridors and is kept only as
an opt-in approximation.

Usage example:
    >>> from clinicpath.graph import build_floor_graph
    >>> from clinicpath.pathfinding import find_path
    >>> find_path(graph, "main-entrance", "pharmacy")
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping

from clinicpath.graph import FloorGraph, Point, euclidean_distance, manhattan_distance


class Strategy(str, Enum):
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"


class Heuristic(str, Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"


_HEURISTICS: dict[Heuristic, Callable[[Point, Point], float]] = {
    Heuristic.EUCLIDEAN: euclidean_distance,
    Heuristic.MANHATTAN: manhattan_distance,
}


@dataclass(slots=True)
class PathResult:
    """Ordered location ids and their summed edge cost."""

    path: list[str]
    cost: float

    @property
    def found(self) -> bool:
        return bool(self.path)


def _make_estimate(
    goal_id: str,
    strategy: Strategy,
    positions: Mapping[str, Point] | None,
    heuristic: Heuristic,
) -> Callable[[str], float]:
    """Return remaining-cost estimate for a node (zero for Dijkstra)."""
    if strategy is Strategy.DIJKSTRA or not positions or goal_id not in positions:
        return lambda _node: 0.0

    distance = _HEURISTICS[heuristic]
    goal_pos = positions[goal_id]

    def estimate(node: str) -> float:
        pos = positions.get(node)
        if pos is None:
            return 0.0
        return distance(pos, goal_pos)

    return estimate


def shortest_path_result(
    graph: FloorGraph,
    start_id: str,
    goal_id: str,
    *,
    strategy: Strategy = Strategy.DIJKSTRA,
    positions: Mapping[str, Point] | None = None,
    heuristic: Heuristic = Heuristic.EUCLIDEAN,
) -> PathResult:
    """Compute the minimum-cost path and its cost.

    Args:
        graph: Floor adjacency from `build_floor_graph`. Not modified.
        start_id: Origin location id.
        goal_id: Destination location id.
        strategy: Dijkstra or A*; both return optimal paths with the
            Euclidean heuristic.
        positions: Location coordinates, required for an informed A*.
        heuristic: Distance estimate used by A*.

    Returns:
        `PathResult` with an empty path when either id is not in the graph or
        when the goal is unreachable.

    Raises:
        ValueError: If a negative edge cost is encountered.
    """
    if start_id not in graph or goal_id not in graph:
        return PathResult(path=[], cost=0.0)
    if start_id == goal_id:
        return PathResult(path=[start_id], cost=0.0)

    estimate = _make_estimate(goal_id, strategy, positions, heuristic)

    open_heap: list[tuple[float, str]] = []
    heapq.heappush(open_heap, (estimate(start_id), start_id))

    came_from: dict[str, str] = {}
    g_score: dict[str, float] = {start_id: 0.0}
    closed: set[str] = set()

    while open_heap:
        _, current = heapq.heappop(open_heap)

        if current in closed:
            continue

        if current == goal_id:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return PathResult(path=path, cost=g_score[goal_id])

        closed.add(current)

        for neighbor, step_cost in graph.get(current, []):
            if step_cost < 0:
                raise ValueError(f"Negative edge cost between '{current}' and '{neighbor}'")
            if neighbor in closed or neighbor not in graph:
                continue

            tentative_g = g_score[current] + step_cost
            if tentative_g < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                heapq.heappush(open_heap, (tentative_g + estimate(neighbor), neighbor))

    return PathResult(path=[], cost=0.0)


def find_path(
    graph: FloorGraph,
    start_id: str,
    goal_id: str,
    *,
    strategy: Strategy = Strategy.DIJKSTRA,
    positions: Mapping[str, Point] | None = None,
    heuristic: Heuristic = Heuristic.EUCLIDEAN,
) -> list[str]:
    """Return ordered location ids from start to goal, or `[]` if no path."""
    return shortest_path_result(
        graph,
        start_id,
        goal_id,
        strategy=strategy,
        positions=positions,
        heuristic=heuristic,
    ).path
