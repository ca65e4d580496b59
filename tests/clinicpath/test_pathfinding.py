"""Unit tests for clinicpath.pathfinding."""

from __future__ import annotations

import random

import pytest

from clinicpath.graph import Edge, FloorGraph, build_floor_graph, compute_graph, path_cost
from clinicpath.models import Connection, Floor, Location
from clinicpath.pathfinding import Heuristic, Strategy, find_path, shortest_path_result


def _brute_force_min_cost(graph: FloorGraph, start: str, goal: str) -> float | None:
    """Cheapest simple path cost by exhaustive DFS."""
    best: float | None = None
    stack: list[tuple[str, float, frozenset[str]]] = [(start, 0.0, frozenset([start]))]
    while stack:
        node, cost, seen = stack.pop()
        if node == goal:
            best = cost if best is None else min(best, cost)
            continue
        for neighbor, step in graph[node]:
            if neighbor not in seen:
                stack.append((neighbor, cost + step, seen | {neighbor}))
    return best


def _random_floor(seed: int, size: int = 7) -> tuple[list[Location], list[Connection]]:
    rng = random.Random(seed)
    locations = [Location(f"n{i}", f"Node {i}", rng.uniform(0, 100), rng.uniform(0, 100)) for i in range(size)]
    connections = []
    for i in range(size):
        for j in range(i + 1, size):
            if rng.random() < 0.4:
                connections.append(Connection(f"n{i}", f"n{j}"))
    return locations, connections


def test_two_hop_route(triangle_floor: Floor) -> None:
    result = shortest_path_result(compute_graph(triangle_floor), "main-entrance", "pharmacy")

    assert result.path == ["main-entrance", "reception", "pharmacy"]
    assert result.cost == pytest.approx(20.0)


def test_shorter_direct_edge_wins(triangle_floor: Floor) -> None:
    triangle_floor.connections.append(Connection("main-entrance", "pharmacy", 5))
    result = shortest_path_result(compute_graph(triangle_floor), "main-entrance", "pharmacy")

    assert result.path == ["main-entrance", "pharmacy"]
    assert result.cost == pytest.approx(5.0)


def test_same_start_and_goal_is_trivial(triangle_floor: Floor) -> None:
    result = shortest_path_result(compute_graph(triangle_floor), "reception", "reception")

    assert result.path == ["reception"]
    assert result.cost == 0.0


def test_unknown_ids_return_empty(triangle_floor: Floor) -> None:
    graph = compute_graph(triangle_floor)

    assert find_path(graph, "main-entrance", "does-not-exist") == []
    assert find_path(graph, "does-not-exist", "main-entrance") == []
    assert find_path(graph, "does-not-exist", "does-not-exist") == []


def test_disconnected_graph_returns_empty() -> None:
    locations = [Location("a", "A", 0, 0), Location("b", "B", 1, 0), Location("c", "C", 5, 5)]
    graph = build_floor_graph(locations, [Connection("a", "b")])

    positions = {loc.id: loc.position for loc in locations}

    assert find_path(graph, "a", "c") == []
    assert find_path(graph, "a", "c", strategy=Strategy.ASTAR, positions=positions) == []


def test_equal_cost_ties_prefer_smallest_id() -> None:
    """Diamond with two equal routes should always go through 'b'."""
    locations = [Location(i, i.upper(), 0, 0) for i in ("a", "b", "c", "d")]
    forward = [Connection("a", "b", 1), Connection("a", "c", 1), Connection("b", "d", 1), Connection("c", "d", 1)]
    reverse = list(reversed(forward))

    assert find_path(build_floor_graph(locations, forward), "a", "d") == ["a", "b", "d"]
    assert find_path(build_floor_graph(locations, reverse), "a", "d") == ["a", "b", "d"]


def test_input_graph_is_not_mutated(triangle_floor: Floor) -> None:
    graph = compute_graph(triangle_floor)
    snapshot = {key: list(edges) for key, edges in graph.items()}

    find_path(graph, "main-entrance", "pharmacy")

    assert graph == snapshot


def test_negative_cost_raises() -> None:
    graph: FloorGraph = {"a": [Edge("b", -1.0)], "b": [Edge("a", -1.0)]}
    with pytest.raises(ValueError, match="Negative edge cost"):
        find_path(graph, "a", "b")


@pytest.mark.parametrize("seed", range(12))
def test_dijkstra_matches_brute_force(seed: int) -> None:
    locations, connections = _random_floor(seed)
    graph = build_floor_graph(locations, connections)

    for goal in ("n3", "n6"):
        expected = _brute_force_min_cost(graph, "n0", goal)
        result = shortest_path_result(graph, "n0", goal)
        if expected is None:
            assert result.path == []
        else:
            assert result.cost == pytest.approx(expected)
            assert path_cost(graph, result.path) == pytest.approx(expected)


@pytest.mark.parametrize("seed", range(12))
def test_astar_euclidean_matches_dijkstra(seed: int) -> None:
    locations, connections = _random_floor(seed)
    graph = build_floor_graph(locations, connections)
    positions = {loc.id: loc.position for loc in locations}

    dijkstra = shortest_path_result(graph, "n0", "n5")
    astar = shortest_path_result(
        graph,
        "n0",
        "n5",
        strategy=Strategy.ASTAR,
        positions=positions,
        heuristic=Heuristic.EUCLIDEAN,
    )

    assert astar.found == dijkstra.found
    assert astar.cost == pytest.approx(dijkstra.cost)


def test_astar_without_positions_behaves_like_dijkstra(triangle_floor: Floor) -> None:
    graph = compute_graph(triangle_floor)

    assert find_path(graph, "main-entrance", "pharmacy", strategy=Strategy.ASTAR) == [
        "main-entrance",
        "reception",
        "pharmacy",
    ]


def test_astar_manhattan_on_axis_aligned_corridors() -> None:
    """Manhattan estimates are exact on axis-aligned corridors."""
    locations = [
        Location("a", "A", 0, 0),
        Location("b", "B", 10, 0),
        Location("c", "C", 10, 10),
        Location("d", "D", 0, 10),
    ]
    connections = [Connection("a", "b"), Connection("b", "c"), Connection("a", "d"), Connection("d", "c")]
    graph = build_floor_graph(locations, connections)
    positions = {loc.id: loc.position for loc in locations}

    result = shortest_path_result(
        graph,
        "a",
        "c",
        strategy=Strategy.ASTAR,
        positions=positions,
        heuristic=Heuristic.MANHATTAN,
    )

    assert result.path == ["a", "b", "c"]
    assert result.cost == pytest.approx(20.0)
