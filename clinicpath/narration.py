"""Turn location paths into walking directions and time estimates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from clinicpath.config import Settings, settings as default_settings
from clinicpath.graph import FloorGraph, euclidean_distance, path_cost
from clinicpath.models import Location

NO_ROUTE_MESSAGE = "No route found"
ROOM_NOT_SPECIFIED = "Room not specified"


class StepKind(str, Enum):
    START = "start"
    DESTINATION = "destination"
    TURN = "turn"
    STAIRS = "stairs"
    ELEVATOR = "elevator"
    STRAIGHT = "straight"


@dataclass(slots=True)
class Narration:
    """Directions for one path plus aggregate distance and time range."""

    steps: list[str]
    distance: float
    estimated_time: str


def path_distance(path: Sequence[Location], graph: FloorGraph | None = None) -> float:
    """Walking distance along `path`.

    Edge costs from `graph` are used when given so that narration agrees with
    the solver; otherwise consecutive Euclidean distances are summed.
    """
    if len(path) < 2:
        return 0.0
    if graph is not None:
        return path_cost(graph, [loc.id for loc in path])
    return sum(euclidean_distance(a.position, b.position) for a, b in zip(path, path[1:]))


def estimate_time(distance: float, config: Settings | None = None) -> str:
    """Format a `"{low}-{high} minutes"` range from two walking speeds."""
    cfg = config or default_settings
    if distance <= 0:
        return "0-0 minutes"
    low = max(1, math.ceil(distance / cfg.fast_walking_speed))
    high = max(low, math.ceil(distance / cfg.slow_walking_speed))
    return f"{low}-{high} minutes"


def _arrival(loc: Location) -> str:
    return f"Arrive at {loc.name} ({loc.room or ROOM_NOT_SPECIFIED})"


def narrate(
    path: Sequence[Location],
    *,
    graph: FloorGraph | None = None,
    config: Settings | None = None,
) -> Narration:
    """Build baseline directions for an ordered location path.

    Args:
        path: Locations from origin to destination.
        graph: Optional floor graph whose edge costs define the distance.
        config: Settings providing walking speeds.

    Returns:
        `Narration` with one step per location: "Start at", "Continue to" and
        "Arrive at". An empty path yields a single no-route message and a
        single-location path a single already-there message.
    """
    if not path:
        return Narration(steps=[NO_ROUTE_MESSAGE], distance=0.0, estimated_time=estimate_time(0.0, config))
    if len(path) == 1:
        return Narration(
            steps=[f"You are already at {path[0].name}"],
            distance=0.0,
            estimated_time=estimate_time(0.0, config),
        )

    steps = [f"Start at {path[0].name}"]
    steps.extend(f"Continue to {loc.name}" for loc in path[1:-1])
    steps.append(_arrival(path[-1]))

    distance = path_distance(path, graph)
    return Narration(steps=steps, distance=distance, estimated_time=estimate_time(distance, config))


def describe_steps(path: Sequence[Location]) -> list[str]:
    """Directions that call out elevators and stairs along the way."""
    if len(path) < 2:
        return narrate(path).steps

    steps = [f"Start at {path[0].name}"]
    for loc in path[1:-1]:
        if loc.type == "elevator":
            steps.append(f"Take the elevator at {loc.name}")
        elif loc.type == "stairs":
            steps.append(f"Take the stairs at {loc.name}")
        else:
            steps.append(f"Continue to {loc.name}")
    steps.append(_arrival(path[-1]))
    return steps


def classify_step(step: str) -> StepKind:
    """Classify a direction string for presentation."""
    lowered = step.lower()
    if lowered.startswith("start"):
        return StepKind.START
    if lowered.startswith("arrive") or "destination" in lowered:
        return StepKind.DESTINATION
    if "left" in lowered or "right" in lowered:
        return StepKind.TURN
    if "stairs" in lowered:
        return StepKind.STAIRS
    if "elevator" in lowered:
        return StepKind.ELEVATOR
    return StepKind.STRAIGHT
