"""Route orchestration: precomputed routes first, computed routes second.

This module ties together:
- Lookup of curated routes in a `RouteStore`
- Floor graph construction and shortest-path search
- Narration of the resulting path

No-route and unknown-location cases are returned as `RouteOutcome` values,
never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Protocol

from shapely.geometry import Point

from clinicpath.config import Settings, settings as default_settings
from clinicpath.graph import compute_graph
from clinicpath.models import Floor, Location, MapData, Route, parse_route
from clinicpath.narration import describe_steps, narrate
from clinicpath.pathfinding import Heuristic, Strategy, shortest_path_result

logger = logging.getLogger(__name__)

GENERATED_ACCESSIBILITY = "Check individual locations"
STARTING_POINT_TYPES = frozenset({"entrance", "reception", "cafeteria", "start"})


class RouteStatus(str, Enum):
    FOUND = "found"
    NO_PATH = "no_path"
    UNKNOWN_LOCATION = "unknown_location"


@dataclass(slots=True)
class RouteOutcome:
    """Result of a route request."""

    status: RouteStatus
    route: Route | None = None
    message: str = ""
    source: str | None = None

    @property
    def found(self) -> bool:
        return self.status is RouteStatus.FOUND


class RouteStore(Protocol):
    """Read-only source of precomputed routes."""

    def lookup(self, from_id: str, to_id: str) -> Route | None: ...


class InMemoryRouteStore:
    """Precomputed routes keyed by `(from_location_id, to_location_id)`."""

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: dict[tuple[str, str], Route] = {}
        for route in routes:
            self.add(route)

    def __len__(self) -> int:
        return len(self._routes)

    def add(self, route: Route) -> None:
        self._routes[(route.from_location_id, route.to_location_id)] = route

    def lookup(self, from_id: str, to_id: str) -> Route | None:
        return self._routes.get((from_id, to_id))

    def routes(self) -> list[Route]:
        return list(self._routes.values())

    @classmethod
    def from_records(cls, records: list[dict[str, Any]]) -> "InMemoryRouteStore":
        return cls(parse_route(raw, record=f"routes[{idx}]") for idx, raw in enumerate(records))


@dataclass(slots=True)
class NavigationSession:
    """Per-caller selection of origin, destination and active route."""

    floor_id: str | None = None
    from_id: str | None = None
    to_id: str | None = None
    active_route: Route | None = None
    history: list[RouteOutcome] = field(default_factory=list)

    def clear(self) -> None:
        self.from_id = None
        self.to_id = None
        self.active_route = None
        self.history.clear()


def is_starting_point(location: Location) -> bool:
    return (location.type or "").lower() in STARTING_POINT_TYPES


def starting_points(floor: Floor) -> list[Location]:
    """Locations on `floor` that are offered as trip origins."""
    return [loc for loc in floor.locations if is_starting_point(loc)]


def nearest_starting_point(floor: Floor, x: float, y: float) -> Location | None:
    """Closest starting point to `(x, y)`; ties go to the smallest id."""
    here = Point(float(x), float(y))
    best: Location | None = None
    best_key: tuple[float, str] | None = None
    for loc in starting_points(floor):
        key = (float(here.distance(Point(loc.x, loc.y))), loc.id)
        if best_key is None or key < best_key:
            best, best_key = loc, key
    return best


def search_locations(map_data: MapData, query: str) -> list[Location]:
    """Case-insensitive substring match on location name or room label."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        loc
        for loc in map_data.all_locations()
        if needle in loc.name.lower() or (loc.room is not None and needle in loc.room.lower())
    ]


class RouteService:
    """Resolve routes between two locations on one floor."""

    def __init__(
        self,
        route_store: RouteStore | None = None,
        strategy: Strategy | str | None = None,
        heuristic: Heuristic | str | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or default_settings
        self.route_store = route_store
        self.strategy = Strategy(strategy or self.config.solver_strategy)
        self.heuristic = Heuristic(heuristic or self.config.solver_heuristic)

    def get_route(self, floor: Floor, from_id: str, to_id: str) -> RouteOutcome:
        """Return a precomputed route when available, otherwise compute one."""
        log_extra = {"floor_id": floor.id, "from_id": from_id, "to_id": to_id}

        # Curated routes may end on another floor, so they are checked first.
        if self.route_store is not None:
            stored = self.route_store.lookup(from_id, to_id)
            if stored is not None:
                logger.debug("Using precomputed route", extra={**log_extra, "source": "store"})
                return RouteOutcome(status=RouteStatus.FOUND, route=stored, source="store")

        known = floor.location_ids()
        missing = [
            f"{label} location '{loc_id}'"
            for label, loc_id in (("from", from_id), ("to", to_id))
            if loc_id not in known
        ]
        if missing:
            message = f"{' and '.join(missing)} not found on floor '{floor.id}'"
            logger.info("Unknown route endpoint", extra={**log_extra, "status": RouteStatus.UNKNOWN_LOCATION.value})
            return RouteOutcome(status=RouteStatus.UNKNOWN_LOCATION, message=message)

        graph = compute_graph(floor)
        positions: dict[str, tuple[float, float]] = {}
        for loc in floor.locations:
            positions.setdefault(loc.id, loc.position)
        result = shortest_path_result(
            graph,
            from_id,
            to_id,
            strategy=self.strategy,
            positions=positions,
            heuristic=self.heuristic,
        )
        if not result.found:
            logger.warning("No route found", extra={**log_extra, "status": RouteStatus.NO_PATH.value})
            return RouteOutcome(
                status=RouteStatus.NO_PATH,
                message=f"No route found from '{from_id}' to '{to_id}'",
            )

        located = [floor.find_location(loc_id) for loc_id in result.path]
        path_locations = [loc for loc in located if loc is not None]
        narration = narrate(path_locations, graph=graph, config=self.config)
        route = Route(
            from_location_id=from_id,
            to_location_id=to_id,
            distance=narration.distance,
            estimated_time=narration.estimated_time,
            accessibility=GENERATED_ACCESSIBILITY,
            steps=narration.steps,
            path=list(result.path),
            detailed_steps=describe_steps(path_locations),
        )
        logger.info(
            "Generated route",
            extra={**log_extra, "source": "computed", "path_length": len(result.path)},
        )
        return RouteOutcome(status=RouteStatus.FOUND, route=route, source="computed")

    def route_for_session(self, floor: Floor, session: NavigationSession) -> RouteOutcome:
        """Resolve the session's from/to selection and store the active route."""
        if not session.from_id or not session.to_id:
            outcome = RouteOutcome(
                status=RouteStatus.UNKNOWN_LOCATION,
                message="Both a starting point and a destination are required",
            )
        else:
            outcome = self.get_route(floor, session.from_id, session.to_id)

        session.floor_id = floor.id
        session.active_route = outcome.route
        session.history.append(outcome)
        return outcome
