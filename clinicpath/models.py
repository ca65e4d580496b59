"""Map data model for hospital floors, locations, connections and routes.

Purpose:
- Hold the read-only floor inputs consumed by the routing core.
- Validate raw map payloads and report which record failed.

Usage example:
    >>> from clinicpath.models import parse_floor
    >>> floor = parse_floor({"id": "gf", "name": "Ground", "locations": [], "connections": []})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class MapValidationError(ValueError):
    """Raised when a map payload record has a missing or malformed field."""

    def __init__(self, record: str, message: str) -> None:
        super().__init__(f"{record}: {message}")
        self.record = record


@dataclass(frozen=True, slots=True)
class Location:
    """Named point on one floor, in floor-local planar coordinates."""

    id: str
    name: str
    x: float
    y: float
    type: str | None = None
    room: str | None = None
    floor_id: str | None = None

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


@dataclass(frozen=True, slots=True)
class Connection:
    """Bidirectional corridor segment between two locations."""

    from_id: str
    to_id: str
    distance: float | None = None


@dataclass(slots=True)
class Floor:
    """One floor with its locations and the connections among them."""

    id: str
    name: str
    locations: list[Location] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)

    def location_ids(self) -> set[str]:
        return {loc.id for loc in self.locations}

    def find_location(self, location_id: str) -> Location | None:
        """Return the first location with `location_id`, if any."""
        for loc in self.locations:
            if loc.id == location_id:
                return loc
        return None


@dataclass(slots=True)
class MapData:
    """Complete building map as supplied by the map-data provider."""

    name: str
    floors: list[Floor] = field(default_factory=list)

    def get_floor(self, floor_id: str) -> Floor | None:
        for floor in self.floors:
            if floor.id == floor_id:
                return floor
        return None

    def all_locations(self) -> list[Location]:
        return [loc for floor in self.floors for loc in floor.locations]


@dataclass(slots=True)
class Route:
    """Route between two locations, either precomputed or generated."""

    from_location_id: str
    to_location_id: str
    distance: float
    estimated_time: str
    accessibility: str
    steps: list[str]
    id: str = "generated"
    path: list[str] = field(default_factory=list)
    detailed_steps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "from_location_id": self.from_location_id,
            "to_location_id": self.to_location_id,
            "distance": self.distance,
            "estimated_time": self.estimated_time,
            "accessibility": self.accessibility,
            "steps": list(self.steps),
            "path": list(self.path),
            "detailed_steps": list(self.detailed_steps),
        }


def _require_str(raw: dict[str, Any], key: str, record: str) -> str:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MapValidationError(record, f"{key} is required")
    return str(value)


def _require_number(raw: dict[str, Any], key: str, record: str) -> float:
    value = raw.get(key)
    # bool is an int subclass but never a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MapValidationError(record, f"{key} must be a number")
    return float(value)


def _require_list(raw: dict[str, Any], key: str, record: str) -> list[Any]:
    value = raw.get(key)
    if not isinstance(value, list):
        raise MapValidationError(record, f"{key} must be a list")
    return value


def _require_object(raw: Any, record: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MapValidationError(record, "must be an object")
    return raw


def parse_location(raw: Any, floor_id: str | None = None, record: str = "location") -> Location:
    """Build a `Location` from `{id, name, x, y, type?, room?}`."""
    data = _require_object(raw, record)
    loc_type = data.get("type")
    room = data.get("room")
    return Location(
        id=_require_str(data, "id", record),
        name=_require_str(data, "name", record),
        x=_require_number(data, "x", record),
        y=_require_number(data, "y", record),
        type=str(loc_type) if loc_type else None,
        room=str(room) if room else None,
        floor_id=floor_id,
    )


def parse_connection(raw: Any, record: str = "connection") -> Connection:
    """Build a `Connection` from `{from, to, distance?}`."""
    data = _require_object(raw, record)
    distance: float | None = None
    if data.get("distance") is not None:
        distance = _require_number(data, "distance", record)
        if distance < 0:
            raise MapValidationError(record, "distance must be >= 0")
    return Connection(
        from_id=_require_str(data, "from", record),
        to_id=_require_str(data, "to", record),
        distance=distance,
    )


def parse_floor(raw: Any, record: str = "floor") -> Floor:
    """Build a `Floor` and all of its records from a raw payload."""
    data = _require_object(raw, record)
    floor_id = _require_str(data, "id", record)
    name = _require_str(data, "name", record)
    raw_locations = _require_list(data, "locations", record)
    raw_connections = _require_list(data, "connections", record)

    locations = [
        parse_location(item, floor_id=floor_id, record=f"{record}.locations[{idx}]")
        for idx, item in enumerate(raw_locations)
    ]
    connections = [
        parse_connection(item, record=f"{record}.connections[{idx}]")
        for idx, item in enumerate(raw_connections)
    ]
    return Floor(id=floor_id, name=name, locations=locations, connections=connections)


def parse_map(raw: Any) -> MapData:
    """Build `MapData` from `{name, floors: [...]}`.

    Raises:
        MapValidationError: If any record is malformed. The message starts
            with the record path, e.g. `floors[0].locations[2]`.
    """
    data = _require_object(raw, "map")
    name = _require_str(data, "name", "map")
    raw_floors = _require_list(data, "floors", "map")
    floors = [parse_floor(item, record=f"floors[{idx}]") for idx, item in enumerate(raw_floors)]
    return MapData(name=name, floors=floors)


def parse_route(raw: Any, record: str = "route") -> Route:
    """Build a precomputed `Route` record."""
    data = _require_object(raw, record)
    steps = data.get("steps") or []
    if not isinstance(steps, list):
        raise MapValidationError(record, "steps must be a list")
    distance = data.get("distance", 0.0)
    if isinstance(distance, bool) or not isinstance(distance, (int, float)):
        raise MapValidationError(record, "distance must be a number")
    from_id = _require_str(data, "from_location_id", record)
    to_id = _require_str(data, "to_location_id", record)
    return Route(
        id=str(data.get("id") or f"{from_id}->{to_id}"),
        from_location_id=from_id,
        to_location_id=to_id,
        distance=float(distance),
        estimated_time=str(data.get("estimated_time") or ""),
        accessibility=str(data.get("accessibility") or ""),
        steps=[str(step) for step in steps],
        path=[str(p) for p in data.get("path") or []],
        detailed_steps=[str(step) for step in data.get("detailed_steps") or []],
    )
