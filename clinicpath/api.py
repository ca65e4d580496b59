"""FastAPI routes for hospital map browsing, search and indoor routing.

Endpoints:
- Map data (`/floors`, `/floors/{floor_id}/locations`, `/search`, `POST /map`)
- Routing (`/floors/{floor_id}/starting-points`, `POST /route`, `POST /routes`)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from clinicpath.config import settings
from clinicpath.logging_setup import configure_logging
from clinicpath.models import Floor, Location, MapData, MapValidationError, parse_map
from clinicpath.narration import classify_step
from clinicpath.route_service import (
    InMemoryRouteStore,
    RouteService,
    RouteStatus,
    nearest_starting_point,
    search_locations,
    starting_points,
)
from clinicpath.sample_data import sample_map

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """In-memory map data and precomputed routes for the running app."""

    map_data: MapData | None = None
    route_store: InMemoryRouteStore = field(default_factory=InMemoryRouteStore)


STATE = AppState()


class RouteRequest(BaseModel):
    """Request payload for a route between two locations."""

    from_id: str = Field(..., min_length=1)
    to_id: str = Field(..., min_length=1)
    floor_id: str | None = None


class RouteResponse(BaseModel):
    """Route payload returned to clients."""

    id: str
    from_location_id: str
    to_location_id: str
    distance: float
    estimated_time: str
    accessibility: str
    steps: list[str]
    path: list[str]
    detailed_steps: list[str] = Field(default_factory=list)
    step_kinds: list[str] = Field(default_factory=list)
    source: str | None = None


def _serialize_location(loc: Location) -> dict[str, Any]:
    """Serialize Location to JSON-safe dictionary."""
    return {
        "id": loc.id,
        "name": loc.name,
        "x": loc.x,
        "y": loc.y,
        "type": loc.type,
        "room": loc.room,
        "floor_id": loc.floor_id,
    }


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def load_initial_state() -> None:
    """Populate STATE from configured files, falling back to the sample map."""
    if STATE.map_data is None:
        if settings.map_file:
            STATE.map_data = parse_map(_read_json(settings.map_file))
            logger.info("Loaded map '%s' from %s", STATE.map_data.name, settings.map_file)
        else:
            STATE.map_data = sample_map()
            logger.info("Using bundled sample map '%s'", STATE.map_data.name)

    if settings.routes_file and len(STATE.route_store) == 0:
        STATE.route_store = InMemoryRouteStore.from_records(_read_json(settings.routes_file))
        logger.info("Loaded %d precomputed routes from %s", len(STATE.route_store), settings.routes_file)


def _current_map() -> MapData:
    if STATE.map_data is None:
        raise HTTPException(status_code=400, detail="No map data loaded yet")
    return STATE.map_data


def _floor_or_404(floor_id: str) -> Floor:
    floor = _current_map().get_floor(floor_id)
    if floor is None:
        raise HTTPException(status_code=404, detail=f"Floor '{floor_id}' was not found")
    return floor


def _floor_for_request(payload: RouteRequest) -> Floor:
    """Resolve the requested floor, or the floor holding the origin."""
    if payload.floor_id:
        return _floor_or_404(payload.floor_id)
    for floor in _current_map().floors:
        if floor.find_location(payload.from_id) is not None:
            return floor
    raise HTTPException(status_code=404, detail=f"Location not recognized: from location '{payload.from_id}'")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    load_initial_state()

    app = FastAPI(title=settings.app_name, version=settings.app_version)

    raw_origins = settings.cors_origins.strip()
    if raw_origins == "*":
        cors_origins = ["*"]
        allow_credentials = False
    else:
        cors_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, Any]:
        """Health endpoint with loaded map metadata."""
        map_data = STATE.map_data
        return {
            "status": "ok",
            "version": app.version,
            "map_name": map_data.name if map_data else None,
            "floor_count": len(map_data.floors) if map_data else 0,
            "precomputed_routes": len(STATE.route_store),
        }

    @app.get("/floors")
    async def get_floors() -> dict[str, Any]:
        """Return floor summaries of the current map."""
        map_data = _current_map()
        return {
            "map_name": map_data.name,
            "floors": [
                {
                    "id": floor.id,
                    "name": floor.name,
                    "location_count": len(floor.locations),
                    "connection_count": len(floor.connections),
                }
                for floor in map_data.floors
            ],
        }

    @app.get("/floors/{floor_id}/locations")
    async def get_floor_locations(floor_id: str) -> dict[str, Any]:
        """Return all locations on one floor."""
        floor = _floor_or_404(floor_id)
        return {
            "floor_id": floor.id,
            "locations": [_serialize_location(loc) for loc in floor.locations],
        }

    @app.get("/floors/{floor_id}/starting-points")
    async def get_starting_points(
        floor_id: str,
        x: float | None = Query(default=None),
        y: float | None = Query(default=None),
    ) -> dict[str, Any]:
        """Return valid trip origins, plus the nearest one when x/y are given."""
        floor = _floor_or_404(floor_id)
        payload: dict[str, Any] = {
            "floor_id": floor.id,
            "starting_points": [_serialize_location(loc) for loc in starting_points(floor)],
        }
        if x is not None and y is not None:
            nearest = nearest_starting_point(floor, x, y)
            payload["nearest"] = _serialize_location(nearest) if nearest else None
        return payload

    @app.get("/search")
    async def search(q: str = Query(..., min_length=1)) -> dict[str, Any]:
        """Search locations by name or room label."""
        results = search_locations(_current_map(), q)
        return {"query": q, "results": [_serialize_location(loc) for loc in results]}

    @app.post("/map")
    async def replace_map(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        """Validate and install a new building map."""
        try:
            map_data = parse_map(payload)
        except MapValidationError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid map data: {exc}") from exc

        STATE.map_data = map_data
        logger.info("Installed map '%s' with %d floors", map_data.name, len(map_data.floors))
        return {
            "message": "Map uploaded and set as current successfully",
            "map_name": map_data.name,
            "floor_count": len(map_data.floors),
        }

    @app.post("/routes")
    async def register_routes(payload: list[dict[str, Any]] = Body(...)) -> dict[str, Any]:
        """Register precomputed routes that override computed ones."""
        try:
            incoming = InMemoryRouteStore.from_records(payload)
        except MapValidationError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid route data: {exc}") from exc

        for route in incoming.routes():
            STATE.route_store.add(route)
        return {"registered": len(incoming), "total": len(STATE.route_store)}

    @app.post("/route", response_model=RouteResponse)
    async def find_route(payload: RouteRequest) -> RouteResponse:
        """Compute or look up a route between two locations on one floor."""
        floor = _floor_for_request(payload)
        service = RouteService(route_store=STATE.route_store)
        outcome = service.get_route(floor, payload.from_id, payload.to_id)

        if outcome.status is RouteStatus.UNKNOWN_LOCATION:
            raise HTTPException(status_code=404, detail=f"Location not recognized: {outcome.message}")
        if outcome.status is RouteStatus.NO_PATH or outcome.route is None:
            raise HTTPException(status_code=404, detail="No route found")

        route = outcome.route
        step_kinds = [classify_step(step).value for step in (route.detailed_steps or route.steps)]
        return RouteResponse(**route.to_dict(), step_kinds=step_kinds, source=outcome.source)

    return app
