"""Integration tests for FastAPI map browsing and routing endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from clinicpath.api import create_app
from clinicpath.sample_data import SAMPLE_MAP


def _client() -> TestClient:
    return TestClient(create_app())


def test_health_reports_sample_map() -> None:
    res = _client().get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["map_name"] == "General Hospital"
    assert body["floor_count"] == 2


def test_floors_and_locations() -> None:
    client = _client()

    floors = client.get("/floors").json()["floors"]
    assert [f["id"] for f in floors] == ["ground-floor", "first-floor"]

    res = client.get("/floors/first-floor/locations")
    assert res.status_code == 200
    assert any(loc["id"] == "neurology" for loc in res.json()["locations"])

    assert client.get("/floors/basement/locations").status_code == 404


def test_route_generated_on_demand() -> None:
    res = _client().post(
        "/route",
        json={"floor_id": "ground-floor", "from_id": "main-entrance", "to_id": "pharmacy"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["path"] == ["main-entrance", "reception", "pharmacy"]
    assert body["distance"] == 55.0
    assert body["steps"] == [
        "Start at Main Entrance",
        "Continue to Reception",
        "Arrive at Pharmacy (PH-001)",
    ]
    assert body["source"] == "computed"


def test_route_floor_is_inferred_from_origin() -> None:
    res = _client().post("/route", json={"from_id": "neurology", "to_id": "room-101"})

    assert res.status_code == 200
    assert res.json()["path"] == ["neurology", "room-101"]


def test_route_unknown_location_and_no_path_are_distinct() -> None:
    client = _client()

    unknown = client.post(
        "/route",
        json={"floor_id": "ground-floor", "from_id": "main-entrance", "to_id": "does-not-exist"},
    )
    assert unknown.status_code == 404
    assert unknown.json()["detail"].startswith("Location not recognized")

    island_map = {
        "name": "Island",
        "floors": [
            {
                "id": "gf",
                "name": "Ground",
                "locations": [
                    {"id": "a", "name": "A", "x": 0, "y": 0},
                    {"id": "b", "name": "B", "x": 5, "y": 0},
                ],
                "connections": [],
            }
        ],
    }
    assert client.post("/map", json=island_map).status_code == 200

    no_path = client.post("/route", json={"floor_id": "gf", "from_id": "a", "to_id": "b"})
    assert no_path.status_code == 404
    assert no_path.json()["detail"] == "No route found"


def test_registered_route_overrides_computed_one() -> None:
    client = _client()
    curated = {
        "id": "curated-1",
        "from_location_id": "main-entrance",
        "to_location_id": "pharmacy",
        "distance": 60,
        "estimated_time": "2-3 minutes",
        "accessibility": "Step-free",
        "steps": ["Follow the green line to the Pharmacy"],
    }

    reg = client.post("/routes", json=[curated])
    assert reg.status_code == 200
    assert reg.json() == {"registered": 1, "total": 1}

    res = client.post(
        "/route",
        json={"floor_id": "ground-floor", "from_id": "main-entrance", "to_id": "pharmacy"},
    )
    body = res.json()
    assert body["id"] == "curated-1"
    assert body["source"] == "store"
    assert body["steps"] == ["Follow the green line to the Pharmacy"]


def test_invalid_map_upload_returns_400() -> None:
    broken = {"name": "Broken", "floors": [dict(SAMPLE_MAP["floors"][0], locations=[{"id": "x"}])]}

    res = _client().post("/map", json=broken)

    assert res.status_code == 400
    assert "floors[0].locations[0]" in res.json()["detail"]


def test_starting_points_and_search() -> None:
    client = _client()

    res = client.get("/floors/ground-floor/starting-points", params={"x": 395, "y": 395})
    body = res.json()
    assert [loc["id"] for loc in body["starting_points"]] == ["main-entrance", "reception", "cafeteria"]
    assert body["nearest"]["id"] == "cafeteria"

    search = client.get("/search", params={"q": "cardio"}).json()
    assert [loc["id"] for loc in search["results"]] == ["cardiology"]


def test_registered_cross_floor_route_is_served() -> None:
    client = _client()
    curated = {
        "id": "entrance-to-cardiology",
        "from_location_id": "main-entrance",
        "to_location_id": "cardiology",
        "distance": 105,
        "estimated_time": "2-3 minutes",
        "accessibility": "Wheelchair accessible",
        "steps": ["Take the elevator to the first floor", "Arrive at Cardiology (C-101)"],
    }
    assert client.post("/routes", json=[curated]).status_code == 200

    res = client.post("/route", json={"from_id": "main-entrance", "to_id": "cardiology"})

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == "entrance-to-cardiology"
    assert body["source"] == "store"
    assert body["step_kinds"] == ["elevator", "destination"]


def test_route_reports_detailed_steps_and_kinds() -> None:
    res = _client().post(
        "/route",
        json={"floor_id": "ground-floor", "from_id": "main-entrance", "to_id": "stairs-gf"},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["path"] == ["main-entrance", "reception", "elevator-gf", "stairs-gf"]
    assert body["detailed_steps"] == [
        "Start at Main Entrance",
        "Continue to Reception",
        "Take the elevator at Elevator",
        "Arrive at Stairs (Room not specified)",
    ]
    assert body["step_kinds"] == ["start", "straight", "elevator", "destination"]
