"""Pytest global fixtures and test isolation hooks."""

from __future__ import annotations

import pytest

from clinicpath.api import STATE
from clinicpath.models import Floor, parse_floor
from clinicpath.route_service import InMemoryRouteStore


@pytest.fixture(autouse=True)
def reset_app_state() -> None:
    """Reset in-memory API state before each test."""
    STATE.map_data = None
    STATE.route_store = InMemoryRouteStore()


@pytest.fixture()
def triangle_floor() -> Floor:
    """Entrance -> reception -> pharmacy corridor with explicit distances."""
    return parse_floor(
        {
            "id": "gf",
            "name": "Ground Floor",
            "locations": [
                {"id": "main-entrance", "name": "Main Entrance", "x": 0, "y": 0, "type": "entrance"},
                {"id": "reception", "name": "Reception", "x": 10, "y": 0, "type": "reception"},
                {"id": "pharmacy", "name": "Pharmacy", "x": 10, "y": 10, "type": "pharmacy", "room": "PH-001"},
            ],
            "connections": [
                {"from": "main-entrance", "to": "reception", "distance": 10},
                {"from": "reception", "to": "pharmacy", "distance": 10},
            ],
        }
    )
