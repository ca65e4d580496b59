"""Bundled sample hospital map used when no map has been loaded."""

from __future__ import annotations

from typing import Any

from clinicpath.models import MapData, parse_map

SAMPLE_MAP: dict[str, Any] = {
    "name": "General Hospital",
    "floors": [
        {
            "id": "ground-floor",
            "name": "Ground Floor",
            "locations": [
                {"id": "main-entrance", "name": "Main Entrance", "x": 100, "y": 300, "type": "entrance"},
                {"id": "reception", "name": "Reception", "x": 200, "y": 300, "type": "reception"},
                {
                    "id": "emergency",
                    "name": "Emergency Room",
                    "x": 350,
                    "y": 200,
                    "type": "emergency",
                    "room": "ER-001",
                },
                {"id": "pharmacy", "name": "Pharmacy", "x": 150, "y": 450, "type": "pharmacy", "room": "PH-001"},
                {"id": "cafeteria", "name": "Cafeteria", "x": 400, "y": 400, "type": "cafeteria"},
                {"id": "elevator-gf", "name": "Elevator", "x": 300, "y": 350, "type": "elevator"},
                {"id": "stairs-gf", "name": "Stairs", "x": 350, "y": 350, "type": "stairs"},
            ],
            "connections": [
                {"from": "main-entrance", "to": "reception", "distance": 25},
                {"from": "reception", "to": "emergency", "distance": 40},
                {"from": "reception", "to": "pharmacy", "distance": 30},
                {"from": "reception", "to": "elevator-gf", "distance": 20},
                {"from": "elevator-gf", "to": "stairs-gf", "distance": 10},
                {"from": "pharmacy", "to": "cafeteria", "distance": 35},
            ],
        },
        {
            "id": "first-floor",
            "name": "First Floor",
            "locations": [
                {"id": "elevator-1f", "name": "Elevator", "x": 300, "y": 350, "type": "elevator"},
                {"id": "stairs-1f", "name": "Stairs", "x": 350, "y": 350, "type": "stairs"},
                {
                    "id": "neurology",
                    "name": "Neurology Department",
                    "x": 150,
                    "y": 200,
                    "type": "department",
                    "room": "N-101",
                },
                {
                    "id": "cardiology",
                    "name": "Cardiology Department",
                    "x": 450,
                    "y": 200,
                    "type": "department",
                    "room": "C-101",
                },
                {"id": "room-101", "name": "Patient Room 101", "x": 200, "y": 450, "type": "room", "room": "101"},
                {"id": "room-102", "name": "Patient Room 102", "x": 300, "y": 450, "type": "room", "room": "102"},
            ],
            "connections": [
                {"from": "elevator-1f", "to": "stairs-1f", "distance": 10},
                {"from": "elevator-1f", "to": "neurology", "distance": 30},
                {"from": "elevator-1f", "to": "cardiology", "distance": 30},
                {"from": "neurology", "to": "room-101", "distance": 25},
                {"from": "cardiology", "to": "room-102", "distance": 25},
            ],
        },
    ],
}


def sample_map() -> MapData:
    return parse_map(SAMPLE_MAP)
