"""
Trip geometry estimation using the Haversine formula.

Assumption
----------
We use great-circle (Haversine) distance, stretched by a road factor, and
a flat average speed instead of a real routing engine (OSRM / Google Maps)
to keep the project self-contained and runnable locally without external
API keys.  In production this module would be replaced by a routing-service
client that returns actual road distances and drive times.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Protocol

EARTH_RADIUS_KM = 6_371.0


class TripGeometry(NamedTuple):
    distance_km: float
    duration_minutes: float


class GeometryProvider(Protocol):
    def estimate(
        self, pickup_lat: float, pickup_lng: float, dropoff_lat: float, dropoff_lng: float
    ) -> TripGeometry: ...


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


class HaversineGeometryProvider:
    """Estimates road distance and drive time from coordinates alone."""

    def __init__(self, road_factor: float = 1.3, average_speed_kmh: float = 30.0):
        self.road_factor = road_factor
        self.average_speed_kmh = average_speed_kmh

    def estimate(
        self, pickup_lat: float, pickup_lng: float, dropoff_lat: float, dropoff_lng: float
    ) -> TripGeometry:
        distance = round(
            haversine_km(pickup_lat, pickup_lng, dropoff_lat, dropoff_lng)
            * self.road_factor,
            2,
        )
        # Whole minutes, like a directions API leg duration.
        minutes = math.floor(distance / self.average_speed_kmh * 60 + 0.5)
        return TripGeometry(distance_km=distance, duration_minutes=float(minutes))
