"""FastAPI dependency injection helpers."""

from functools import lru_cache

from src.config import settings
from src.domain.clock import SystemClock
from src.domain.distance import GeometryProvider, HaversineGeometryProvider
from src.domain.pricing import FareCalculator


@lru_cache
def get_calculator() -> FareCalculator:
    """Build the calculator once; the rate table is immutable afterwards."""
    return FareCalculator(settings.build_rate_table(), SystemClock())


@lru_cache
def get_geometry_provider() -> GeometryProvider:
    return HaversineGeometryProvider(
        road_factor=settings.road_factor,
        average_speed_kmh=settings.average_speed_kmh,
    )
