"""
Rate resolution.

Looks up the base / per-km / per-minute rates for a service type and the
multiplier for a vehicle class.  Pricing inputs are never rejected: a
missing or zero entry falls back to the default card field by field, and
an unknown vehicle class prices at 1.0.

Complexity: O(1) per lookup.
"""

from __future__ import annotations

from typing import NamedTuple

from .entities import DEFAULT_RATE_CARD, RateTable
from .enums import (
    DEFAULT_VEHICLE_MULTIPLIER,
    VEHICLE_MULTIPLIERS,
    ServiceType,
    VehicleType,
)


class ResolvedRates(NamedTuple):
    base_fare: float
    per_km_rate: float
    per_minute_rate: float
    vehicle_multiplier: float


def vehicle_multiplier(vehicle_type: VehicleType | str) -> float:
    try:
        vehicle = VehicleType(vehicle_type)
    except ValueError:
        return DEFAULT_VEHICLE_MULTIPLIER
    return VEHICLE_MULTIPLIERS.get(vehicle, DEFAULT_VEHICLE_MULTIPLIER)


class RateResolver:
    def __init__(self, rate_table: RateTable):
        self.rate_table = rate_table

    def resolve(
        self, service_type: ServiceType | str, vehicle_type: VehicleType | str
    ) -> ResolvedRates:
        card = self.rate_table.card_for(service_type)
        if card is None:
            card = DEFAULT_RATE_CARD
        return ResolvedRates(
            base_fare=card.base_fare or DEFAULT_RATE_CARD.base_fare,
            per_km_rate=card.per_km_rate or DEFAULT_RATE_CARD.per_km_rate,
            per_minute_rate=card.per_minute_rate or DEFAULT_RATE_CARD.per_minute_rate,
            vehicle_multiplier=vehicle_multiplier(vehicle_type),
        )
