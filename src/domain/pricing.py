"""
Fare Pricing Engine
===================

Formula
-------
Total = clamp((Base + Distance x Per_KM + Duration x Per_Minute)
              x Vehicle_Multiplier x Surge_Multiplier,
              Minimum_Fare, Maximum_Fare)

* **Vehicle_Multiplier**: sedan 1.0, suv 1.3, premium 1.8, others 1.0
* **Surge_Multiplier**: folded from the ordered rules in ``surge.py``

Pipeline per request: ``RateResolver`` -> ``SurgeRuleEngine`` ->
``FareAggregator``.  All three are stateless; ``FareCalculator`` wires
them together and captures the reference time once.

Rounding is half-up and only happens at the output boundary.

Complexity: O(1) per price calculation.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .clock import Clock, SystemClock
from .entities import (
    FareBreakdown,
    InsufficientTripGeometry,
    RateTable,
    SurgeContext,
    TripDescriptor,
)
from .rates import RateResolver
from .surge import SurgeRuleEngine

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = 0) -> float:
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale


# ── Aggregation ───────────────────────────────────────────────────────


class FareAggregator:
    @staticmethod
    def aggregate(
        base_fare: float,
        per_km_rate: float,
        per_minute_rate: float,
        vehicle_multiplier: float,
        distance_km: float,
        duration_minutes: float,
        surge_multiplier: float,
        min_fare: float,
        max_fare: float,
        surge_reason: Optional[str] = None,
    ) -> FareBreakdown:
        distance_fare = distance_km * per_km_rate
        time_fare = duration_minutes * per_minute_rate

        subtotal = (base_fare + distance_fare + time_fare) * vehicle_multiplier
        surged = subtotal * surge_multiplier
        final = min(max(surged, min_fare), max_fare)
        if final != surged:
            logger.debug("Fare %.2f clamped to %.2f", surged, final)

        return FareBreakdown(
            base_fare=int(round_half_up(base_fare * vehicle_multiplier)),
            distance_fare=int(round_half_up(distance_fare * vehicle_multiplier)),
            time_fare=int(round_half_up(time_fare * vehicle_multiplier)),
            surge_multiplier=round_half_up(surge_multiplier, 2),
            total_fare=int(round_half_up(final)),
            estimated_distance=distance_km,
            estimated_duration=duration_minutes,
            surge_reason=surge_reason or None,
        )


# ── Engine facade ─────────────────────────────────────────────────────


class FareCalculator:
    """High-level API used by the fare endpoints."""

    def __init__(
        self,
        rate_table: RateTable,
        clock: Optional[Clock] = None,
        surge_engine: Optional[SurgeRuleEngine] = None,
    ):
        self.rate_table = rate_table
        self.clock = clock or SystemClock()
        self.resolver = RateResolver(rate_table)
        self.surge_engine = surge_engine or SurgeRuleEngine()
        self.aggregator = FareAggregator()

    def calculate(self, trip: TripDescriptor) -> Optional[FareBreakdown]:
        """Price *trip*, or return ``None`` when distance or duration is missing."""
        if not trip.has_geometry:
            logger.info(
                "Skipping fare for %s trip: distance=%s duration=%s",
                trip.service_type, trip.distance_km, trip.duration_minutes,
            )
            return None

        reference_time = trip.reference_time or self.clock.now()
        context = SurgeContext.from_times(reference_time, trip.scheduled_at)

        rates = self.resolver.resolve(trip.service_type, trip.vehicle_type)
        surge = self.surge_engine.evaluate(trip.service_type, trip.distance_km, context)
        breakdown = self.aggregator.aggregate(
            rates.base_fare,
            rates.per_km_rate,
            rates.per_minute_rate,
            rates.vehicle_multiplier,
            trip.distance_km,
            trip.duration_minutes,
            surge.multiplier,
            self.rate_table.minimum_fare,
            self.rate_table.maximum_fare,
            surge_reason=surge.reason,
        )
        logger.debug(
            "Fare for %s/%s: total=%d surge=%.2f (%s)",
            trip.service_type, trip.vehicle_type, breakdown.total_fare,
            breakdown.surge_multiplier, breakdown.surge_reason or "none",
        )
        return breakdown

    def require(self, trip: TripDescriptor) -> FareBreakdown:
        breakdown = self.calculate(trip)
        if breakdown is None:
            raise InsufficientTripGeometry(
                "Trip distance and duration are required to estimate a fare"
            )
        return breakdown
