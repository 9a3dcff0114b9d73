"""Unit tests for fare aggregation and the calculator facade."""

from datetime import timedelta

import pytest

from src.domain.clock import FixedClock
from src.domain.entities import (
    FareBreakdown,
    InsufficientTripGeometry,
    RateTable,
    TripDescriptor,
)
from src.domain.pricing import FareAggregator, FareCalculator, round_half_up
from tests.conftest import MONDAY, SATURDAY, TUESDAY, at


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3  # builtin round() would give 2

    def test_two_places(self):
        assert round_half_up(1.5400000000000003, 2) == 1.54
        assert round_half_up(1.125, 2) == 1.13


class TestFareAggregator:
    def _aggregate(self, **overrides):
        args = dict(
            base_fare=50.0,
            per_km_rate=12.0,
            per_minute_rate=2.0,
            vehicle_multiplier=1.0,
            distance_km=10.0,
            duration_minutes=20.0,
            surge_multiplier=1.0,
            min_fare=50.0,
            max_fare=5000.0,
        )
        args.update(overrides)
        return FareAggregator.aggregate(**args)

    def test_itemised_components(self):
        fare = self._aggregate()
        assert (fare.base_fare, fare.distance_fare, fare.time_fare) == (50, 120, 40)
        assert fare.total_fare == 210

    def test_components_are_vehicle_adjusted(self):
        fare = self._aggregate(vehicle_multiplier=1.3)
        assert (fare.base_fare, fare.distance_fare, fare.time_fare) == (65, 156, 52)
        assert fare.total_fare == 273

    def test_surge_applies_to_total_only(self):
        fare = self._aggregate(surge_multiplier=1.5)
        assert fare.base_fare == 50
        assert fare.total_fare == 315

    def test_unrounded_surge_used_for_total(self):
        # 210 * 1.125 = 236.25; with the displayed 1.13 it would be 237.3
        fare = self._aggregate(surge_multiplier=1.125)
        assert fare.surge_multiplier == 1.13
        assert fare.total_fare == 236

    def test_floor(self):
        fare = self._aggregate(distance_km=0.1, duration_minutes=1.0, min_fare=100.0)
        assert fare.total_fare == 100

    def test_ceiling(self):
        fare = self._aggregate(distance_km=1000.0, duration_minutes=900.0)
        assert fare.total_fare == 5000

    def test_echoes_geometry(self):
        fare = self._aggregate(distance_km=12.4, duration_minutes=31.0)
        assert fare.estimated_distance == 12.4
        assert fare.estimated_duration == 31.0

    def test_empty_reason_is_omitted(self):
        assert self._aggregate(surge_reason="").surge_reason is None


class TestFareCalculator:
    def _trip(self, **overrides):
        args = dict(
            service_type="city",
            vehicle_type="sedan",
            distance_km=10.0,
            duration_minutes=20.0,
        )
        args.update(overrides)
        return TripDescriptor(**args)

    def test_monday_morning_peak(self, calculator):
        fare = calculator.calculate(self._trip(reference_time=at(MONDAY, 8)))
        assert fare.surge_multiplier == 1.5
        assert fare.surge_reason == "Peak hours"
        assert fare.total_fare == 315

    def test_saturday_short_airport_trip(self, calculator):
        fare = calculator.calculate(
            self._trip(
                service_type="airport",
                vehicle_type="premium",
                distance_km=1.5,
                duration_minutes=10.0,
                reference_time=at(SATURDAY, 15),
            )
        )
        assert fare.surge_multiplier == 1.54
        assert fare.surge_reason == "Weekend + Short trip"
        # (100 + 22.5 + 25) * 1.8 * 1.54
        assert fare.total_fare == 409
        assert fare.base_fare == 180

    def test_long_trip_booked_far_ahead(self, calculator):
        now = at(TUESDAY, 11)
        fare = calculator.calculate(
            self._trip(
                distance_km=60.0,
                duration_minutes=30.0,
                scheduled_at=now + timedelta(hours=30),
                reference_time=now,
            )
        )
        assert fare.surge_multiplier == 1.08
        assert fare.surge_reason == "Long distance + Advance booking discount"
        assert fare.total_fare == 896  # 830 * 1.08

    def test_clock_used_when_no_reference_time(self, rate_table):
        calculator = FareCalculator(rate_table, FixedClock(at(MONDAY, 18)))
        fare = calculator.calculate(self._trip())
        assert fare.surge_reason == "Peak hours"

    def test_clock_read_once_per_call(self, rate_table):
        class CountingClock:
            calls = 0

            def now(self):
                self.calls += 1
                return at(TUESDAY, 11)

        clock = CountingClock()
        now = at(TUESDAY, 11)
        FareCalculator(rate_table, clock).calculate(
            self._trip(scheduled_at=now + timedelta(hours=10))
        )
        assert clock.calls == 1

    @pytest.mark.parametrize(
        "distance, duration",
        [(0.0, 20.0), (10.0, 0.0), (None, 20.0), (10.0, None), (None, None)],
    )
    def test_missing_geometry_yields_no_fare(self, calculator, distance, duration):
        trip = self._trip(distance_km=distance, duration_minutes=duration)
        assert calculator.calculate(trip) is None

    @pytest.mark.parametrize(
        "distance, duration",
        [
            (float("nan"), 20.0),
            (10.0, float("nan")),
            (float("inf"), 20.0),
            (10.0, float("inf")),
        ],
    )
    def test_non_finite_geometry_yields_no_fare(self, calculator, distance, duration):
        trip = self._trip(distance_km=distance, duration_minutes=duration)
        assert calculator.calculate(trip) is None

    def test_require_raises_without_geometry(self, calculator):
        with pytest.raises(InsufficientTripGeometry):
            calculator.require(self._trip(distance_km=0.0))

    def test_idempotent(self, calculator):
        trip = self._trip(reference_time=at(SATURDAY, 15), distance_km=1.2)
        first, second = calculator.calculate(trip), calculator.calculate(trip)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_vehicle_scaling(self, calculator):
        sedan = calculator.calculate(self._trip())
        premium = calculator.calculate(self._trip(vehicle_type="premium"))
        assert sedan.total_fare == 210
        assert premium.total_fare == 378  # 210 * 1.8

    def test_unknown_vehicle_prices_as_sedan(self, calculator):
        sedan = calculator.calculate(self._trip())
        other = calculator.calculate(self._trip(vehicle_type="hatchback"))
        assert other == sedan

    @pytest.mark.parametrize(
        "service, vehicle, distance, duration",
        [
            ("city", "sedan", 0.2, 1.0),
            ("airport", "suv", 35.0, 60.0),
            ("outstation", "premium", 400.0, 420.0),
            ("hourly", "sedan", 80.0, 240.0),
        ],
    )
    def test_total_within_bounds(self, calculator, service, vehicle, distance, duration):
        fare = calculator.calculate(
            self._trip(
                service_type=service,
                vehicle_type=vehicle,
                distance_km=distance,
                duration_minutes=duration,
            )
        )
        assert 50 <= fare.total_fare <= 5000

    def test_custom_floor_applies(self):
        calculator = FareCalculator(
            RateTable(minimum_fare=500.0, maximum_fare=600.0),
            FixedClock(at(TUESDAY, 11)),
        )
        fare = calculator.calculate(self._trip())
        assert fare.total_fare == 500


class TestFareBreakdown:
    def test_flat_record_field_names(self):
        fare = FareBreakdown(50, 120, 40, 1.5, 315, 10.0, 20.0, "Peak hours")
        assert fare.to_dict() == {
            "baseFare": 50,
            "distanceFare": 120,
            "timeFare": 40,
            "surgeMultiplier": 1.5,
            "totalFare": 315,
            "estimatedDistance": 10.0,
            "estimatedDuration": 20.0,
            "surgeReason": "Peak hours",
        }

    def test_reason_omitted_when_absent(self):
        fare = FareBreakdown(50, 120, 40, 1.0, 210, 10.0, 20.0)
        assert "surgeReason" not in fare.to_dict()
