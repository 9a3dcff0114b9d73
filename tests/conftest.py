"""
Shared test fixtures.

Calendar used throughout: 2026-10-19 is a Monday, so the week runs
Mon 19 .. Sun 25.  Reference times are naive local datetimes, matching
what ``SystemClock`` produces.
"""

from datetime import datetime

import pytest

from src.domain.clock import FixedClock
from src.domain.entities import RateCard, RateTable
from src.domain.pricing import FareCalculator

MONDAY = datetime(2026, 10, 19)
TUESDAY = datetime(2026, 10, 20)
FRIDAY = datetime(2026, 10, 23)
SATURDAY = datetime(2026, 10, 24)
SUNDAY = datetime(2026, 10, 25)


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


@pytest.fixture
def rate_table() -> RateTable:
    return RateTable(
        cards={
            "city": RateCard(50.0, 12.0, 2.0),
            "airport": RateCard(100.0, 15.0, 2.5),
            "outstation": RateCard(200.0, 18.0, 3.0),
            "hourly": RateCard(150.0, 20.0, 3.0),
        },
        minimum_fare=50.0,
        maximum_fare=5000.0,
    )


@pytest.fixture
def calculator(rate_table: RateTable) -> FareCalculator:
    return FareCalculator(rate_table, FixedClock(at(TUESDAY, 11)))
