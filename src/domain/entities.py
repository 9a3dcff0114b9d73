"""
Domain value objects for fare estimation.

Every object here is immutable and built fresh per request:

- ``TripDescriptor`` is what the caller asks us to price.
- ``RateCard`` / ``RateTable`` carry the rate configuration.
- ``SurgeContext`` is the time-derived view the surge rules read.
- ``FareBreakdown`` is the itemised result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .enums import ServiceType, VehicleType


class InsufficientTripGeometry(Exception):
    """Raised when a fare is demanded for a trip without distance or duration."""


# ── Input ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TripDescriptor:
    service_type: ServiceType | str
    vehicle_type: VehicleType | str
    distance_km: Optional[float] = None
    duration_minutes: Optional[float] = None
    scheduled_at: Optional[datetime] = None
    reference_time: Optional[datetime] = None

    @property
    def has_geometry(self) -> bool:
        return _usable(self.distance_km) and _usable(self.duration_minutes)


def _usable(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


# ── Rate configuration ────────────────────────────────────────────────


@dataclass(frozen=True)
class RateCard:
    base_fare: float = 50.0
    per_km_rate: float = 12.0
    per_minute_rate: float = 2.0


DEFAULT_RATE_CARD = RateCard()


@dataclass(frozen=True)
class RateTable:
    """Per-service rate cards plus the fare floor and ceiling."""

    cards: Mapping[str, RateCard] = field(default_factory=dict)
    minimum_fare: float = 50.0
    maximum_fare: float = 5000.0

    def __post_init__(self) -> None:
        # Freeze the mapping so a table can be shared across requests.
        normalised = {_key(k): v for k, v in dict(self.cards).items()}
        object.__setattr__(self, "cards", MappingProxyType(normalised))

    def card_for(self, service_type: ServiceType | str) -> Optional[RateCard]:
        return self.cards.get(_key(service_type))


def _key(value: Any) -> str:
    return value.value if isinstance(value, ServiceType) else str(value)


# ── Surge context ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class SurgeContext:
    hour_of_day: int
    day_of_week: int  # 0 = Sunday .. 6 = Saturday
    hours_until_scheduled: Optional[float] = None

    @classmethod
    def from_times(
        cls, reference_time: datetime, scheduled_at: Optional[datetime] = None
    ) -> SurgeContext:
        hours_until = None
        if scheduled_at is not None:
            scheduled_at = _align(scheduled_at, reference_time)
            hours_until = (scheduled_at - reference_time).total_seconds() / 3600
        return cls(
            hour_of_day=reference_time.hour,
            day_of_week=(reference_time.weekday() + 1) % 7,
            hours_until_scheduled=hours_until,
        )


def _align(scheduled_at: datetime, reference_time: datetime) -> datetime:
    """Bring *scheduled_at* to the same tz-awareness as *reference_time*."""
    if (scheduled_at.tzinfo is None) == (reference_time.tzinfo is None):
        return scheduled_at
    if scheduled_at.tzinfo is None:
        return scheduled_at.astimezone(reference_time.tzinfo)
    return scheduled_at.astimezone().replace(tzinfo=None)


# ── Output ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FareBreakdown:
    base_fare: int
    distance_fare: int
    time_fare: int
    surge_multiplier: float
    total_fare: int
    estimated_distance: float
    estimated_duration: float
    surge_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Flat record for serialisation; ``surgeReason`` only when set."""
        data: dict[str, Any] = {
            "baseFare": self.base_fare,
            "distanceFare": self.distance_fare,
            "timeFare": self.time_fare,
            "surgeMultiplier": self.surge_multiplier,
            "totalFare": self.total_fare,
            "estimatedDistance": self.estimated_distance,
            "estimatedDuration": self.estimated_duration,
        }
        if self.surge_reason:
            data["surgeReason"] = self.surge_reason
        return data
