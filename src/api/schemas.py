"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ── Requests ──────────────────────────────────────────────────────────


class FareEstimateRequest(BaseModel):
    service_type: str = Field(
        "city", description="city, outstation, airport or hourly."
    )
    vehicle_type: str = Field(
        "sedan", description="sedan, suv or premium; other classes price at 1.0x."
    )
    distance_km: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    duration_minutes: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    pickup_lat: Optional[float] = Field(None, ge=-90, le=90)
    pickup_lng: Optional[float] = Field(None, ge=-180, le=180)
    dropoff_lat: Optional[float] = Field(None, ge=-90, le=90)
    dropoff_lng: Optional[float] = Field(None, ge=-180, le=180)
    scheduled_at: Optional[datetime] = None
    reference_time: Optional[datetime] = Field(
        None,
        description=(
            "Evaluate surge as of this instant instead of now. Surge hours "
            "are read in the UTC offset sent with it, if any."
        ),
    )

    @property
    def has_coordinates(self) -> bool:
        return None not in (
            self.pickup_lat, self.pickup_lng, self.dropoff_lat, self.dropoff_lng
        )


# ── Responses ─────────────────────────────────────────────────────────


class FareBreakdownResponse(BaseModel):
    base_fare: int
    distance_fare: int
    time_fare: int
    surge_multiplier: float
    total_fare: int
    estimated_distance: float
    estimated_duration: float
    surge_reason: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RateCardResponse(BaseModel):
    base_fare: float
    per_km_rate: float
    per_minute_rate: float

    model_config = {"from_attributes": True}


class RateTableResponse(BaseModel):
    rates: dict[str, RateCardResponse]
    minimum_fare: float
    maximum_fare: float


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
