"""
Fare endpoints
==============

POST /api/v1/fares/estimate -- itemised fare with surge audit trail
GET  /api/v1/fares/rates    -- active rate table
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_calculator, get_geometry_provider
from src.api.middleware import limiter
from src.api.schemas import (
    ErrorResponse,
    FareBreakdownResponse,
    FareEstimateRequest,
    RateCardResponse,
    RateTableResponse,
)
from src.config import settings
from src.domain.distance import GeometryProvider
from src.domain.entities import InsufficientTripGeometry, TripDescriptor
from src.domain.pricing import FareCalculator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fares", tags=["fares"])


@router.post(
    "/estimate",
    response_model=FareBreakdownResponse,
    response_model_exclude_none=True,
    summary="Estimate a fare",
    description=(
        "Prices a trip from explicit distance / duration, or from pickup "
        "and dropoff coordinates when those are omitted."
    ),
    responses={422: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def estimate_fare(
    request: Request,
    body: FareEstimateRequest,
    calculator: FareCalculator = Depends(get_calculator),
    geometry: GeometryProvider = Depends(get_geometry_provider),
):
    distance_km, duration_minutes = body.distance_km, body.duration_minutes

    # ── Fill geometry from coordinates ────────────────────────────
    if (distance_km is None or duration_minutes is None) and body.has_coordinates:
        estimate = geometry.estimate(
            body.pickup_lat, body.pickup_lng, body.dropoff_lat, body.dropoff_lng
        )
        if distance_km is None:
            distance_km = estimate.distance_km
        if duration_minutes is None:
            duration_minutes = estimate.duration_minutes

    trip = TripDescriptor(
        service_type=body.service_type,
        vehicle_type=body.vehicle_type,
        distance_km=distance_km,
        duration_minutes=duration_minutes,
        scheduled_at=body.scheduled_at,
        reference_time=body.reference_time,
    )
    try:
        breakdown = calculator.require(trip)
    except InsufficientTripGeometry as exc:
        logger.info("Fare estimate rejected: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))

    return FareBreakdownResponse.model_validate(breakdown.to_dict())


@router.get(
    "/rates",
    response_model=RateTableResponse,
    summary="Active rate table",
)
@limiter.limit(settings.rate_limit)
async def get_rates(
    request: Request,
    calculator: FareCalculator = Depends(get_calculator),
):
    table = calculator.rate_table
    return RateTableResponse(
        rates={
            service: RateCardResponse.model_validate(card)
            for service, card in table.cards.items()
        },
        minimum_fare=table.minimum_fare,
        maximum_fare=table.maximum_fare,
    )
