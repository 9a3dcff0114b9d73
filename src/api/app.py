"""
FastAPI application factory.

* Registers routes for fares and admin.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, fares
from src.config import settings

logging.basicConfig(level=settings.log_level.upper())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fare & Surge Pricing API",
        description=(
            "Itemised ride fares for city, airport, outstation and hourly "
            "trips, with time-of-day surge, trip-length adjustments and "
            "advance-booking discounts explained in an audit trail."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(fares.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
