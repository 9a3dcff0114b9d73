"""Domain enumerations and static pricing tables."""

import enum


class ServiceType(str, enum.Enum):
    CITY = "city"
    OUTSTATION = "outstation"
    AIRPORT = "airport"
    HOURLY = "hourly"


class VehicleType(str, enum.Enum):
    SEDAN = "sedan"
    SUV = "suv"
    PREMIUM = "premium"
    HATCHBACK = "hatchback"


# Vehicle class -> fare multiplier. Classes not listed price at 1.0.
VEHICLE_MULTIPLIERS: dict[VehicleType, float] = {
    VehicleType.SEDAN: 1.0,
    VehicleType.SUV: 1.3,
    VehicleType.PREMIUM: 1.8,
}

DEFAULT_VEHICLE_MULTIPLIER = 1.0
