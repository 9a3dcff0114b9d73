"""Centralised application settings loaded from environment / .env file."""

from pydantic import model_validator
from pydantic_settings import BaseSettings

from src.domain.entities import RateCard, RateTable


class Settings(BaseSettings):
    # Rates per service type (INR)
    base_fare: dict[str, float] = {
        "city": 50.0,
        "airport": 100.0,
        "outstation": 200.0,
        "hourly": 150.0,
    }
    per_km_rate: dict[str, float] = {
        "city": 12.0,
        "airport": 15.0,
        "outstation": 18.0,
        "hourly": 20.0,
    }
    per_minute_rate: dict[str, float] = {
        "city": 2.0,
        "airport": 2.5,
        "outstation": 3.0,
        "hourly": 3.0,
    }

    # Fare floor / ceiling, applied after surge
    minimum_fare: float = 50.0
    maximum_fare: float = 5000.0

    # Coordinate-based geometry estimate
    road_factor: float = 1.3  # great-circle -> road distance
    average_speed_kmh: float = 30.0

    log_level: str = "INFO"
    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_fare_bounds(self) -> "Settings":
        if self.minimum_fare > self.maximum_fare:
            raise ValueError("minimum_fare must not exceed maximum_fare")
        return self

    def build_rate_table(self) -> RateTable:
        """Snapshot the configured rates into an immutable ``RateTable``."""
        services = set(self.base_fare) | set(self.per_km_rate) | set(self.per_minute_rate)
        cards = {
            service: RateCard(
                base_fare=self.base_fare.get(service, 0.0),
                per_km_rate=self.per_km_rate.get(service, 0.0),
                per_minute_rate=self.per_minute_rate.get(service, 0.0),
            )
            for service in services
        }
        return RateTable(
            cards=cards,
            minimum_fare=self.minimum_fare,
            maximum_fare=self.maximum_fare,
        )


settings = Settings()
