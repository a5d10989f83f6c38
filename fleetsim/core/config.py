"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Redis & Celery
    # =========================================================================
    celery_broker_url: str = Field(
        default="redis://localhost:6379/0",
        description="Celery message broker URL",
    )

    celery_result_backend: str = Field(
        default="redis://localhost:6379/1",
        description="Celery result backend URL",
    )

    simulation_time_limit: int = Field(
        default=120,
        description="Soft time limit for a simulation task in seconds",
    )

    # =========================================================================
    # Simulation Defaults
    # =========================================================================
    default_max_hours_per_driver: int = Field(
        default=8,
        description="Daily hour cap used when a run does not specify one",
    )

    default_route_start_time: str = Field(
        default="09:00",
        description="Route start time (HH:MM) used when a run does not specify one",
    )

    algorithm_name: str = "round-robin-assignment"
    algorithm_version: str = "1.0.0"

    # =========================================================================
    # Cost Model (Rs)
    # =========================================================================
    fuel_cost_per_km: Decimal = Field(
        default=Decimal("5"),
        description="Base fuel cost per kilometer",
    )

    high_traffic_surcharge_per_km: Decimal = Field(
        default=Decimal("2"),
        description="Extra fuel cost per kilometer on High traffic routes",
    )

    late_delivery_penalty: Decimal = Field(
        default=Decimal("50"),
        description="Flat penalty for a late delivery",
    )

    high_value_threshold: Decimal = Field(
        default=Decimal("1000"),
        description="Order value above which on-time deliveries earn a bonus",
    )

    high_value_bonus_rate: Decimal = Field(
        default=Decimal("0.10"),
        description="Bonus as a fraction of order value",
    )

    # =========================================================================
    # Timing & Fatigue
    # =========================================================================
    on_time_grace_minutes: int = Field(
        default=10,
        description="Minutes added to the estimate before a delivery counts as late",
    )

    fatigue_hours_threshold: Decimal = Field(
        default=Decimal("8"),
        description="Hours in a day above which the day counts as overwork",
    )

    exhausted_overwork_days: int = Field(
        default=3,
        description="Overwork days (out of 7) that classify a driver as exhausted",
    )

    fatigue_time_multiplier: Decimal = Field(
        default=Decimal("1.3"),
        description="Delivery time multiplier for fatigued drivers",
    )

    low_traffic_multiplier: Decimal = Decimal("1.0")
    medium_traffic_multiplier: Decimal = Decimal("1.1")
    high_traffic_multiplier: Decimal = Decimal("1.2")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
