"""
Driver Pydantic schemas.
"""
from typing import Optional

from pydantic import Field, field_validator

from fleetsim.models import Driver, FatigueLevel
from fleetsim.models.driver import WEEK_DAYS
from fleetsim.schemas.base import BaseSchema


class DriverBase(BaseSchema):
    """Base driver schema with common fields."""
    name: str = Field(..., min_length=2, max_length=50)
    shift_hours: float = Field(..., ge=1, le=12, description="Contracted hours per shift")
    past_week_hours: list[float] = Field(
        ...,
        description="Hours worked on each of the last 7 days, oldest first",
    )

    @field_validator("past_week_hours")
    @classmethod
    def validate_past_week_hours(cls, v: list[float]) -> list[float]:
        if len(v) != WEEK_DAYS:
            raise ValueError(
                f"Past week hours must contain exactly {WEEK_DAYS} values, got {len(v)}"
            )
        if not all(0 <= h <= 24 for h in v):
            raise ValueError("Each past week hours value must be between 0 and 24")
        return v


class DriverCreate(DriverBase):
    """Schema for a driver snapshot handed to the engine."""
    id: Optional[str] = None
    current_day_hours: float = Field(0.0, ge=0)
    is_active: bool = True
    efficiency: float = Field(100.0, ge=0, le=100)
    total_deliveries: int = Field(0, ge=0)
    on_time_deliveries: int = Field(0, ge=0)
    fatigue_level: FatigueLevel = FatigueLevel.NORMAL

    def to_model(self) -> Driver:
        kwargs = self.model_dump(exclude={"id"})
        kwargs["past_week_hours"] = list(self.past_week_hours)
        if self.id is not None:
            kwargs["id"] = self.id
        return Driver(**kwargs)


class DriverResponse(DriverCreate):
    """Driver with derived fields."""
    id: str
    average_weekly_hours: float
    success_rate: int
    is_fatigued: bool

    @classmethod
    def from_model(cls, driver: Driver) -> "DriverResponse":
        return cls.model_validate(driver)
