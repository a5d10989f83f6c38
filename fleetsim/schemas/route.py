"""
Route Pydantic schemas.
"""
from typing import Optional

from pydantic import Field

from fleetsim.models import Route, RouteDifficulty, TrafficLevel
from fleetsim.schemas.base import BaseSchema


class RouteCreate(BaseSchema):
    """Schema for a route snapshot handed to the engine."""
    route_id: int = Field(..., ge=1)
    distance_km: float = Field(..., ge=0.1, le=1000, description="Route length in km")
    traffic_level: TrafficLevel
    base_time_min: int = Field(..., ge=1, le=600, description="Nominal delivery time in minutes")
    is_active: bool = True
    area: Optional[str] = Field(None, max_length=100)
    difficulty: RouteDifficulty = RouteDifficulty.MEDIUM
    average_delivery_time: float = Field(0.0, ge=0)
    total_deliveries: int = Field(0, ge=0)

    def to_model(self) -> Route:
        return Route(**self.model_dump())


class RouteResponse(RouteCreate):
    """Route with derived cost and timing fields."""
    base_fuel_cost: float
    traffic_surcharge: float
    total_fuel_cost: float
    allowed_delivery_time: int

    @classmethod
    def from_model(cls, route: Route) -> "RouteResponse":
        return cls.model_validate(route)
