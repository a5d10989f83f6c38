"""
Route record for FleetSim.
"""
from dataclasses import dataclass
from typing import Optional

from fleetsim.core.config import settings
from fleetsim.models.base import round_half_up, round_money, to_decimal
from fleetsim.models.enums import RouteDifficulty, TrafficLevel


@dataclass
class Route:
    """
    Delivery route from the catalog.

    Attributes:
        route_id: Catalog identifier referenced by orders
        distance_km: Route length (0.1-1000 km)
        traffic_level: Low / Medium / High
        base_time_min: Nominal delivery time (1-600 minutes)
        average_delivery_time: Rolling mean of observed delivery times
        total_deliveries: Deliveries recorded against the route
    """
    route_id: int
    distance_km: float
    traffic_level: TrafficLevel
    base_time_min: int
    is_active: bool = True
    area: Optional[str] = None
    difficulty: RouteDifficulty = RouteDifficulty.MEDIUM
    average_delivery_time: float = 0.0
    total_deliveries: int = 0

    @property
    def base_fuel_cost(self) -> float:
        return float(to_decimal(self.distance_km) * settings.fuel_cost_per_km)

    @property
    def traffic_surcharge(self) -> float:
        if TrafficLevel(self.traffic_level).has_fuel_surcharge:
            return float(
                to_decimal(self.distance_km) * settings.high_traffic_surcharge_per_km
            )
        return 0.0

    @property
    def total_fuel_cost(self) -> float:
        return round_money(self.base_fuel_cost + self.traffic_surcharge)

    @property
    def allowed_delivery_time(self) -> int:
        """Nominal time plus the on-time grace window."""
        return self.base_time_min + settings.on_time_grace_minutes

    def fuel_cost_breakdown(self) -> dict[str, float]:
        return {
            "base_cost": self.base_fuel_cost,
            "traffic_surcharge": self.traffic_surcharge,
            "total_cost": self.total_fuel_cost,
        }

    def record_delivery(self, actual_minutes: float) -> None:
        """Fold an observed delivery time into the rolling average."""
        self.total_deliveries += 1
        current_avg = self.average_delivery_time or self.base_time_min
        self.average_delivery_time = float(round_half_up(
            (current_avg * (self.total_deliveries - 1) + actual_minutes)
            / self.total_deliveries
        ))

    def __repr__(self) -> str:
        return (
            f"<Route(route_id={self.route_id}, distance_km={self.distance_km}, "
            f"traffic={self.traffic_level.value})>"
        )
