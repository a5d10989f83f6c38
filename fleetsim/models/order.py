"""
Order record for FleetSim.
"""
from dataclasses import dataclass
from typing import Optional

from fleetsim.core.config import settings
from fleetsim.models.base import time_str_to_minutes, to_decimal
from fleetsim.models.enums import OrderPriority, OrderStatus


@dataclass
class Order:
    """
    Customer order tied to a catalog route.

    Money fields (penalty, bonus, fuel_cost, profit) are written by the
    profit calculator; profit is always value_rs + bonus - penalty - fuel_cost
    rounded to 2 decimal places.

    is_on_time is tri-state: None until a delivery outcome is known.
    """
    order_id: int
    value_rs: float
    route_id: int
    delivery_time: str  # HH:MM
    status: OrderStatus = OrderStatus.PENDING
    assigned_driver_id: Optional[str] = None
    assigned_route_id: Optional[int] = None
    is_on_time: Optional[bool] = None
    penalty: float = 0.0
    bonus: float = 0.0
    fuel_cost: float = 0.0
    profit: float = 0.0
    actual_delivery_time: Optional[str] = None
    delivery_notes: Optional[str] = None
    priority: OrderPriority = OrderPriority.MEDIUM
    customer_rating: Optional[int] = None

    @property
    def is_high_value(self) -> bool:
        return to_decimal(self.value_rs) > settings.high_value_threshold

    @property
    def delivery_time_minutes(self) -> int:
        return time_str_to_minutes(self.delivery_time)

    @property
    def actual_delivery_time_minutes(self) -> Optional[int]:
        if not self.actual_delivery_time:
            return None
        return time_str_to_minutes(self.actual_delivery_time)

    @property
    def is_assigned(self) -> bool:
        return self.assigned_driver_id is not None

    def assign_to(self, driver_id: str, route_id: int) -> None:
        self.assigned_driver_id = driver_id
        self.assigned_route_id = route_id
        self.status = OrderStatus.ASSIGNED

    def mark_failed(self) -> None:
        """Leave the order unassigned and flag it as failed."""
        self.assigned_driver_id = None
        self.assigned_route_id = None
        self.status = OrderStatus.FAILED

    def mark_delivered(
        self,
        actual_delivery_time: str,
        was_on_time: bool,
        customer_rating: Optional[int] = None,
    ) -> None:
        # Validates the clock format
        time_str_to_minutes(actual_delivery_time)
        self.status = OrderStatus.DELIVERED
        self.actual_delivery_time = actual_delivery_time
        self.is_on_time = was_on_time
        if customer_rating:
            self.customer_rating = customer_rating

    def __repr__(self) -> str:
        return (
            f"<Order(order_id={self.order_id}, value_rs={self.value_rs}, "
            f"status={self.status.value})>"
        )
