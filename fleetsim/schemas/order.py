"""
Order Pydantic schemas with delivery time validation.
"""
from typing import Optional

from pydantic import Field

from fleetsim.models import Order, OrderPriority, OrderStatus, TIME_PATTERN
from fleetsim.schemas.base import BaseSchema


class OrderCreate(BaseSchema):
    """
    Schema for an order snapshot handed to the engine.

    Time format: "HH:MM" (24-hour, leading zero optional)
    """
    order_id: int = Field(..., ge=1)
    value_rs: float = Field(..., ge=0, le=100000, description="Order value in Rs")
    route_id: int = Field(..., ge=1)
    delivery_time: str = Field(..., pattern=TIME_PATTERN, description="Delivery time (HH:MM)")
    status: OrderStatus = OrderStatus.PENDING
    assigned_driver_id: Optional[str] = None
    assigned_route_id: Optional[int] = None
    is_on_time: Optional[bool] = None
    penalty: float = Field(0.0, ge=0)
    bonus: float = Field(0.0, ge=0)
    fuel_cost: float = Field(0.0, ge=0)
    profit: float = 0.0
    actual_delivery_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    delivery_notes: Optional[str] = Field(None, max_length=500)
    priority: OrderPriority = OrderPriority.MEDIUM
    customer_rating: Optional[int] = Field(None, ge=1, le=5)

    def to_model(self) -> Order:
        return Order(**self.model_dump())


class OrderResponse(OrderCreate):
    """Order with derived fields."""
    is_high_value: bool
    delivery_time_minutes: int

    @classmethod
    def from_model(cls, order: Order) -> "OrderResponse":
        return cls.model_validate(order)
