"""
Per-order financial outcome.

    fuel_cost = distance_km × fuel_rate (+ distance_km × surcharge on High traffic)
    penalty   = late_penalty            if is_on_time is False
    bonus     = value × bonus_rate      if value > threshold and is_on_time is True
    profit    = round2(value + bonus - penalty - fuel_cost)

An unknown outcome (is_on_time None) earns neither penalty nor bonus.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from fleetsim.core.config import settings
from fleetsim.models import Order, Route, TrafficLevel
from fleetsim.models.base import round_money, to_decimal


@dataclass(frozen=True)
class ProfitBreakdown:
    order_value: float
    fuel_cost: float
    penalty: float
    bonus: float
    profit: float


class ProfitCalculator:
    """Computes fuel cost, penalty, bonus and net profit for one order."""

    def __init__(
        self,
        fuel_cost_per_km: Optional[Decimal] = None,
        high_traffic_surcharge_per_km: Optional[Decimal] = None,
        late_delivery_penalty: Optional[Decimal] = None,
        high_value_threshold: Optional[Decimal] = None,
        high_value_bonus_rate: Optional[Decimal] = None,
    ):
        def pick(value, default):
            return to_decimal(value if value is not None else default)

        self.fuel_cost_per_km = pick(fuel_cost_per_km, settings.fuel_cost_per_km)
        self.high_traffic_surcharge_per_km = pick(
            high_traffic_surcharge_per_km, settings.high_traffic_surcharge_per_km
        )
        self.late_delivery_penalty = pick(late_delivery_penalty, settings.late_delivery_penalty)
        self.high_value_threshold = pick(high_value_threshold, settings.high_value_threshold)
        self.high_value_bonus_rate = pick(high_value_bonus_rate, settings.high_value_bonus_rate)

    def fuel_cost(self, route: Optional[Route]) -> Decimal:
        if route is None:
            return Decimal("0")
        distance = to_decimal(route.distance_km)
        cost = distance * self.fuel_cost_per_km
        if TrafficLevel(route.traffic_level).has_fuel_surcharge:
            cost += distance * self.high_traffic_surcharge_per_km
        return cost

    def compute(
        self,
        order: Order,
        route: Optional[Route],
        is_on_time: Optional[bool],
    ) -> ProfitBreakdown:
        """
        Compute the outcome and write it onto the order.

        Writes penalty, bonus, fuel_cost, profit and is_on_time.
        """
        value = to_decimal(order.value_rs)
        fuel_cost = self.fuel_cost(route)

        penalty = self.late_delivery_penalty if is_on_time is False else Decimal("0")

        bonus = Decimal("0")
        if value > self.high_value_threshold and is_on_time is True:
            bonus = value * self.high_value_bonus_rate

        profit = round_money(value + bonus - penalty - fuel_cost)

        order.penalty = float(penalty)
        order.bonus = float(bonus)
        order.fuel_cost = float(fuel_cost)
        order.profit = profit
        order.is_on_time = is_on_time

        return ProfitBreakdown(
            order_value=float(value),
            fuel_cost=order.fuel_cost,
            penalty=order.penalty,
            bonus=order.bonus,
            profit=profit,
        )
