"""
Run-level statistics folded from processed orders.

Derived metrics:
    efficiency_score   = round(on_time / total_orders × 100)           (0 if no orders)
    driver_utilization = min(100, round(total_orders / drivers × 10))  (0 if no drivers)
    roi                = see RunResults.roi

Unassigned orders count towards total_orders but not on-time/late, and
contribute no money.
"""
from decimal import Decimal
from typing import Iterable

from fleetsim.models import (
    FuelCostBreakdown,
    ProcessedOrder,
    RunResults,
    TrafficLevel,
    round_half_up,
    round_money,
)
from fleetsim.models.base import to_decimal


class StatsAggregator:
    """Folds processed orders into RunResults."""

    def fold(self, processed_orders: Iterable[ProcessedOrder]) -> RunResults:
        total_orders = 0
        on_time = late = unassigned = 0
        profit = penalties = bonuses = fuel_total = Decimal("0")
        fuel_by_level = {level: Decimal("0") for level in TrafficLevel}
        estimated_minutes: list[int] = []

        for processed in processed_orders:
            total_orders += 1

            if not processed.is_assigned:
                unassigned += 1
                continue

            if processed.was_on_time is True:
                on_time += 1
            elif processed.was_on_time is False:
                late += 1

            profit += to_decimal(processed.profit)
            penalties += to_decimal(processed.penalty)
            bonuses += to_decimal(processed.bonus)

            fuel = to_decimal(processed.fuel_cost)
            fuel_total += fuel
            if processed.traffic_level is not None:
                fuel_by_level[TrafficLevel(processed.traffic_level)] += fuel

            if processed.estimated_minutes is not None:
                estimated_minutes.append(processed.estimated_minutes)

        average_time = (
            round_money(sum(estimated_minutes) / len(estimated_minutes))
            if estimated_minutes else 0.0
        )

        results = RunResults(
            total_orders=total_orders,
            on_time_count=on_time,
            late_count=late,
            unassigned_count=unassigned,
            total_profit=round_money(profit),
            penalties=round_money(penalties),
            bonuses=round_money(bonuses),
            fuel_cost_breakdown=FuelCostBreakdown(
                total=round_money(fuel_total),
                by_traffic_level={
                    level: round_money(amount) for level, amount in fuel_by_level.items()
                },
            ),
            average_delivery_time=average_time,
        )
        results.efficiency_score = self.efficiency_score(results)
        return results

    def efficiency_score(self, results: RunResults) -> int:
        if results.total_orders == 0:
            return 0
        return round_half_up(results.on_time_count / results.total_orders * 100)

    def driver_utilization(self, results: RunResults, available_drivers: int) -> int:
        if available_drivers <= 0:
            return 0
        return min(100, round_half_up(results.total_orders / available_drivers * 10))

    def finalize(self, results: RunResults, available_drivers: int) -> RunResults:
        """
        Recompute the derived metrics from the current totals.

        Call again whenever total_orders or the driver count changes.
        """
        results.efficiency_score = self.efficiency_score(results)
        results.driver_utilization = self.driver_utilization(results, available_drivers)
        return results
