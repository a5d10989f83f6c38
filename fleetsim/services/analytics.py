"""
Reporting and run comparison over in-memory collections.

Each function is a plain fold over records the caller has already loaded;
no query language is involved.
"""
from collections import defaultdict
from typing import Any, Iterable, Optional

from fleetsim.core.config import settings
from fleetsim.models import (
    Order,
    OrderStatus,
    Route,
    SimulationRun,
    SimulationStatus,
    TrafficLevel,
    round_money,
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# =========================================================================
# Orders
# =========================================================================

def order_statistics(orders: Iterable[Order]) -> dict[OrderStatus, dict[str, float]]:
    """Per-status counts and money totals."""
    groups: dict[OrderStatus, list[Order]] = defaultdict(list)
    for order in orders:
        groups[OrderStatus(order.status)].append(order)

    return {
        status: {
            "count": len(group),
            "total_value": round_money(sum(o.value_rs for o in group)),
            "avg_value": round_money(_mean([o.value_rs for o in group])),
            "total_profit": round_money(sum(o.profit for o in group)),
            "total_penalties": round_money(sum(o.penalty for o in group)),
            "total_bonuses": round_money(sum(o.bonus for o in group)),
        }
        for status, group in groups.items()
    }


def delivery_metrics(orders: Iterable[Order]) -> Optional[dict[str, float]]:
    """
    Delivery performance over orders with a known on-time outcome.

    Returns None when no order has an outcome yet.
    """
    known = [o for o in orders if o.is_on_time is not None]
    if not known:
        return None

    on_time = sum(1 for o in known if o.is_on_time)
    return {
        "total_orders": len(known),
        "on_time_deliveries": on_time,
        "late_deliveries": len(known) - on_time,
        "total_profit": round_money(sum(o.profit for o in known)),
        "avg_order_value": round_money(_mean([o.value_rs for o in known])),
        "efficiency_score": on_time / len(known) * 100,
    }


def high_value_orders(
    orders: Iterable[Order],
    min_value: Optional[float] = None,
) -> list[Order]:
    """
    Non-cancelled orders worth more than min_value, most valuable first.

    min_value defaults to the configured high-value threshold.
    """
    if min_value is None:
        min_value = float(settings.high_value_threshold)
    selected = [
        o for o in orders
        if o.value_rs > min_value and o.status != OrderStatus.CANCELLED
    ]
    return sorted(selected, key=lambda o: o.value_rs, reverse=True)


# =========================================================================
# Routes
# =========================================================================

def routes_by_traffic_level(routes: Iterable[Route], traffic_level: TrafficLevel) -> list[Route]:
    """Active routes with the given traffic level, shortest first."""
    level = TrafficLevel(traffic_level)
    selected = [r for r in routes if r.is_active and r.traffic_level == level]
    return sorted(selected, key=lambda r: r.distance_km)


def route_statistics(routes: Iterable[Route]) -> dict[TrafficLevel, dict[str, float]]:
    """Active routes grouped by traffic level."""
    groups: dict[TrafficLevel, list[Route]] = defaultdict(list)
    for route in routes:
        if route.is_active:
            groups[TrafficLevel(route.traffic_level)].append(route)

    return {
        level: {
            "avg_distance": _mean([r.distance_km for r in group]),
            "avg_base_time": _mean([r.base_time_min for r in group]),
            "total_routes": len(group),
            "avg_fuel_cost": _mean([r.base_fuel_cost for r in group]),
        }
        for level, group in groups.items()
    }


# =========================================================================
# Simulation runs
# =========================================================================

def _completed(runs: Iterable[SimulationRun]) -> list[SimulationRun]:
    return [r for r in runs if r.status == SimulationStatus.COMPLETED]


def top_performing(runs: Iterable[SimulationRun], limit: int = 10) -> list[SimulationRun]:
    """Completed runs ranked by total profit, then efficiency score."""
    ranked = sorted(
        _completed(runs),
        key=lambda r: (r.results.total_profit, r.results.efficiency_score),
        reverse=True,
    )
    return ranked[:limit]


def simulation_analytics(runs: Iterable[SimulationRun]) -> Optional[dict[str, float]]:
    """Aggregate figures across completed runs (None if there are none)."""
    completed = _completed(runs)
    if not completed:
        return None

    profits = [r.results.total_profit for r in completed]
    return {
        "total_simulations": len(completed),
        "avg_profit": round_money(_mean(profits)),
        "avg_efficiency": _mean([r.results.efficiency_score for r in completed]),
        "max_profit": max(profits),
        "min_profit": min(profits),
        "avg_execution_time": _mean([r.execution_time_ms for r in completed]),
        "total_orders_processed": sum(r.results.total_orders for r in completed),
    }


def compare_simulations(
    runs: Iterable[SimulationRun],
    simulation_ids: Iterable[str],
) -> list[dict[str, Any]]:
    """
    Side-by-side view of the requested completed runs.

    Runs keep the order of simulation_ids; unknown or unfinished ids are skipped.
    """
    by_id = {r.id: r for r in _completed(runs)}
    comparison = []
    for simulation_id in simulation_ids:
        run = by_id.get(simulation_id)
        if run is None:
            continue
        comparison.append({
            "id": run.id,
            "inputs": run.inputs,
            "summary": run.performance_summary(),
            "executed_by": run.executed_by,
            "created_at": run.created_at,
        })
    return comparison

