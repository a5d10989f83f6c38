"""
Domain records for FleetSim.

Plain mutable records the simulation engine works on. Loading and saving
them is left to the caller.
"""

# Enums
from fleetsim.models.enums import (
    FatigueLevel,
    TrafficLevel,
    OrderStatus,
    OrderPriority,
    RouteDifficulty,
    SimulationStatus,
)

# Helpers
from fleetsim.models.base import (
    TIME_PATTERN,
    is_valid_time_str,
    time_str_to_minutes,
    minutes_to_time_str,
    round_half_up,
    round_money,
)

# Domain Models
from fleetsim.models.driver import Driver
from fleetsim.models.route import Route
from fleetsim.models.order import Order
from fleetsim.models.simulation import (
    RunInputs,
    ProcessedOrder,
    FuelCostBreakdown,
    RunResults,
    RunMetadata,
    SimulationRun,
)

__all__ = [
    # Enums
    "FatigueLevel",
    "TrafficLevel",
    "OrderStatus",
    "OrderPriority",
    "RouteDifficulty",
    "SimulationStatus",
    # Helpers
    "TIME_PATTERN",
    "is_valid_time_str",
    "time_str_to_minutes",
    "minutes_to_time_str",
    "round_half_up",
    "round_money",
    # Domain Models
    "Driver",
    "Route",
    "Order",
    "RunInputs",
    "ProcessedOrder",
    "FuelCostBreakdown",
    "RunResults",
    "RunMetadata",
    "SimulationRun",
]
