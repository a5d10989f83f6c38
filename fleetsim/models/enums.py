"""
Enum type definitions for FleetSim.

Values match the strings stored by the record keepers that persist
drivers, routes, orders and simulation runs.
"""
from enum import Enum


class FatigueLevel(str, Enum):
    """
    Driver fatigue classification derived from the rolling 7-day workload.

    - NORMAL: no day above the overwork threshold
    - TIRED: 1 or 2 overwork days
    - EXHAUSTED: 3 or more overwork days
    """
    NORMAL = "normal"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


class TrafficLevel(str, Enum):
    """
    Route traffic level affecting delivery time and fuel cost.

    Time multiplier mapping:
    - LOW: x1.0
    - MEDIUM: x1.1
    - HIGH: x1.2 (also incurs a per-km fuel surcharge)
    """
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def has_fuel_surcharge(self) -> bool:
        """Only high-traffic routes pay the fuel surcharge."""
        return self == TrafficLevel.HIGH


class OrderStatus(str, Enum):
    """Order lifecycle status."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    FAILED = "failed"


class OrderPriority(str, Enum):
    """Customer-facing order priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class RouteDifficulty(str, Enum):
    """Subjective route difficulty rating."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SimulationStatus(str, Enum):
    """Simulation run status."""
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        return self != SimulationStatus.RUNNING
