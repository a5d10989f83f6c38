"""
Simulation run records for FleetSim.

A SimulationRun is created when a run starts, receives processed orders
while it is RUNNING, and is frozen once its status becomes final.
"""
import hashlib
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from fleetsim.models.base import round_half_up, round_money
from fleetsim.models.enums import OrderStatus, SimulationStatus, TrafficLevel


@dataclass(frozen=True)
class RunInputs:
    """Immutable run parameters."""
    available_drivers: int
    route_start_time: str
    max_hours_per_driver: float
    simulation_name: Optional[str] = None
    description: Optional[str] = None

    def configuration_hash(self) -> str:
        """SHA-256 over the canonical JSON form of the inputs."""
        canonical = json.dumps(asdict(self), sort_keys=True, default=str)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


@dataclass
class ProcessedOrder:
    """Outcome of one order within a run."""
    order_id: int
    status: OrderStatus
    route_id: Optional[int] = None
    traffic_level: Optional[TrafficLevel] = None
    driver_id: Optional[str] = None
    was_on_time: Optional[bool] = None
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    profit: float = 0.0
    penalty: float = 0.0
    bonus: float = 0.0
    fuel_cost: float = 0.0
    failure_reason: Optional[str] = None

    @property
    def is_assigned(self) -> bool:
        return self.driver_id is not None


@dataclass
class FuelCostBreakdown:
    total: float = 0.0
    by_traffic_level: dict[TrafficLevel, float] = field(
        default_factory=lambda: {level: 0.0 for level in TrafficLevel}
    )


@dataclass
class RunResults:
    """Run-level totals and derived metrics."""
    total_orders: int = 0
    on_time_count: int = 0
    late_count: int = 0
    unassigned_count: int = 0
    total_profit: float = 0.0
    penalties: float = 0.0
    bonuses: float = 0.0
    fuel_cost_breakdown: FuelCostBreakdown = field(default_factory=FuelCostBreakdown)
    efficiency_score: int = 0
    driver_utilization: int = 0
    average_delivery_time: float = 0.0

    @property
    def total_costs(self) -> float:
        return self.fuel_cost_breakdown.total + self.penalties

    @property
    def total_revenue(self) -> float:
        return self.total_profit + self.total_costs

    @property
    def roi(self) -> int:
        """
        Return on investment percentage.

        Note: (revenue - costs) / costs reduces to total_profit / total_costs.
        """
        total_costs = self.total_costs
        if total_costs == 0:
            return 0
        return round_half_up((self.total_revenue - total_costs) / total_costs * 100)


@dataclass
class RunMetadata:
    version: str = "1.0.0"
    algorithm_used: str = "round-robin-assignment"
    configuration_hash: Optional[str] = None


@dataclass
class SimulationRun:
    """
    One simulation pass over an order batch.

    Lifecycle:
    1. RUNNING: orders are being processed
    2. COMPLETED: all orders processed, results finalized
    3. FAILED: a computation fault stopped processing (partial results kept)
    4. CANCELLED: stopped between orders on request
    """
    inputs: RunInputs
    id: str = field(default_factory=lambda: str(uuid4()))
    results: RunResults = field(default_factory=RunResults)
    orders_processed: list[ProcessedOrder] = field(default_factory=list)
    status: SimulationStatus = SimulationStatus.RUNNING
    error_message: Optional[str] = None
    execution_time_ms: float = 0.0
    metadata: RunMetadata = field(default_factory=RunMetadata)
    executed_by: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def duration_in_seconds(self) -> int:
        return round_half_up(self.execution_time_ms / 1000)

    @property
    def profit_per_order(self) -> float:
        if self.results.total_orders == 0:
            return 0.0
        return round_money(self.results.total_profit / self.results.total_orders)

    @property
    def success_rate(self) -> int:
        if self.results.total_orders == 0:
            return 0
        return round_half_up(self.results.on_time_count / self.results.total_orders * 100)

    @property
    def roi(self) -> int:
        return self.results.roi

    def add_processed_order(self, processed: ProcessedOrder) -> None:
        if self.status.is_final:
            raise ValueError(f"Run {self.id} is {self.status.value}; results are frozen")
        self.orders_processed.append(processed)

    def finish(self, status: SimulationStatus, error_message: Optional[str] = None) -> None:
        """Fix the final status. A run can only be finished once."""
        if self.status.is_final:
            raise ValueError(f"Run {self.id} already finished as {self.status.value}")
        if not status.is_final:
            raise ValueError("Cannot finish a run with status 'running'")
        self.status = status
        if error_message:
            self.error_message = error_message[:1000]

    def performance_summary(self) -> dict[str, Any]:
        return {
            "total_profit": self.results.total_profit,
            "efficiency_score": self.results.efficiency_score,
            "success_rate": self.success_rate,
            "profit_per_order": self.profit_per_order,
            "roi": self.roi,
            "driver_utilization": self.results.driver_utilization,
            "total_orders_processed": self.results.total_orders,
            "execution_time": self.duration_in_seconds,
        }

    def __repr__(self) -> str:
        return (
            f"<SimulationRun(id={self.id}, status={self.status.value}, "
            f"orders={len(self.orders_processed)})>"
        )
