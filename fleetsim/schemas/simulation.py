"""
Simulation run Pydantic schemas.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from fleetsim.models import (
    OrderStatus,
    RunInputs,
    SimulationRun,
    SimulationStatus,
    TIME_PATTERN,
    TrafficLevel,
)
from fleetsim.schemas.base import BaseSchema


class SimulationInputs(BaseSchema):
    """
    Parameters for one simulation run.

    These are validated before any assignment work begins.
    """
    available_drivers: int = Field(
        ...,
        ge=1,
        le=100,
        description="Number of drivers to draw from the eligible pool",
    )
    route_start_time: str = Field(
        ...,
        pattern=TIME_PATTERN,
        description="Route start time (HH:MM)",
    )
    max_hours_per_driver: float = Field(
        ...,
        ge=1,
        le=16,
        description="Daily hour cap per driver",
    )
    simulation_name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    def to_model(self) -> RunInputs:
        return RunInputs(**self.model_dump())


class ProcessedOrderSchema(BaseSchema):
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


class FuelCostBreakdownSchema(BaseSchema):
    total: float = Field(0.0, ge=0)
    by_traffic_level: dict[TrafficLevel, float]


class RunResultsSchema(BaseSchema):
    """Run-level totals and derived metrics."""
    total_orders: int = Field(..., ge=0)
    on_time_count: int = Field(..., ge=0)
    late_count: int = Field(..., ge=0)
    unassigned_count: int = Field(..., ge=0)
    total_profit: float
    penalties: float = Field(..., ge=0)
    bonuses: float = Field(..., ge=0)
    fuel_cost_breakdown: FuelCostBreakdownSchema
    efficiency_score: int = Field(..., ge=0, le=100)
    driver_utilization: int = Field(..., ge=0, le=100)
    average_delivery_time: float = Field(..., ge=0)
    roi: int


class RunMetadataSchema(BaseSchema):
    version: str
    algorithm_used: str
    configuration_hash: Optional[str] = None


class SimulationRunResponse(BaseSchema):
    """Plain-data form of a finished run for the caller to persist."""
    id: str
    inputs: SimulationInputs
    results: RunResultsSchema
    orders_processed: list[ProcessedOrderSchema] = []
    status: SimulationStatus
    error_message: Optional[str] = Field(None, max_length=1000)
    execution_time_ms: float = 0.0
    metadata: RunMetadataSchema
    executed_by: Optional[str] = None
    created_at: datetime

    # Derived
    duration_in_seconds: int
    profit_per_order: float
    success_rate: int

    @classmethod
    def from_model(cls, run: SimulationRun) -> "SimulationRunResponse":
        return cls.model_validate(run)

    @property
    def is_finished(self) -> bool:
        return self.status != SimulationStatus.RUNNING
