"""
Pydantic schemas for validating engine inputs and serialising results.
"""

from fleetsim.schemas.base import BaseSchema
from fleetsim.schemas.driver import DriverCreate, DriverResponse
from fleetsim.schemas.route import RouteCreate, RouteResponse
from fleetsim.schemas.order import OrderCreate, OrderResponse
from fleetsim.schemas.simulation import (
    SimulationInputs,
    ProcessedOrderSchema,
    FuelCostBreakdownSchema,
    RunResultsSchema,
    RunMetadataSchema,
    SimulationRunResponse,
)
from fleetsim.schemas.validation import (
    ValidationResult,
    validate_driver,
    validate_route,
    validate_order,
    validate_simulation_inputs,
)

__all__ = [
    # Base
    "BaseSchema",
    # Driver
    "DriverCreate",
    "DriverResponse",
    # Route
    "RouteCreate",
    "RouteResponse",
    # Order
    "OrderCreate",
    "OrderResponse",
    # Simulation
    "SimulationInputs",
    "ProcessedOrderSchema",
    "FuelCostBreakdownSchema",
    "RunResultsSchema",
    "RunMetadataSchema",
    "SimulationRunResponse",
    # Validation
    "ValidationResult",
    "validate_driver",
    "validate_route",
    "validate_order",
    "validate_simulation_inputs",
]
