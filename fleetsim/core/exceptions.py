"""
Exception hierarchy for FleetSim.

- SimulationValidationError: bad input, raised before a run starts
- AssignmentFailure: one order could not be assigned (recorded, not raised out of a run)
- RunFailure: unexpected fault during a run (run marked failed)
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Violation:
    """A single field-level validation problem."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class FleetSimError(Exception):
    """Base class for all FleetSim errors."""


class SimulationValidationError(FleetSimError):
    """Raised when run inputs or entity snapshots fail validation."""

    def __init__(self, violations: list[Violation], subject: str = "simulation"):
        self.violations = list(violations)
        self.subject = subject
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid {subject}: {details}")


class AssignmentFailure(FleetSimError):
    """No eligible driver could take an order."""

    def __init__(self, order_id: int, reason: str):
        self.order_id = order_id
        self.reason = reason
        super().__init__(f"Order {order_id} not assigned: {reason}")


class RunFailure(FleetSimError):
    """Unrecoverable fault while processing a run."""

    def __init__(self, message: str, order_id: Optional[int] = None):
        self.order_id = order_id
        super().__init__(message)


class RouteReferenceError(RunFailure):
    """An order references a route that is not in the route snapshot."""

    def __init__(self, order_id: int, route_id: int):
        self.route_id = route_id
        super().__init__(
            f"Order {order_id} references unknown route {route_id}",
            order_id=order_id,
        )
