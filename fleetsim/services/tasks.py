"""
Celery tasks for FleetSim.

Each task runs one simulation on the snapshot it was sent, so any number
of runs can execute side by side without sharing driver state. Loading
the snapshot and persisting the returned records is up to the caller.
"""
from typing import Any, Optional
import logging

from fleetsim.core.celery_app import celery_app
from fleetsim.core.config import settings
from fleetsim.core.exceptions import SimulationValidationError
from fleetsim.schemas import (
    DriverResponse,
    OrderResponse,
    RouteResponse,
    SimulationRunResponse,
)
from fleetsim.services.simulation import SimulationOutcome, SimulationRunner

logger = logging.getLogger(__name__)


def serialize_outcome(outcome: SimulationOutcome) -> dict[str, Any]:
    """Convert a finished run and its mutated snapshots to JSON-safe dicts."""
    return {
        "run": SimulationRunResponse.from_model(outcome.run).model_dump(mode="json"),
        "drivers": [
            DriverResponse.from_model(d).model_dump(mode="json") for d in outcome.drivers
        ],
        "routes": [
            RouteResponse.from_model(r).model_dump(mode="json") for r in outcome.routes
        ],
        "orders": [
            OrderResponse.from_model(o).model_dump(mode="json") for o in outcome.orders
        ],
    }


def with_run_defaults(inputs: dict[str, Any]) -> dict[str, Any]:
    """Fill the route start time and hour cap from settings when omitted."""
    filled = dict(inputs)
    if "route_start_time" not in filled and "routeStartTime" not in filled:
        filled["route_start_time"] = settings.default_route_start_time
    if "max_hours_per_driver" not in filled and "maxHoursPerDriver" not in filled:
        filled["max_hours_per_driver"] = settings.default_max_hours_per_driver
    return filled


@celery_app.task(
    bind=True,
    name="fleetsim.services.tasks.run_simulation",
    queue="simulation",
)
def run_simulation(
    self,
    payload: dict[str, Any],
    executed_by: Optional[str] = None,
) -> dict[str, Any]:
    """
    Run one simulation as a Celery task.

    Args:
        payload: {"inputs": {...}, "drivers": [...], "routes": [...],
                  "orders": [...], "close_day": bool}
        executed_by: Identifier of whoever triggered the run

    Returns:
        Serialised outcome, or {"status": "failed", "errors": [...]} when
        the payload does not validate
    """
    task_id = self.request.id
    logger.info(f"Starting simulation task {task_id}")

    runner = SimulationRunner()
    try:
        outcome = runner.run(
            inputs=with_run_defaults(payload.get("inputs", {})),
            drivers=payload.get("drivers", []),
            routes=payload.get("routes", []),
            orders=payload.get("orders", []),
            close_day=payload.get("close_day", False),
            executed_by=executed_by,
        )
    except SimulationValidationError as e:
        # Bad input will not get better on retry
        logger.warning(f"Simulation task {task_id} rejected: {e}")
        return {
            "status": "failed",
            "error_message": str(e),
            "errors": [
                {"field": v.field, "message": v.message} for v in e.violations
            ],
        }

    result = serialize_outcome(outcome)
    logger.info(
        f"Simulation task {task_id} finished with status {outcome.run.status.value}"
    )
    return result
