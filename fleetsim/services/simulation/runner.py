"""
End-to-end simulation pass.

SimulationRunner validates the inputs, snapshots drivers/routes/orders,
then for each order (ascending order_id):

    ConstraintFilter -> AssignmentScheduler -> OnTimeEvaluator -> ProfitCalculator

and finally folds the outcomes with StatsAggregator. The pass is strictly
sequential. I/O (loading the roster, saving results) belongs to the caller.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional
import logging
import threading
import time

from fleetsim.core.config import Settings, settings as default_settings
from fleetsim.core.exceptions import RunFailure, SimulationValidationError, Violation
from fleetsim.models import (
    Driver,
    Order,
    ProcessedOrder,
    Route,
    RunInputs,
    RunMetadata,
    SimulationRun,
    SimulationStatus,
)
from fleetsim.schemas.validation import (
    ValidationResult,
    validate_driver,
    validate_order,
    validate_route,
    validate_simulation_inputs,
)
from fleetsim.services.simulation.constraints import ConstraintFilter
from fleetsim.services.simulation.fatigue import FatigueTracker
from fleetsim.services.simulation.profit import ProfitCalculator
from fleetsim.services.simulation.scheduler import Assignment, AssignmentScheduler
from fleetsim.services.simulation.stats import StatsAggregator
from fleetsim.services.simulation.timing import DeliveryTimeEstimator, OnTimeEvaluator

logger = logging.getLogger(__name__)


@dataclass
class SimulationOutcome:
    """The finished run plus the mutated snapshots for the caller to persist."""
    run: SimulationRun
    drivers: list[Driver] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)


class SimulationRunner:
    """
    Orchestrates one deterministic simulation pass.

    A runner instance handles one run at a time; use separate instances for
    runs that execute concurrently.

    Usage:
        runner = SimulationRunner()
        outcome = runner.run(inputs, drivers, routes, orders)
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        fatigue_tracker: Optional[FatigueTracker] = None,
        estimator: Optional[DeliveryTimeEstimator] = None,
        evaluator: Optional[OnTimeEvaluator] = None,
        profit_calculator: Optional[ProfitCalculator] = None,
        constraint_filter: Optional[ConstraintFilter] = None,
        aggregator: Optional[StatsAggregator] = None,
    ):
        self.config = config or default_settings
        self.fatigue_tracker = fatigue_tracker or FatigueTracker()
        self.estimator = estimator or DeliveryTimeEstimator()
        self.evaluator = evaluator or OnTimeEvaluator(self.estimator)
        self.profit_calculator = profit_calculator or ProfitCalculator()
        self.constraint_filter = constraint_filter or ConstraintFilter()
        self.aggregator = aggregator or StatsAggregator()

        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation; honoured before the next order is processed."""
        self._cancel_event.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    def run(
        self,
        inputs: Any,
        drivers: Iterable[Any],
        routes: Iterable[Any],
        orders: Iterable[Any],
        close_day: bool = False,
        executed_by: Optional[str] = None,
    ) -> SimulationOutcome:
        """
        Run one simulation pass.

        Args:
            inputs: RunInputs, SimulationInputs or a plain dict
            drivers: Driver records or dicts
            routes: Route records or dicts
            orders: Order records or dicts
            close_day: Roll each driver's hours into the 7-day window afterwards
            executed_by: Identifier of whoever triggered the run

        Returns:
            SimulationOutcome with the run and mutated snapshots

        Raises:
            SimulationValidationError: inputs or snapshots are invalid
        """
        run_inputs = self._validate_inputs(inputs)
        driver_snapshot = self._snapshot(drivers, validate_driver, "drivers")
        route_snapshot = self._snapshot(routes, validate_route, "routes")
        order_snapshot = self._snapshot(orders, validate_order, "orders")
        routes_by_id = self._index_routes(route_snapshot)

        run = SimulationRun(
            inputs=run_inputs,
            metadata=RunMetadata(
                version=self.config.algorithm_version,
                algorithm_used=self.config.algorithm_name,
                configuration_hash=run_inputs.configuration_hash(),
            ),
            executed_by=executed_by,
        )

        logger.info(
            f"Starting simulation {run.id} with {len(order_snapshot)} orders, "
            f"{len(driver_snapshot)} drivers (using up to {run_inputs.available_drivers}), "
            f"max {run_inputs.max_hours_per_driver}h per driver"
        )

        start_time = time.perf_counter()
        status = SimulationStatus.COMPLETED
        error_message = None

        try:
            eligible = self.constraint_filter.eligible(
                driver_snapshot,
                run_inputs.max_hours_per_driver,
                limit=run_inputs.available_drivers,
            )
            if not eligible:
                logger.warning(f"Simulation {run.id}: no eligible drivers, every order will fail")

            scheduler = AssignmentScheduler(
                eligible,
                routes_by_id,
                run_inputs.max_hours_per_driver,
                estimator=self.estimator,
                fatigue_tracker=self.fatigue_tracker,
            )

            pending = sorted(order_snapshot, key=lambda o: o.order_id)
            if self._cancel_event.is_set():
                status = SimulationStatus.CANCELLED
                pending = []
                logger.warning(f"Simulation {run.id} cancelled before the first order")

            for order in pending:
                if self._cancel_event.is_set():
                    status = SimulationStatus.CANCELLED
                    logger.warning(
                        f"Simulation {run.id} cancelled after "
                        f"{len(run.orders_processed)} orders"
                    )
                    break
                run.add_processed_order(self._process_order(scheduler, order))

        except RunFailure as e:
            status = SimulationStatus.FAILED
            error_message = str(e)
            logger.error(f"Simulation {run.id} failed: {error_message}")
        except Exception as e:
            status = SimulationStatus.FAILED
            error_message = f"Unexpected error: {e}"
            logger.exception(f"Simulation {run.id} failed unexpectedly")
        finally:
            self._cancel_event.clear()

        run.results = self.aggregator.finalize(
            self.aggregator.fold(run.orders_processed),
            run_inputs.available_drivers,
        )
        self._update_route_stats(run, routes_by_id)

        if close_day and status == SimulationStatus.COMPLETED:
            for driver in driver_snapshot:
                self.fatigue_tracker.close_day(driver)

        run.execution_time_ms = (time.perf_counter() - start_time) * 1000
        run.finish(status, error_message)

        logger.info(
            f"Simulation {run.id} finished: status={run.status.value}, "
            f"orders={run.results.total_orders}, on_time={run.results.on_time_count}, "
            f"late={run.results.late_count}, unassigned={run.results.unassigned_count}, "
            f"profit={run.results.total_profit}"
        )

        return SimulationOutcome(
            run=run,
            drivers=driver_snapshot,
            routes=route_snapshot,
            orders=order_snapshot,
        )

    def _process_order(self, scheduler: AssignmentScheduler, order: Order) -> ProcessedOrder:
        assignment: Assignment = scheduler.assign(order)
        route = assignment.route

        if not assignment.is_assigned:
            return ProcessedOrder(
                order_id=order.order_id,
                status=order.status,
                route_id=route.route_id,
                traffic_level=route.traffic_level,
                failure_reason=assignment.failure.reason,
            )

        actual_minutes = order.delivery_time_minutes
        on_time = self.evaluator.is_on_time(actual_minutes, route, assignment.fatigued)
        breakdown = self.profit_calculator.compute(order, route, on_time)

        return ProcessedOrder(
            order_id=order.order_id,
            status=order.status,
            route_id=route.route_id,
            traffic_level=route.traffic_level,
            driver_id=assignment.driver.id,
            was_on_time=on_time,
            estimated_minutes=assignment.estimated_minutes,
            actual_minutes=actual_minutes,
            profit=breakdown.profit,
            penalty=breakdown.penalty,
            bonus=breakdown.bonus,
            fuel_cost=breakdown.fuel_cost,
        )

    def _update_route_stats(self, run: SimulationRun, routes_by_id: dict[int, Route]) -> None:
        for processed in run.orders_processed:
            if processed.is_assigned and processed.actual_minutes is not None:
                routes_by_id[processed.route_id].record_delivery(processed.actual_minutes)

    # =========================================================================
    # Validation & snapshots
    # =========================================================================

    def _validate_inputs(self, inputs: Any) -> RunInputs:
        result = validate_simulation_inputs(inputs)
        return result.raise_for_violations("simulation inputs").to_model()

    def _snapshot(self, records: Iterable[Any], validate, label: str) -> list:
        """
        Validate every record and build independent copies.

        All violations across the collection are reported together.
        """
        snapshot = []
        violations: list[Violation] = []

        for position, record in enumerate(records):
            result: ValidationResult = validate(record)
            if result.is_valid:
                snapshot.append(result.value.to_model())
            else:
                violations.extend(
                    Violation(f"{label}[{position}].{v.field}", v.message)
                    for v in result.violations
                )

        if violations:
            raise SimulationValidationError(violations, subject=label)
        return snapshot

    def _index_routes(self, routes: list[Route]) -> dict[int, Route]:
        routes_by_id: dict[int, Route] = {}
        for route in routes:
            if route.route_id in routes_by_id:
                raise SimulationValidationError(
                    [Violation("routes.route_id", f"duplicate route_id {route.route_id}")],
                    subject="routes",
                )
            routes_by_id[route.route_id] = route
        return routes_by_id
