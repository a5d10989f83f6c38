"""
Round-robin assignment of orders to eligible drivers.

The scheduler owns its cursor: each run creates its own scheduler, so
cursor position and accumulated driver hours never leak between runs.

For each order (ascending order_id):
1. Start at the cursor's driver
2. Project the delivery time for that driver on the order's route
3. If current_day_hours + projected hours fits under the cap, assign and
   move the cursor past that driver
4. Otherwise try the next driver, wrapping at most once
5. If no driver fits, the order fails (recorded, not raised)
"""
from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from fleetsim.core.exceptions import AssignmentFailure, RouteReferenceError
from fleetsim.models import Driver, Order, Route
from fleetsim.services.simulation.fatigue import FatigueTracker
from fleetsim.services.simulation.timing import DeliveryTimeEstimator

logger = logging.getLogger(__name__)

# Float slack when comparing accumulated hours against the cap
HOURS_TOLERANCE = 1e-9


@dataclass
class Assignment:
    """Result of scheduling a single order."""
    order: Order
    route: Route
    driver: Optional[Driver] = None
    estimated_minutes: Optional[int] = None
    fatigued: bool = False
    failure: Optional[AssignmentFailure] = None

    @property
    def is_assigned(self) -> bool:
        return self.driver is not None


class AssignmentScheduler:
    """
    Cyclic order-to-driver assignment under daily hour caps.

    Usage:
        scheduler = AssignmentScheduler(eligible, routes_by_id, max_hours_per_driver=8)
        assignments = scheduler.run(orders)
    """

    def __init__(
        self,
        eligible_drivers: list[Driver],
        routes_by_id: dict[int, Route],
        max_hours_per_driver: float,
        estimator: Optional[DeliveryTimeEstimator] = None,
        fatigue_tracker: Optional[FatigueTracker] = None,
    ):
        self.drivers = list(eligible_drivers)
        self.routes_by_id = routes_by_id
        self.max_hours_per_driver = max_hours_per_driver
        self.estimator = estimator or DeliveryTimeEstimator()
        self.fatigue_tracker = fatigue_tracker or FatigueTracker()

        self.cursor = 0

    def run(self, orders: Iterable[Order]) -> list[Assignment]:
        """Assign a whole batch in ascending order_id sequence."""
        return [self.assign(order) for order in sorted(orders, key=lambda o: o.order_id)]

    def assign(self, order: Order) -> Assignment:
        """
        Assign one order to the next driver with enough hours left.

        Raises:
            RouteReferenceError: the order's route is not in the snapshot
        """
        route = self.routes_by_id.get(order.route_id)
        if route is None:
            raise RouteReferenceError(order.order_id, order.route_id)

        if not self.drivers:
            return self._fail(order, route, "no eligible drivers")

        num_drivers = len(self.drivers)
        for offset in range(num_drivers):
            index = (self.cursor + offset) % num_drivers
            driver = self.drivers[index]

            fatigued = self.fatigue_tracker.is_fatigued(driver)
            minutes = self.estimator.estimate(route, fatigued)
            projected_hours = driver.current_day_hours + minutes / 60

            if projected_hours > self.max_hours_per_driver + HOURS_TOLERANCE:
                continue

            driver.current_day_hours = projected_hours
            order.assign_to(driver.id, route.route_id)
            self.cursor = (index + 1) % num_drivers

            return Assignment(
                order=order,
                route=route,
                driver=driver,
                estimated_minutes=minutes,
                fatigued=fatigued,
            )

        return self._fail(
            order, route,
            f"no driver has {self.max_hours_per_driver}h capacity left",
        )

    def _fail(self, order: Order, route: Route, reason: str) -> Assignment:
        failure = AssignmentFailure(order.order_id, reason)
        logger.warning(str(failure))
        order.mark_failed()
        return Assignment(order=order, route=route, failure=failure)
