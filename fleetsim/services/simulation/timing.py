"""
Delivery duration estimation and on-time evaluation.

Estimate:
    t = base_time_min
    t = ceil(t × fatigue_multiplier)   (only for fatigued drivers)
    t = ceil(t × traffic_multiplier)

On-time:
    actual_minutes <= estimate + grace_minutes
"""
from decimal import Decimal
from math import ceil
from typing import Optional

from fleetsim.core.config import settings
from fleetsim.models import Route, TrafficLevel
from fleetsim.models.base import to_decimal


def default_traffic_multipliers() -> dict[TrafficLevel, Decimal]:
    return {
        TrafficLevel.LOW: settings.low_traffic_multiplier,
        TrafficLevel.MEDIUM: settings.medium_traffic_multiplier,
        TrafficLevel.HIGH: settings.high_traffic_multiplier,
    }


class DeliveryTimeEstimator:
    """Projects delivery duration in whole minutes."""

    def __init__(
        self,
        fatigue_multiplier: Optional[Decimal] = None,
        traffic_multipliers: Optional[dict[TrafficLevel, Decimal]] = None,
    ):
        self.fatigue_multiplier = to_decimal(
            fatigue_multiplier if fatigue_multiplier is not None else settings.fatigue_time_multiplier
        )
        multipliers = traffic_multipliers or default_traffic_multipliers()
        self.traffic_multipliers = {
            TrafficLevel(level): to_decimal(value) for level, value in multipliers.items()
        }

    def estimate(self, route: Route, fatigued: bool) -> int:
        minutes = to_decimal(route.base_time_min)

        # Two separate ceilings, fatigue first
        if fatigued:
            minutes = Decimal(ceil(minutes * self.fatigue_multiplier))

        traffic = self.traffic_multipliers[TrafficLevel(route.traffic_level)]
        return ceil(minutes * traffic)


class OnTimeEvaluator:
    """Decides whether a delivery falls inside the allowed window."""

    def __init__(
        self,
        estimator: Optional[DeliveryTimeEstimator] = None,
        grace_minutes: Optional[int] = None,
    ):
        self.estimator = estimator or DeliveryTimeEstimator()
        self.grace_minutes = (
            grace_minutes if grace_minutes is not None else settings.on_time_grace_minutes
        )

    def allowed_minutes(self, route: Route, fatigued: bool) -> int:
        return self.estimator.estimate(route, fatigued) + self.grace_minutes

    def is_on_time(self, actual_minutes: float, route: Route, fatigued: bool) -> bool:
        return actual_minutes <= self.allowed_minutes(route, fatigued)
