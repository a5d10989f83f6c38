"""
Driver fatigue tracking over a rolling 7-day window.

Two checks are deliberately kept apart:
- is_fatigued scans all 7 tracked days
- worked_overtime_yesterday looks only at the most recent entry (index 6)
"""
from decimal import Decimal
from typing import Optional
import logging

from fleetsim.core.config import settings
from fleetsim.models import Driver, FatigueLevel
from fleetsim.models.driver import WEEK_DAYS
from fleetsim.models.base import to_decimal

logger = logging.getLogger(__name__)


class FatigueTracker:
    """
    Maintains a driver's 7-day workload and derives the fatigue level.

    Classification (days above the hours threshold):
    - >= exhausted_days: EXHAUSTED
    - >= 1: TIRED
    - otherwise: NORMAL
    """

    def __init__(
        self,
        hours_threshold: Optional[Decimal] = None,
        exhausted_days: Optional[int] = None,
    ):
        self.hours_threshold = to_decimal(
            hours_threshold if hours_threshold is not None else settings.fatigue_hours_threshold
        )
        self.exhausted_days = (
            exhausted_days if exhausted_days is not None else settings.exhausted_overwork_days
        )

    def _is_overwork(self, hours: float) -> bool:
        return to_decimal(hours) > self.hours_threshold

    def overwork_days(self, driver: Driver) -> int:
        """Number of tracked days above the hours threshold."""
        return sum(1 for hours in driver.past_week_hours if self._is_overwork(hours))

    def is_fatigued(self, driver: Driver) -> bool:
        return any(self._is_overwork(hours) for hours in driver.past_week_hours)

    def worked_overtime_yesterday(self, driver: Driver) -> bool:
        return self._is_overwork(driver.past_week_hours[WEEK_DAYS - 1])

    def classify(self, driver: Driver) -> FatigueLevel:
        days = self.overwork_days(driver)
        if days >= self.exhausted_days:
            return FatigueLevel.EXHAUSTED
        if days >= 1:
            return FatigueLevel.TIRED
        return FatigueLevel.NORMAL

    def record_day(self, driver: Driver, hours_worked: float) -> FatigueLevel:
        """
        Push a new day into the window and reclassify the driver.

        The oldest day is dropped so the window stays at exactly 7 entries.
        """
        if len(driver.past_week_hours) != WEEK_DAYS:
            raise ValueError(
                f"Driver {driver.id} has {len(driver.past_week_hours)} tracked days, "
                f"expected {WEEK_DAYS}"
            )
        if not 0 <= hours_worked <= 24:
            raise ValueError(f"Hours worked must be between 0 and 24, got {hours_worked}")

        driver.past_week_hours = driver.past_week_hours[1:] + [hours_worked]
        previous = driver.fatigue_level
        driver.fatigue_level = self.classify(driver)

        if driver.fatigue_level != previous:
            logger.debug(
                f"Driver {driver.id} fatigue {previous.value} -> {driver.fatigue_level.value}"
            )
        return driver.fatigue_level

    def close_day(self, driver: Driver) -> FatigueLevel:
        """Record today's committed hours and start a fresh day."""
        level = self.record_day(driver, driver.current_day_hours)
        driver.current_day_hours = 0.0
        return level
