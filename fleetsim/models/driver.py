"""
Driver record for FleetSim.
"""
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from fleetsim.core.config import settings
from fleetsim.models.base import round_half_up, round_money, to_decimal
from fleetsim.models.enums import FatigueLevel

WEEK_DAYS = 7


def _is_overwork(hours: float) -> bool:
    return to_decimal(hours) > settings.fatigue_hours_threshold


@dataclass
class Driver:
    """
    Driver with a rolling 7-day workload history.

    Attributes:
        name: Driver's full name
        shift_hours: Contracted hours per shift (1-12)
        past_week_hours: Hours worked on each of the last 7 days, oldest first
        current_day_hours: Hours already committed today
        is_active: Whether the driver can take orders
        efficiency: On-time percentage derived from delivery history (0-100)
        total_deliveries: Completed deliveries
        on_time_deliveries: Completed deliveries that were on time
        fatigue_level: Classification derived from past_week_hours
    """
    name: str
    shift_hours: float
    past_week_hours: list[float] = field(default_factory=lambda: [0.0] * WEEK_DAYS)
    id: str = field(default_factory=lambda: str(uuid4()))
    current_day_hours: float = 0.0
    is_active: bool = True
    efficiency: float = 100.0
    total_deliveries: int = 0
    on_time_deliveries: int = 0
    fatigue_level: FatigueLevel = FatigueLevel.NORMAL

    @property
    def average_weekly_hours(self) -> float:
        """Mean hours per day over the tracked week."""
        return round_money(sum(self.past_week_hours) / WEEK_DAYS)

    @property
    def success_rate(self) -> int:
        """Percentage of deliveries that were on time (0 with no history)."""
        if self.total_deliveries == 0:
            return 0
        return round_half_up(self.on_time_deliveries / self.total_deliveries * 100)

    @property
    def is_fatigued(self) -> bool:
        """True if any tracked day exceeds the overwork threshold."""
        return any(_is_overwork(hours) for hours in self.past_week_hours)

    def worked_overtime_yesterday(self) -> bool:
        """Check only the most recently recorded day."""
        return _is_overwork(self.past_week_hours[WEEK_DAYS - 1])

    def record_delivery(self, was_on_time: bool) -> None:
        """Count a completed delivery and recompute efficiency."""
        self.total_deliveries += 1
        if was_on_time:
            self.on_time_deliveries += 1
        self.efficiency = float(
            round_half_up(self.on_time_deliveries / self.total_deliveries * 100)
        )

    def remaining_hours(self, max_hours: float) -> float:
        """Hours left today under a daily cap."""
        return max(0.0, max_hours - self.current_day_hours)

    def __repr__(self) -> str:
        return (
            f"<Driver(id={self.id}, name={self.name!r}, "
            f"today={self.current_day_hours}h, fatigue={self.fatigue_level.value})>"
        )
