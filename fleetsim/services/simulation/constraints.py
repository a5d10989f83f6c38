"""
Driver eligibility filtering.

Eligible drivers are active and still under the daily hour cap. The
ordering is deterministic so round-robin assignment is reproducible.
"""
from typing import Iterable, Optional

from fleetsim.models import Driver


class ConstraintFilter:
    """Selects drivers eligible for further assignment."""

    def eligible(
        self,
        drivers: Iterable[Driver],
        max_hours_per_driver: float,
        limit: Optional[int] = None,
    ) -> list[Driver]:
        """
        Return active drivers under the hour cap.

        Ordered by efficiency descending, then on-time deliveries descending.
        Remaining ties keep their input order. When limit is given, only the
        first `limit` drivers are returned.
        """
        candidates = [
            d for d in drivers
            if d.is_active and d.remaining_hours(max_hours_per_driver) > 0
        ]
        candidates.sort(key=lambda d: (-d.efficiency, -d.on_time_deliveries))

        if limit is not None:
            candidates = candidates[:limit]
        return candidates
