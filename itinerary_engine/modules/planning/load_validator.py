"""
modules/planning/load_validator.py
------------------------------------
Day load classification: sum the outgoing-leg durations of a day and flag
the day when the total is strictly greater than the overload threshold
(240 min by default).
"""

from __future__ import annotations
import logging
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from itinerary_engine.schemas.itinerary import DayLoadReport, Stop
from itinerary_engine.schemas.policy import DEFAULT_POLICY, PlanningPolicy

logger = logging.getLogger(__name__)


def day_travel_minutes(stops: Iterable[Stop]) -> int:
    """Summed outgoing_leg.duration_minutes; a missing leg counts as 0."""
    return sum(s.outgoing_leg.duration_minutes for s in stops if s.outgoing_leg is not None)


def validate_load(
    stops: Sequence[Stop],
    day: Optional[int] = None,
    policy: Optional[PlanningPolicy] = None,
) -> DayLoadReport:
    """
    Build the DayLoadReport for one day's stops. Does not touch the stops.

    *day* defaults to the day of the first stop (0 for an empty sequence).
    """
    policy = policy or DEFAULT_POLICY
    if day is None:
        day = stops[0].day if stops else 0
    total = day_travel_minutes(stops)
    report = DayLoadReport(
        day=day,
        total_transit_minutes=total,
        overloaded=policy.is_overloaded(total),
    )
    if report.overloaded:
        logger.info("Day %s overloaded: %d min transit > %d min",
                    day, total, policy.overload_threshold_minutes)
    return report


def is_day_overloaded(stops: Sequence[Stop], policy: Optional[PlanningPolicy] = None) -> bool:
    return validate_load(stops, policy=policy).overloaded


def validate_trip_load(
    stops: Iterable[Stop],
    policy: Optional[PlanningPolicy] = None,
) -> list[DayLoadReport]:
    """One report per scheduled day (day != 0), ascending by day."""
    by_day: dict[int, list[Stop]] = defaultdict(list)
    for stop in stops:
        if stop.is_scheduled:
            by_day[stop.day].append(stop)
    return [validate_load(by_day[d], day=d, policy=policy) for d in sorted(by_day)]
