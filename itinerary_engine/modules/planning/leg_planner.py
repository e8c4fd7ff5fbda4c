"""
modules/planning/leg_planner.py
---------------------------------
Day leg recalculation: attach an outgoing TravelLeg to every stop of one
day, in the order given.

Rules:
  - stops[i] gets a leg to stops[i+1] iff both have coordinates.
  - A stop without coordinates gets no leg; gaps are never bridged by
    looking further ahead.
  - The last stop never has a leg.
  - Any outgoing_leg on the input is ignored and replaced.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from typing import Optional, Sequence

from itinerary_engine.modules.tool_usage.distance_tool import DistanceTool
from itinerary_engine.schemas.itinerary import Stop, TravelMode
from itinerary_engine.schemas.policy import PlanningPolicy

logger = logging.getLogger(__name__)


def recalc_day(
    stops: Sequence[Stop],
    mode: TravelMode | str | None = None,
    policy: Optional[PlanningPolicy] = None,
) -> list[Stop]:
    """
    Return a new list of the same stops with outgoing_leg recomputed.

    Args:
        stops:  one day's stops, already in visiting order.
        mode:   transport mode for every leg (policy default, i.e. driving,
                when None).
        policy: detour multiplier / speeds; config defaults when None.
    """
    tool = DistanceTool(policy)
    leg_mode = TravelMode.parse(mode or tool.policy.default_mode)

    updated: list[Stop] = []
    gaps = 0
    for idx, stop in enumerate(stops):
        nxt = stops[idx + 1] if idx + 1 < len(stops) else None
        if nxt is None or not stop.has_coordinates or not nxt.has_coordinates:
            if nxt is not None:
                gaps += 1
            updated.append(stop.with_leg(None))
            continue

        leg = tool.leg(stop.coordinates, nxt.coordinates, leg_mode)
        updated.append(stop.with_leg(replace(leg, target_stop_id=nxt.id)))

    if gaps:
        logger.debug("recalc_day: %d of %d stop(s) left without a leg (missing coordinates)",
                     gaps, max(len(stops) - 1, 0))
    return updated
