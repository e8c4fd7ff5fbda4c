"""
itinerary_engine: geospatial planning core for the multi-day trip board.

Estimates travel legs between stops, recomputes them per day, proposes a
backtracking-reducing order for a day, and flags overloaded days.  Pure and
stateless: every call is a deterministic function of its arguments.
"""

from itinerary_engine.errors import InvalidModeError, InvalidPolicyError, PlanningError
from itinerary_engine.schemas.itinerary import (
    Bounds,
    Coordinate,
    DayLoadReport,
    Stop,
    TravelLeg,
    TravelMode,
    TripPlan,
)
from itinerary_engine.schemas.policy import DEFAULT_POLICY, PlanningPolicy
from itinerary_engine.modules.tool_usage.distance_tool import (
    DistanceTool,
    distance,
    estimate_leg,
    haversine_km,
)
from itinerary_engine.modules.planning import (
    SequencingStrategy,
    TimeBlock,
    TripLegPlanner,
    recalc_day,
    recalc_trip,
    sequence,
    validate_load,
    validate_trip_load,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidModeError",
    "InvalidPolicyError",
    "PlanningError",
    "Bounds",
    "Coordinate",
    "DayLoadReport",
    "Stop",
    "TravelLeg",
    "TravelMode",
    "TripPlan",
    "DEFAULT_POLICY",
    "PlanningPolicy",
    "DistanceTool",
    "distance",
    "estimate_leg",
    "haversine_km",
    "SequencingStrategy",
    "TimeBlock",
    "TripLegPlanner",
    "recalc_day",
    "recalc_trip",
    "sequence",
    "validate_load",
    "validate_trip_load",
]
