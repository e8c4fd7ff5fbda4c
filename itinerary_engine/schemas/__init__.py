"""schemas: typed records exchanged with the planning engine."""

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

__all__ = [
    "Bounds",
    "Coordinate",
    "DayLoadReport",
    "Stop",
    "TravelLeg",
    "TravelMode",
    "TripPlan",
    "PlanningPolicy",
    "DEFAULT_POLICY",
]
