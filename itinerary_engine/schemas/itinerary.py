"""
schemas/itinerary.py
--------------------
Dataclass definitions for the stops, legs and day reports the planning
engine consumes and produces.

All records are frozen value types.  Components never mutate an argument;
they return new records built with ``dataclasses.replace``.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Hashable, Optional

from itinerary_engine.errors import InvalidModeError

# Stops on this day are on the board but not yet placed in the itinerary.
UNSCHEDULED_DAY: int = 0


class TravelMode(str, Enum):
    """Closed set of transport modes a leg can be estimated for."""

    DRIVING = "driving"
    WALKING = "walking"
    TRANSIT = "transit"

    @classmethod
    def parse(cls, value: "TravelMode | str") -> "TravelMode":
        """Coerce *value* to a TravelMode, raising InvalidModeError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(value, tuple(m.value for m in cls)) from None


@dataclass(frozen=True)
class Coordinate:
    """WGS-84 point in decimal degrees. Range checks belong to the caller."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class TravelLeg:
    """
    Travel from one stop to the next stop of the same day.

    distance_km is the detour-adjusted road distance (one decimal place);
    duration_minutes is that distance at the mode's average speed, rounded
    up to the next whole minute.  target_stop_id is None until the leg is
    attached to a stop by the day recalculator.
    """
    distance_km: float
    duration_minutes: int
    mode: TravelMode
    target_stop_id: Optional[Hashable] = None


@dataclass(frozen=True)
class Stop:
    """
    One visitable item on the trip board (hotel, spot, food, activity, ...).

    day == 0 means unscheduled.  A stop without coordinates is a gap: it
    gets no leg and produces none for its predecessor.
    """
    id: Hashable
    day: int = 0
    sequence_index: int = 0
    coordinates: Optional[Coordinate] = None
    time_slot: Optional[str] = None
    outgoing_leg: Optional[TravelLeg] = None
    name: str = ""
    kind: str = ""

    @property
    def is_scheduled(self) -> bool:
        return self.day != UNSCHEDULED_DAY

    @property
    def has_coordinates(self) -> bool:
        return self.coordinates is not None

    def with_leg(self, leg: Optional[TravelLeg]) -> "Stop":
        return replace(self, outgoing_leg=leg)

    def with_sequence_index(self, index: int) -> "Stop":
        return replace(self, sequence_index=index)


@dataclass(frozen=True)
class DayLoadReport:
    """Summed transit burden of one day."""
    day: int
    total_transit_minutes: int
    overloaded: bool


@dataclass(frozen=True)
class TripPlan:
    """
    Output of TripLegPlanner.plan().

    stops:       flat stop list in the caller's order (reordered days are
                 emitted contiguously at their first original position).
    day_reports: one DayLoadReport per scheduled day, ascending by day.
    """
    stops: tuple[Stop, ...] = ()
    day_reports: tuple[DayLoadReport, ...] = ()

    @property
    def overloaded_days(self) -> list[int]:
        return [r.day for r in self.day_reports if r.overloaded]

    def report_for(self, day: int) -> Optional[DayLoadReport]:
        for report in self.day_reports:
            if report.day == day:
                return report
        return None


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a set of coordinates."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

