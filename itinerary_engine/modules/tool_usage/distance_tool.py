"""
modules/tool_usage/distance_tool.py
-------------------------------------
Straight-line geometry and travel-leg estimation.  No external HTTP calls
are made: a leg is the haversine distance inflated by a detour multiplier
and driven at the mode's average speed.

Policy knobs (schemas/policy.py, defaults in config.py):
  DETOUR_MULTIPLIER -- road km per straight-line km (default: 1.3)
  MODE_SPEEDS_KMH   -- walking 5, transit 30, driving 50
"""

from __future__ import annotations
import math
import logging
from typing import Iterable, Optional, Sequence

from itinerary_engine import config
from itinerary_engine.schemas.itinerary import Bounds, Coordinate, TravelLeg, TravelMode
from itinerary_engine.schemas.policy import DEFAULT_POLICY, PlanningPolicy

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

_EARTH_RADIUS_KM = config.EARTH_RADIUS_KM


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    # rounding can push a past 1.0 for antipodal points
    a = min(max(a, 0.0), 1.0)
    return 2 * r * math.asin(math.sqrt(a))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in km between two coordinates. Symmetric; d(a, a) == 0."""
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def _km_to_minutes(km: float, speed_kmh: float) -> float:
    """Road km to (fractional) minutes at a given speed."""
    return (km / speed_kmh) * 60.0


def estimate_leg(
    from_: Coordinate,
    to: Coordinate,
    mode: TravelMode | str = TravelMode.DRIVING,
    policy: Optional[PlanningPolicy] = None,
) -> TravelLeg:
    """
    Estimate the travel leg between two coordinates.

    road_km          = distance(from_, to) * detour_multiplier
    duration_minutes = ceil(road_km / speed_kmh[mode] * 60)

    The returned leg has target_stop_id=None; the caller knows which stop
    it leads to.  Raises InvalidModeError for a mode outside the closed set.
    """
    policy = policy or DEFAULT_POLICY
    parsed = TravelMode.parse(mode)
    speed = policy.speed_for(parsed)

    straight_km = distance(from_, to)
    road_km = straight_km * policy.detour_multiplier
    duration = math.ceil(_km_to_minutes(road_km, speed))
    return TravelLeg(
        distance_km=round(road_km, 1),
        duration_minutes=int(duration),
        mode=parsed,
    )


# ---------------------------------------------------------------------------
# Route geometry
# ---------------------------------------------------------------------------


def route_distance_km(coords: Sequence[Coordinate]) -> float:
    """Sum of straight-line distances between consecutive points (0 for < 2 points)."""
    if len(coords) < 2:
        return 0.0
    return sum(distance(coords[i], coords[i + 1]) for i in range(len(coords) - 1))


def center_of(coords: Iterable[Coordinate]) -> Optional[Coordinate]:
    """Arithmetic mean of the coordinates, or None when empty."""
    points = list(coords)
    if not points:
        return None
    return Coordinate(
        latitude=sum(p.latitude for p in points) / len(points),
        longitude=sum(p.longitude for p in points) / len(points),
    )


def bounds_of(coords: Iterable[Coordinate]) -> Optional[Bounds]:
    """Bounding box of the coordinates, or None when empty."""
    points = list(coords)
    if not points:
        return None
    return Bounds(
        min_lat=min(p.latitude for p in points),
        max_lat=max(p.latitude for p in points),
        min_lng=min(p.longitude for p in points),
        max_lng=max(p.longitude for p in points),
    )


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def km_to_miles(km: float) -> float:
    return km * config.MILES_PER_KM


def format_distance(km: float, unit: str = "km") -> str:
    """'850 m' / '12.3 km', or '320 ft' / '7.6 mi' when unit='mi'."""
    if unit == "mi":
        miles = km_to_miles(km)
        if miles < 0.1:
            return f"{round(miles * 5280)} ft"
        return f"{miles:.1f} mi"
    if km < 1:
        return f"{round(km * 1000)} m"
    return f"{km:.1f} km"


def format_duration(minutes: int) -> str:
    """'45 min', '2 hr' or '2 hr 15 min'."""
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(int(minutes), 60)
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


def describe_leg(leg: TravelLeg) -> str:
    """One-line summary, e.g. '144.6 km, 174 min by driving'."""
    return f"{leg.distance_km:.1f} km, {leg.duration_minutes} min by {leg.mode.value}"


# ---------------------------------------------------------------------------
# DistanceTool
# ---------------------------------------------------------------------------


class DistanceTool:
    """
    Policy-bound facade over the functions above.

    Planners hold one DistanceTool so the detour multiplier and mode speeds
    come from a single PlanningPolicy for the whole call.
    """

    def __init__(self, policy: Optional[PlanningPolicy] = None) -> None:
        self.policy: PlanningPolicy = policy or DEFAULT_POLICY

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        """Straight-line km between two coordinates."""
        return distance(a, b)

    def leg(
        self,
        a: Coordinate,
        b: Coordinate,
        mode: TravelMode | str | None = None,
    ) -> TravelLeg:
        """Travel leg between two coordinates (policy default mode when mode is None)."""
        return estimate_leg(a, b, mode or self.policy.default_mode, self.policy)

    def travel_time_minutes(
        self,
        a: Coordinate,
        b: Coordinate,
        mode: TravelMode | str | None = None,
    ) -> int:
        """Whole minutes to travel between two coordinates."""
        return self.leg(a, b, mode).duration_minutes

    def distance_matrix(self, coords: Sequence[Coordinate]) -> list[list[float]]:
        """Full n x n straight-line distance matrix [km]."""
        n = len(coords)
        if n == 0:
            return []
        return [
            [0.0 if i == j else distance(coords[i], coords[j]) for j in range(n)]
            for i in range(n)
        ]
