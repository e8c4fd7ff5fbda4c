import math

import pytest

from itinerary_engine import config
from itinerary_engine.errors import InvalidModeError
from itinerary_engine.modules.tool_usage.distance_tool import (
    DistanceTool,
    bounds_of,
    center_of,
    describe_leg,
    distance,
    estimate_leg,
    format_distance,
    format_duration,
    haversine_km,
    route_distance_km,
)
from itinerary_engine.schemas.itinerary import Coordinate, TravelMode
from itinerary_engine.schemas.policy import PlanningPolicy

from conftest import on_equator

PAIRS = [
    (Coordinate(48.8566, 2.3522), Coordinate(51.5074, -0.1278)),
    (Coordinate(-33.8688, 151.2093), Coordinate(35.6762, 139.6503)),
    (Coordinate(40.7128, -74.0060), Coordinate(34.0522, -118.2437)),
    (Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric(a, b):
    assert distance(a, b) == distance(b, a)


@pytest.mark.parametrize("a,_", PAIRS)
def test_distance_to_self_is_zero(a, _):
    assert distance(a, a) == 0.0


def test_one_degree_on_equator():
    assert distance(on_equator(0), on_equator(1)) == pytest.approx(111.195, abs=1e-3)


def test_antipodal_points_stay_finite():
    km = haversine_km(0.0, 0.0, 0.0, 180.0)
    assert math.isfinite(km)
    assert km == pytest.approx(math.pi * config.EARTH_RADIUS_KM)


def test_scenario_a_driving_leg():
    leg = estimate_leg(on_equator(0), on_equator(1), TravelMode.DRIVING)
    assert leg.distance_km == 144.6
    assert leg.duration_minutes == 174
    assert leg.mode is TravelMode.DRIVING
    assert leg.target_stop_id is None


def test_modes_use_their_own_speeds():
    a, b = on_equator(0), on_equator(0.01)
    assert estimate_leg(a, b, "walking").duration_minutes == 18
    assert estimate_leg(a, b, "transit").duration_minutes == 3
    assert estimate_leg(a, b, "driving").duration_minutes == 2


def test_same_point_is_zero_minutes():
    leg = estimate_leg(on_equator(5), on_equator(5))
    assert leg.distance_km == 0.0
    assert leg.duration_minutes == 0


@pytest.mark.parametrize("mode", list(TravelMode))
def test_duration_non_decreasing_in_distance(mode):
    durations = [
        estimate_leg(on_equator(0), on_equator(k * 0.05), mode).duration_minutes
        for k in range(40)
    ]
    assert durations == sorted(durations)


def test_estimate_leg_is_deterministic():
    a, b = PAIRS[1]
    assert estimate_leg(a, b, "transit") == estimate_leg(a, b, "transit")


def test_unknown_mode_raises():
    with pytest.raises(InvalidModeError, match="ERROR_INVALID_MODE"):
        estimate_leg(on_equator(0), on_equator(1), "flight")


def test_unknown_mode_is_also_a_value_error():
    with pytest.raises(ValueError):
        estimate_leg(on_equator(0), on_equator(1), 42)


def test_mode_without_configured_speed_raises():
    policy = PlanningPolicy(speeds_kmh={"driving": 50.0})
    with pytest.raises(InvalidModeError):
        estimate_leg(on_equator(0), on_equator(1), "walking", policy)


def test_policy_overrides_detour_and_speed():
    policy = PlanningPolicy.default().with_overrides(
        detour_multiplier=1.0, speeds_kmh={"driving": 60.0},
    )
    leg = estimate_leg(on_equator(0), on_equator(1), "driving", policy)
    assert leg.distance_km == 111.2
    assert leg.duration_minutes == 112


def test_route_distance_sums_consecutive_points():
    coords = [on_equator(0), on_equator(1), on_equator(3)]
    assert route_distance_km(coords) == pytest.approx(distance(on_equator(0), on_equator(3)))
    assert route_distance_km(coords[:1]) == 0.0
    assert route_distance_km([]) == 0.0


def test_center_and_bounds():
    coords = [Coordinate(10.0, 20.0), Coordinate(20.0, 40.0)]
    assert center_of(coords) == Coordinate(15.0, 30.0)
    box = bounds_of(coords)
    assert (box.min_lat, box.max_lat, box.min_lng, box.max_lng) == (10.0, 20.0, 20.0, 40.0)
    assert center_of([]) is None
    assert bounds_of([]) is None


@pytest.mark.parametrize("km,unit,expected", [
    (0.85, "km", "850 m"),
    (12.34, "km", "12.3 km"),
    (0.1, "mi", "328 ft"),
    (12.34, "mi", "7.7 mi"),
])
def test_format_distance(km, unit, expected):
    assert format_distance(km, unit) == expected


@pytest.mark.parametrize("minutes,expected", [
    (45, "45 min"),
    (120, "2 hr"),
    (135, "2 hr 15 min"),
])
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_describe_leg():
    leg = estimate_leg(on_equator(0), on_equator(1))
    assert describe_leg(leg) == "144.6 km, 174 min by driving"


def test_distance_tool_matrix():
    tool = DistanceTool()
    coords = [on_equator(0), on_equator(1), on_equator(2)]
    matrix = tool.distance_matrix(coords)
    assert [matrix[i][i] for i in range(3)] == [0.0, 0.0, 0.0]
    assert matrix[0][2] == matrix[2][0]
    assert tool.distance_matrix([]) == []


def test_distance_tool_uses_policy_default_mode():
    tool = DistanceTool(PlanningPolicy(default_mode="walking"))
    leg = tool.leg(on_equator(0), on_equator(0.01))
    assert leg.mode is TravelMode.WALKING
    assert tool.travel_time_minutes(on_equator(0), on_equator(0.01)) == 18
