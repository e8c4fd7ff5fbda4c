import math

from itinerary_engine.modules.validation import (
    filter_valid,
    validate_coordinate,
    validate_stop,
    validate_trip_stops,
)
from itinerary_engine.schemas.itinerary import Coordinate, Stop


def test_valid_coordinate():
    assert validate_coordinate(Coordinate(45.0, 120.0))
    assert validate_coordinate(Coordinate(-90.0, -180.0)).valid


def test_out_of_range_coordinate():
    result = validate_coordinate(Coordinate(95.0, 200.0))
    assert not result
    assert len(result.errors) == 2


def test_non_finite_and_missing_coordinate():
    assert not validate_coordinate(Coordinate(math.nan, 0.0))
    assert not validate_coordinate(None)


def test_stop_without_coordinates_is_valid():
    assert validate_stop(Stop(id="gap", day=1)).valid


def test_stop_errors_are_collected():
    result = validate_stop(Stop(id=" ", day=-1, coordinates=Coordinate(0.0, 500.0)))
    assert not result.valid
    assert len(result.errors) == 3


def test_duplicate_ids_fail_trip_validation():
    stops = [Stop(id="a", day=1), Stop(id="a", day=2), Stop(id="b", day=1)]
    result = validate_trip_stops(stops)
    assert not result.valid
    assert result.errors == ["duplicate stop id(s): a"]


def test_filter_valid_drops_bad_stops(caplog):
    good = Stop(id="good", day=1, coordinates=Coordinate(10.0, 10.0))
    bad = Stop(id="bad", day=1, coordinates=Coordinate(100.0, 10.0))
    with caplog.at_level("WARNING"):
        assert filter_valid([good, bad], validate_stop) == [good]
    assert "bad" in caplog.text
