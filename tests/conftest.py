"""Shared fixtures: stops laid out on the equator so distances are easy to reason about."""

from __future__ import annotations

import pytest

from itinerary_engine.schemas.itinerary import Coordinate, Stop, TravelLeg, TravelMode


def on_equator(lon: float) -> Coordinate:
    return Coordinate(latitude=0.0, longitude=lon)


def make_stop(stop_id, lon=None, day=1, seq=0, time_slot=None, leg=None) -> Stop:
    return Stop(
        id=stop_id,
        day=day,
        sequence_index=seq,
        coordinates=on_equator(lon) if lon is not None else None,
        time_slot=time_slot,
        outgoing_leg=leg,
    )


def leg_of(minutes: int, target=None) -> TravelLeg:
    return TravelLeg(distance_km=0.0, duration_minutes=minutes, mode=TravelMode.DRIVING,
                     target_stop_id=target)


@pytest.fixture
def line_day() -> list[Stop]:
    """Four stops on one day, listed out of geographic order."""
    return [
        make_stop("a", lon=0.0, seq=1),
        make_stop("c", lon=0.2, seq=2),
        make_stop("b", lon=0.1, seq=3),
        make_stop("d", lon=0.3, seq=4),
    ]


@pytest.fixture
def scattered_day() -> list[Stop]:
    """Five stops on day 3 in a deliberately zig-zagging order."""
    return [
        make_stop("s0", lon=0.0, day=3, seq=1),
        make_stop("s4", lon=0.4, day=3, seq=2),
        make_stop("s1", lon=0.1, day=3, seq=3),
        make_stop("s3", lon=0.3, day=3, seq=4),
        make_stop("s2", lon=0.2, day=3, seq=5),
    ]
