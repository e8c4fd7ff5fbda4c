import pytest

from itinerary_engine import config
from itinerary_engine.modules.planning.day_sequencer import sequence
from itinerary_engine.modules.planning.route_metrics import (
    compare_orders,
    estimate_optimization_savings,
    should_optimize,
)
from itinerary_engine.modules.tool_usage.distance_tool import distance

from conftest import make_stop, on_equator

UNIT_KM = distance(on_equator(0), on_equator(1))


def stops_at(*lons):
    return [make_stop(f"p{i}", lon) for i, lon in enumerate(lons)]


def test_compare_orders_reports_savings():
    original = stops_at(0, 2, 1, 3)
    optimized = sequence(original)
    result = compare_orders(original, optimized)

    assert result.original_km == pytest.approx(5 * UNIT_KM)
    assert result.optimized_km == pytest.approx(3 * UNIT_KM)
    assert result.distance_saved_km == pytest.approx(2 * UNIT_KM)
    assert result.percent_improvement == pytest.approx(40.0)
    assert result.time_saved_minutes == round(result.distance_saved_km / config.SAVINGS_SPEED_KMH * 60)
    assert result.original_order == ("p0", "p1", "p2", "p3")
    assert result.optimized_order == ("p0", "p2", "p1", "p3")


def test_compare_orders_never_reports_negative_savings():
    good = stops_at(0, 1, 2)
    worse = [good[0], good[2], good[1]]
    result = compare_orders(good, worse)
    assert result.distance_saved_km == 0.0
    assert result.percent_improvement == 0.0
    assert result.time_saved_minutes == 0


def test_compare_orders_without_coordinates():
    blank = [make_stop("x"), make_stop("y")]
    result = compare_orders(blank, blank)
    assert result.original_km == 0.0
    assert result.percent_improvement == 0.0


def test_should_optimize():
    assert should_optimize(stops_at(0, 2)) is False
    assert should_optimize(stops_at(0, 1, 2)) is False
    assert should_optimize(stops_at(0, 2, 1)) is True
    assert should_optimize(stops_at(0, 1, 2, 3)) is True
    assert should_optimize(stops_at(0, 2) + [make_stop("blank")]) is False


def test_estimate_savings_for_ordered_line_is_low():
    estimate = estimate_optimization_savings(stops_at(0, 1, 2, 3))
    assert estimate.potential_savings_km == 0.0
    assert estimate.confidence == "low"


def test_estimate_savings_for_zigzag_is_high():
    estimate = estimate_optimization_savings(stops_at(0, 3, 1, 2))
    assert estimate.potential_savings_km == pytest.approx(2.5 * UNIT_KM, rel=1e-6)
    assert estimate.confidence == "high"


def test_estimate_savings_needs_three_stops():
    estimate = estimate_optimization_savings(stops_at(0, 5))
    assert (estimate.potential_savings_km, estimate.confidence) == (0.0, "low")
