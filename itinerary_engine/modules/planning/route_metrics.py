"""
modules/planning/route_metrics.py
-----------------------------------
Before/after metrics for a day's visiting order, used by the board to
decide whether offering "optimize this day" is worthwhile and to report
what a resequencing saved.

Distances are straight-line km over the stops that have coordinates;
stops without coordinates are skipped.  time_saved_minutes assumes
walking speed (config.SAVINGS_SPEED_KMH).
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations
from typing import Literal, Sequence

from itinerary_engine import config
from itinerary_engine.modules.tool_usage.distance_tool import distance, route_distance_km
from itinerary_engine.schemas.itinerary import Coordinate, Stop

Confidence = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class OptimizationResult:
    original_km: float
    optimized_km: float
    original_order: tuple
    optimized_order: tuple
    distance_saved_km: float
    percent_improvement: float
    time_saved_minutes: int


@dataclass(frozen=True)
class SavingsEstimate:
    potential_savings_km: float
    confidence: Confidence


def _located(stops: Sequence[Stop]) -> list[Coordinate]:
    return [s.coordinates for s in stops if s.has_coordinates]


def compare_orders(original: Sequence[Stop], optimized: Sequence[Stop]) -> OptimizationResult:
    """Distance saved by visiting *optimized* instead of *original*."""
    original_km = route_distance_km(_located(original))
    optimized_km = route_distance_km(_located(optimized))
    saved = max(0.0, original_km - optimized_km)
    percent = (saved / original_km) * 100 if original_km > 0 else 0.0
    return OptimizationResult(
        original_km=original_km,
        optimized_km=optimized_km,
        original_order=tuple(s.id for s in original),
        optimized_order=tuple(s.id for s in optimized),
        distance_saved_km=saved,
        percent_improvement=percent,
        time_saved_minutes=round(saved / config.SAVINGS_SPEED_KMH * 60),
    )


def should_optimize(stops: Sequence[Stop]) -> bool:
    """
    True when resequencing is likely to help: any consecutive triple
    backtracks (via-point > BACKTRACK_RATIO × direct) or the day has at
    least 4 located stops.  Never true below 3 located stops.
    """
    coords = _located(stops)
    if len(coords) < 3:
        return False
    for i in range(len(coords) - 2):
        via = distance(coords[i], coords[i + 1]) + distance(coords[i + 1], coords[i + 2])
        direct = distance(coords[i], coords[i + 2])
        if via > direct * config.BACKTRACK_RATIO:
            return True
    return len(coords) >= 4


def estimate_optimization_savings(stops: Sequence[Stop]) -> SavingsEstimate:
    """
    Rough savings estimate without running the sequencer.

    The optimal path is guessed as OPTIMAL_TOUR_PAIR_FACTOR × average pair
    distance × (n - 1); confidence grows with the percentage above it.
    """
    coords = _located(stops)
    if len(coords) < 3:
        return SavingsEstimate(potential_savings_km=0.0, confidence="low")

    current_km = route_distance_km(coords)
    pair_km = [distance(a, b) for a, b in combinations(coords, 2)]
    avg_pair_km = sum(pair_km) / len(pair_km)
    estimated_optimal_km = avg_pair_km * (len(coords) - 1) * config.OPTIMAL_TOUR_PAIR_FACTOR

    potential = max(0.0, current_km - estimated_optimal_km)
    percent = (potential / current_km) * 100 if current_km > 0 else 0.0

    if percent > config.SAVINGS_HIGH_CONFIDENCE_PCT:
        confidence: Confidence = "high"
    elif percent > config.SAVINGS_MEDIUM_CONFIDENCE_PCT:
        confidence = "medium"
    else:
        confidence = "low"
    return SavingsEstimate(potential_savings_km=potential, confidence=confidence)
