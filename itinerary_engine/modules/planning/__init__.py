"""modules/planning: per-day leg recalculation, sequencing and load checks."""

from itinerary_engine.modules.planning.day_sequencer import (
    SequencingStrategy,
    TimeBlock,
    group_by_time_block,
    nearest_neighbor_order,
    nearest_to,
    sequence,
    time_block_of,
    two_opt_order,
)
from itinerary_engine.modules.planning.leg_planner import recalc_day
from itinerary_engine.modules.planning.load_validator import (
    day_travel_minutes,
    is_day_overloaded,
    validate_load,
    validate_trip_load,
)
from itinerary_engine.modules.planning.route_metrics import (
    OptimizationResult,
    SavingsEstimate,
    compare_orders,
    estimate_optimization_savings,
    should_optimize,
)
from itinerary_engine.modules.planning.trip_aggregator import TripLegPlanner, recalc_trip

__all__ = [
    "SequencingStrategy",
    "TimeBlock",
    "group_by_time_block",
    "nearest_neighbor_order",
    "nearest_to",
    "sequence",
    "time_block_of",
    "two_opt_order",
    "recalc_day",
    "day_travel_minutes",
    "is_day_overloaded",
    "validate_load",
    "validate_trip_load",
    "OptimizationResult",
    "SavingsEstimate",
    "compare_orders",
    "estimate_optimization_savings",
    "should_optimize",
    "TripLegPlanner",
    "recalc_trip",
]
