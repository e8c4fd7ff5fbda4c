"""modules/tool_usage: geometry and travel-leg estimation."""

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
    km_to_miles,
    route_distance_km,
)

__all__ = [
    "DistanceTool",
    "bounds_of",
    "center_of",
    "describe_leg",
    "distance",
    "estimate_leg",
    "format_distance",
    "format_duration",
    "haversine_km",
    "km_to_miles",
    "route_distance_km",
]
