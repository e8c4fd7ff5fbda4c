"""
modules/validation package: data quality guards before stops reach the engine.
"""
from itinerary_engine.modules.validation.ingestion_validator import (
    ValidationResult,
    filter_valid,
    validate_coordinate,
    validate_stop,
    validate_trip_stops,
)

__all__ = [
    "ValidationResult",
    "filter_valid",
    "validate_coordinate",
    "validate_stop",
    "validate_trip_stops",
]
