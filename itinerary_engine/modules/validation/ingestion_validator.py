"""
modules/validation/ingestion_validator.py
------------------------------------------
Data-quality guards applied at the input boundary, before stops reach the
planning engine.  The engine itself never range-checks coordinates; a bad
latitude produces a meaningless (but finite) distance there.

  Coordinate:
    ✓ Latitude in [-90, 90]
    ✓ Longitude in [-180, 180]
    ✓ Both values finite

  Stop:
    ✓ Non-empty id
    ✓ day >= 0 (0 = unscheduled)
    ✓ Coordinates valid when present (absent coordinates are allowed)

  Trip:
    ✓ Stop ids unique within the trip

Usage:
    from itinerary_engine.modules.validation import filter_valid, validate_stop

    result = validate_stop(stop)
    if not result.valid:
        print(result.errors)

    clean_stops = filter_valid(stops, validate_stop)
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from itinerary_engine.schemas.itinerary import Coordinate, Stop

T = TypeVar("T")

logger = logging.getLogger(__name__)


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        subject: The record that was checked (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    subject: object = field(default=None, repr=False)

    def __bool__(self) -> bool:
        return self.valid


# ── Coordinate validation ──────────────────────────────────────────────────────

def validate_coordinate(coord: Optional[Coordinate]) -> ValidationResult:
    """Range-check one coordinate. None is reported as an error here."""
    errors: list[str] = []
    if coord is None:
        errors.append("coordinates must not be NULL")
        return ValidationResult(valid=False, errors=errors, subject=coord)

    lat, lon = coord.latitude, coord.longitude
    if not (math.isfinite(lat) and math.isfinite(lon)):
        errors.append(f"coordinates must be finite (got lat={lat!r}, lon={lon!r})")
    else:
        if not (-90.0 <= lat <= 90.0):
            errors.append(f"latitude={lat} is outside valid range [-90, 90]")
        if not (-180.0 <= lon <= 180.0):
            errors.append(f"longitude={lon} is outside valid range [-180, 180]")

    return ValidationResult(valid=not errors, errors=errors, subject=coord)


# ── Stop validation ────────────────────────────────────────────────────────────

def validate_stop(stop: Stop) -> ValidationResult:
    """
    Validate one stop before planning.

    A stop without coordinates is valid: the engine treats it as a gap.
    """
    errors: list[str] = []

    if stop.id is None or (isinstance(stop.id, str) and not stop.id.strip()):
        errors.append("id must not be empty or NULL")

    if not isinstance(stop.day, int) or stop.day < 0:
        errors.append(f"day={stop.day!r} must be an integer >= 0 (0 = unscheduled)")

    if stop.has_coordinates:
        errors.extend(validate_coordinate(stop.coordinates).errors)

    return ValidationResult(valid=not errors, errors=errors, subject=stop)


def validate_trip_stops(stops: Sequence[Stop]) -> ValidationResult:
    """Validate every stop and require ids to be unique within the trip."""
    errors: list[str] = []
    for stop in stops:
        result = validate_stop(stop)
        errors.extend(f"stop {stop.id!r}: {msg}" for msg in result.errors)

    dupes = sorted(str(i) for i, n in Counter(s.id for s in stops).items() if n > 1)
    if dupes:
        errors.append(f"duplicate stop id(s): {', '.join(dupes)}")

    return ValidationResult(valid=not errors, errors=errors, subject=list(stops))


# ── Batch helper ───────────────────────────────────────────────────────────────

def filter_valid(
    records: Iterable[T],
    validator: Callable[[T], ValidationResult],
) -> list[T]:
    """Return only the records that pass *validator*; log the rest."""
    kept: list[T] = []
    for record in records:
        result = validator(record)
        if result.valid:
            kept.append(record)
        else:
            logger.warning("Dropping invalid record %r: %s", record, "; ".join(result.errors))
    return kept
