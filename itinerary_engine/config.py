"""
config.py
---------
Central policy constants for the itinerary planning engine.

These are the defaults behind ``PlanningPolicy.default()``.  Callers that
need per-trip values (e.g. a relaxed itinerary with a lower overload
threshold) build a policy with ``PlanningPolicy.with_overrides(...)``
instead of editing this module.

Nothing here is read from the environment: the engine is a pure library
and its behaviour depends only on explicit arguments.
"""

# ── Geodesy ──────────────────────────────────────────────────────────────────
EARTH_RADIUS_KM: float = 6371.0
MILES_PER_KM: float    = 0.621371

# ── Travel-leg estimation ────────────────────────────────────────────────────
# Road distance is longer than the great-circle line; 1.3 approximates the
# routing overhead of a typical street grid.
DETOUR_MULTIPLIER: float = 1.3

# Average speed per transport mode (km/h)
MODE_SPEEDS_KMH: dict[str, float] = {
    "walking": 5.0,
    "transit": 30.0,
    "driving": 50.0,
}

DEFAULT_MODE: str = "driving"

# ── Day load policy ──────────────────────────────────────────────────────────
# A day is overloaded when its summed transit time is strictly greater than this.
OVERLOAD_THRESHOLD_MINUTES: int = 240   # 4 hours

# ── Sequencing ───────────────────────────────────────────────────────────────
TWO_OPT_MAX_ITERATIONS: int = 100
TWO_OPT_MIN_STOPS: int      = 4

# Time-block boundaries, minutes after midnight (morning < 12:00 <= afternoon < 17:00 <= evening)
AFTERNOON_STARTS_AT_MINUTE: int = 12 * 60
EVENING_STARTS_AT_MINUTE: int   = 17 * 60

# ── Route comparison heuristics ──────────────────────────────────────────────
SAVINGS_SPEED_KMH: float          = 5.0    # time-saved estimates assume walking
BACKTRACK_RATIO: float            = 1.5    # via-point detour that counts as backtracking
OPTIMAL_TOUR_PAIR_FACTOR: float   = 0.7    # est. optimal ≈ 0.7 × avg pair distance × (n-1)
SAVINGS_HIGH_CONFIDENCE_PCT: float   = 20.0
SAVINGS_MEDIUM_CONFIDENCE_PCT: float = 10.0
