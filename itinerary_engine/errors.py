"""
errors.py
---------
Exception types raised by the planning engine.

The engine is pure computation, so the taxonomy is narrow: only programming
errors at the call site (an unknown transport mode, an unusable policy) are
raised.  Missing coordinates, empty days and out-of-range coordinates are
not errors here; see modules/validation for boundary checks.
"""


class PlanningError(Exception):
    """Base class for all itinerary engine errors."""


class InvalidModeError(PlanningError, ValueError):
    """Transport mode is not one of the closed set, or has no configured speed."""

    def __init__(self, mode: object, known: tuple[str, ...] = ()) -> None:
        self.mode = mode
        self.known = known
        detail = f"; expected one of {', '.join(known)}" if known else ""
        super().__init__(f"ERROR_INVALID_MODE: unknown transport mode {mode!r}{detail}")


class InvalidPolicyError(PlanningError, ValueError):
    """A PlanningPolicy value that would make leg estimation meaningless."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"ERROR_INVALID_POLICY: {reason}")
