"""
schemas/policy.py
-----------------
PlanningPolicy: the overridable policy constants behind leg estimation
and day-load classification.

``PlanningPolicy.default()`` mirrors config.py.  A per-trip policy is built
with ``with_overrides``:

    relaxed = PlanningPolicy.default().with_overrides(overload_threshold_minutes=180)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from itinerary_engine import config
from itinerary_engine.errors import InvalidModeError, InvalidPolicyError
from itinerary_engine.schemas.itinerary import TravelMode


def _default_speeds() -> Mapping[TravelMode, float]:
    return MappingProxyType(
        {TravelMode.parse(mode): float(kmh) for mode, kmh in config.MODE_SPEEDS_KMH.items()}
    )


@dataclass(frozen=True)
class PlanningPolicy:
    """
    Policy knobs for one planning call.

    Fields:
        detour_multiplier:          road km per straight-line km (>= 1.0).
        speeds_kmh:                 average speed per TravelMode (all > 0); read-only,
                                    left out of hash().
        overload_threshold_minutes: day is overloaded when transit > this.
        default_mode:               mode used by recalc_day when none is given.
    """
    detour_multiplier: float = config.DETOUR_MULTIPLIER
    speeds_kmh: Mapping[TravelMode, float] = field(
        default_factory=_default_speeds, hash=False,
    )
    overload_threshold_minutes: int = config.OVERLOAD_THRESHOLD_MINUTES
    default_mode: TravelMode = TravelMode.parse(config.DEFAULT_MODE)

    def __post_init__(self) -> None:
        speeds = {TravelMode.parse(mode): float(kmh) for mode, kmh in self.speeds_kmh.items()}
        object.__setattr__(self, "speeds_kmh", MappingProxyType(speeds))
        object.__setattr__(self, "default_mode", TravelMode.parse(self.default_mode))

        if self.detour_multiplier < 1.0:
            raise InvalidPolicyError(
                f"detour_multiplier={self.detour_multiplier} must be >= 1.0"
            )
        if self.overload_threshold_minutes < 0:
            raise InvalidPolicyError(
                f"overload_threshold_minutes={self.overload_threshold_minutes} must be >= 0"
            )
        for mode, kmh in speeds.items():
            if kmh <= 0.0:
                raise InvalidPolicyError(f"speed for {mode.value!r} must be > 0 (got {kmh})")
        if self.default_mode not in speeds:
            raise InvalidPolicyError(
                f"default_mode {self.default_mode.value!r} has no configured speed"
            )

    @classmethod
    def default(cls) -> "PlanningPolicy":
        return cls()

    def with_overrides(self, **changes) -> "PlanningPolicy":
        """Return a copy with *changes* applied (validated again)."""
        return replace(self, **changes)

    def speed_for(self, mode: TravelMode | str) -> float:
        """Average speed for *mode* in km/h."""
        parsed = TravelMode.parse(mode)
        try:
            return self.speeds_kmh[parsed]
        except KeyError:
            raise InvalidModeError(
                parsed.value, tuple(m.value for m in self.speeds_kmh)
            ) from None

    def is_overloaded(self, total_transit_minutes: int) -> bool:
        return total_transit_minutes > self.overload_threshold_minutes


DEFAULT_POLICY = PlanningPolicy.default()
