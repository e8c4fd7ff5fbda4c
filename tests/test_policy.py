import pytest

from itinerary_engine import config
from itinerary_engine.errors import InvalidModeError, InvalidPolicyError, PlanningError
from itinerary_engine.schemas.itinerary import TravelMode
from itinerary_engine.schemas.policy import DEFAULT_POLICY, PlanningPolicy


def test_default_policy_mirrors_config():
    assert DEFAULT_POLICY.detour_multiplier == config.DETOUR_MULTIPLIER
    assert DEFAULT_POLICY.overload_threshold_minutes == 240
    assert DEFAULT_POLICY.default_mode is TravelMode.DRIVING
    assert dict(DEFAULT_POLICY.speeds_kmh) == {
        TravelMode.WALKING: 5.0, TravelMode.TRANSIT: 30.0, TravelMode.DRIVING: 50.0,
    }


def test_with_overrides_returns_a_new_policy():
    relaxed = DEFAULT_POLICY.with_overrides(overload_threshold_minutes=180)
    assert relaxed.overload_threshold_minutes == 180
    assert DEFAULT_POLICY.overload_threshold_minutes == 240
    assert relaxed.speeds_kmh == DEFAULT_POLICY.speeds_kmh


def test_speeds_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_POLICY.speeds_kmh[TravelMode.DRIVING] = 1.0


def test_speed_for_accepts_strings():
    assert DEFAULT_POLICY.speed_for("transit") == 30.0
    with pytest.raises(InvalidModeError):
        DEFAULT_POLICY.speed_for("hovercraft")


@pytest.mark.parametrize("changes", [
    {"detour_multiplier": 0.9},
    {"overload_threshold_minutes": -1},
    {"speeds_kmh": {"driving": 0.0}},
    {"speeds_kmh": {"walking": 5.0}},  # default mode driving has no speed
])
def test_unusable_policies_are_rejected(changes):
    with pytest.raises(InvalidPolicyError, match="ERROR_INVALID_POLICY"):
        PlanningPolicy(**changes)


def test_errors_share_a_base_class():
    assert issubclass(InvalidModeError, PlanningError)
    assert issubclass(InvalidPolicyError, PlanningError)


def test_policies_are_hashable():
    assert hash(PlanningPolicy.default()) == hash(PlanningPolicy())
    relaxed = DEFAULT_POLICY.with_overrides(speeds_kmh={"driving": 40.0})
    labels = {DEFAULT_POLICY: "default", relaxed: "slow"}
    assert labels[PlanningPolicy.default()] == "default"
    assert labels[relaxed] == "slow"
