"""
modules/planning/trip_aggregator.py
-------------------------------------
Trip-wide leg recalculation.

For each day d in the trip:
  1. Partition the flat stop list by day.
  2. d in reorder_days → Day Sequencer, then Day Leg Recalculator.
     otherwise         → sort by (sequence_index, time_slot), then
                         Day Leg Recalculator.
  3. Day 0 (unscheduled) is passed through with outgoing_leg=None and is
     never sequenced.
  4. Reassemble in the caller's flat order.  A reordered day is emitted as
     one contiguous block at the position of its first original stop.

Reordered days can be seeded from a start point (one for every day, or one
per day such as each night's hotel) and kept inside time blocks; see
day_sequencer.

Days are independent, so with max_workers > 1 they are computed on a
thread pool; the merge is a pure reassembly and the output is identical
to the sequential path.
"""

from __future__ import annotations
import logging
import time as _time_mod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Collection, Iterable, Mapping, Optional, Sequence, Union

from itinerary_engine.modules.observability.logger import StructuredLogger
from itinerary_engine.modules.planning.day_sequencer import SequencingStrategy, sequence
from itinerary_engine.modules.planning.leg_planner import recalc_day
from itinerary_engine.modules.planning.load_validator import validate_load
from itinerary_engine.modules.tool_usage.distance_tool import DistanceTool
from itinerary_engine.schemas.itinerary import (
    UNSCHEDULED_DAY,
    Coordinate,
    Stop,
    TravelMode,
    TripPlan,
)
from itinerary_engine.schemas.policy import PlanningPolicy

logger = logging.getLogger(__name__)

# One start point for every reordered day, or one per day number.
StartPoints = Union[Coordinate, Mapping[int, Coordinate], None]


def _existing_order_key(item: tuple[int, Stop]) -> tuple[int, bool, str]:
    """sequence_index first, then time_slot (stops without one last)."""
    _, stop = item
    return (stop.sequence_index, stop.time_slot is None, stop.time_slot or "")


@dataclass
class _DayResult:
    day: int
    reordered: bool
    stops: list[Stop] = field(default_factory=list)
    # flat-list index → updated stop (only for days kept in existing order)
    by_index: dict[int, Stop] = field(default_factory=dict)


class TripLegPlanner:
    """
    Fans day-level planning out over every day of a trip.

    Stateless between calls: nothing is cached, so identical input is
    always recomputed from scratch.
    """

    def __init__(
        self,
        policy: Optional[PlanningPolicy] = None,
        strategy: SequencingStrategy | str = SequencingStrategy.NEAREST_NEIGHBOR,
        mode: TravelMode | str | None = None,
        max_workers: Optional[int] = None,
        perf_logger: Optional[StructuredLogger] = None,
        start_from: StartPoints = None,
        respect_time_blocks: bool = False,
    ) -> None:
        self.distance_tool = DistanceTool(policy)
        self.policy = self.distance_tool.policy
        self.strategy = SequencingStrategy(strategy)
        self.mode = TravelMode.parse(mode or self.policy.default_mode)
        self.max_workers = max_workers
        self.perf_logger = perf_logger
        self.start_from = start_from
        self.respect_time_blocks = respect_time_blocks

    # ── Public entry points ───────────────────────────────────────────────────

    def recalc(self, stops: Sequence[Stop], reorder_days: Collection[int] = ()) -> list[Stop]:
        """Flat stop list with fresh legs (and new order for reorder_days)."""
        if not stops:
            return []

        reorder = set(reorder_days)
        if UNSCHEDULED_DAY in reorder:
            logger.debug("recalc: day 0 holds unscheduled stops and is never reordered")
            reorder.discard(UNSCHEDULED_DAY)

        by_day: dict[int, list[tuple[int, Stop]]] = {}
        for idx, stop in enumerate(stops):
            if not stop.is_scheduled:
                continue
            by_day.setdefault(stop.day, []).append((idx, stop))

        jobs = [(day, members, day in reorder) for day, members in by_day.items()]
        if self.max_workers and self.max_workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(lambda job: self._plan_day(*job), jobs))
        else:
            results = [self._plan_day(*job) for job in jobs]

        return self._reassemble(stops, {r.day: r for r in results})

    def plan(
        self,
        stops: Sequence[Stop],
        reorder_days: Collection[int] = (),
        trip_id: str = "default",
    ) -> TripPlan:
        """
        Recalculate the trip and classify every scheduled day's load.

        trip_id is opaque; it only keys the optional structured log.
        """
        _t0 = _time_mod.perf_counter()
        flat = self.recalc(stops, reorder_days)

        days: dict[int, list[Stop]] = {}
        for stop in flat:
            if stop.is_scheduled:
                days.setdefault(stop.day, []).append(stop)
        reports = tuple(
            validate_load(days[d], day=d, policy=self.policy) for d in sorted(days)
        )
        plan = TripPlan(stops=tuple(flat), day_reports=reports)

        if self.perf_logger is not None:
            for report in reports:
                if report.overloaded:
                    self.perf_logger.log(trip_id, "DAY_OVERLOADED", {
                        "day": report.day,
                        "total_transit_minutes": report.total_transit_minutes,
                        "threshold_minutes": self.policy.overload_threshold_minutes,
                    })
            self.perf_logger.log(trip_id, "PERFORMANCE", {
                "component": "TripLegPlanner.plan",
                "duration_ms": round((_time_mod.perf_counter() - _t0) * 1000, 2),
                "stop_count": len(flat),
                "day_count": len(reports),
                "reordered_days": sorted(d for d in set(reorder_days) if d in days),
            })
        return plan

    # ── Per-day work ──────────────────────────────────────────────────────────

    def _plan_day(self, day: int, members: list[tuple[int, Stop]], reorder: bool) -> _DayResult:
        if reorder:
            ordered = sequence(
                [s for _, s in members],
                self.strategy,
                self.distance_tool,
                start_from=self._start_for(day),
                respect_time_blocks=self.respect_time_blocks,
            )
            with_legs = recalc_day(ordered, self.mode, self.policy)
            logger.debug("Day %d: resequenced %d stop(s)", day, len(with_legs))
            return _DayResult(day=day, reordered=True, stops=with_legs)

        ordered_pairs = sorted(members, key=_existing_order_key)
        with_legs = recalc_day([s for _, s in ordered_pairs], self.mode, self.policy)
        return _DayResult(
            day=day,
            reordered=False,
            stops=with_legs,
            by_index={idx: s for (idx, _), s in zip(ordered_pairs, with_legs)},
        )

    def _start_for(self, day: int) -> Optional[Coordinate]:
        if self.start_from is None or isinstance(self.start_from, Coordinate):
            return self.start_from
        return self.start_from.get(day)

    # ── Merge ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _reassemble(stops: Sequence[Stop], results: dict[int, _DayResult]) -> list[Stop]:
        out: list[Stop] = []
        emitted: set[int] = set()
        for idx, stop in enumerate(stops):
            if not stop.is_scheduled:
                out.append(stop.with_leg(None))
                continue
            result = results[stop.day]
            if not result.reordered:
                out.append(result.by_index[idx])
            elif stop.day not in emitted:
                out.extend(result.stops)
                emitted.add(stop.day)
        return out


def recalc_trip(
    stops: Iterable[Stop],
    reorder_days: Collection[int] = (),
    *,
    policy: Optional[PlanningPolicy] = None,
    strategy: SequencingStrategy | str = SequencingStrategy.NEAREST_NEIGHBOR,
    mode: TravelMode | str | None = None,
    max_workers: Optional[int] = None,
    start_from: StartPoints = None,
    respect_time_blocks: bool = False,
) -> list[Stop]:
    """
    Recompute legs for every day of a trip; resequence the days in reorder_days.

    start_from and respect_time_blocks only affect the reordered days.

    Total over any input: an empty collection returns [].
    """
    planner = TripLegPlanner(
        policy=policy,
        strategy=strategy,
        mode=mode,
        max_workers=max_workers,
        start_from=start_from,
        respect_time_blocks=respect_time_blocks,
    )
    return planner.recalc(list(stops), reorder_days)
