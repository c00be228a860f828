"""Turn an exercise list into a timed work/rest interval sequence."""

from __future__ import annotations

import math
from typing import Iterable

from repcoach.workout.duration import parse_duration
from repcoach.workout.model import Exercise, Interval, IntervalKind, total_duration_sec

DEFAULT_WORK_SECONDS = 30
MIN_WORK_SECONDS = 15
MAX_WORK_SECONDS = 90


def build_intervals(
    exercises: Iterable[Exercise],
    target_minutes: float | None = None,
) -> tuple[Interval, ...]:
    """Build the Work/Rest sequence for ``exercises``.

    With a target, one shared work duration is solved so that work plus the
    parsed rests fill ``target_minutes``, then clamped to
    [MIN_WORK_SECONDS, MAX_WORK_SECONDS]. Rest durations are kept as parsed.
    """
    planned = [(ex, parse_duration(ex.rest_time_text)) for ex in exercises]

    total_rest_sec = 0
    work_slots = 0
    for exercise, rest_sec in planned:
        if exercise.sets <= 0:
            continue
        total_rest_sec += rest_sec * exercise.sets
        work_slots += exercise.sets

    work_sec = _fit_work_seconds(target_minutes, total_rest_sec, work_slots)

    intervals: list[Interval] = []
    for exercise, rest_sec in planned:
        for set_index in range(1, exercise.sets + 1):
            intervals.append(
                Interval(
                    kind=IntervalKind.WORK,
                    duration_sec=work_sec,
                    exercise_name=exercise.name,
                    set_index=set_index,
                    total_sets=exercise.sets,
                )
            )
            intervals.append(
                Interval(
                    kind=IntervalKind.REST,
                    duration_sec=rest_sec,
                    exercise_name=exercise.name,
                    set_index=set_index,
                    total_sets=exercise.sets,
                )
            )
    return tuple(intervals)


def estimated_duration_minutes(
    exercises: Iterable[Exercise],
    target_minutes: float | None = None,
) -> int:
    intervals = build_intervals(exercises, target_minutes)
    return _round_half_up(total_duration_sec(intervals) / 60)


def _fit_work_seconds(
    target_minutes: float | None, total_rest_sec: int, work_slots: int
) -> int:
    if not target_minutes or work_slots <= 0:
        return DEFAULT_WORK_SECONDS
    ideal = _round_half_up((target_minutes * 60 - total_rest_sec) / work_slots)
    return max(MIN_WORK_SECONDS, min(MAX_WORK_SECONDS, ideal))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
