"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Exercise:
    name: str
    sets: int
    reps_description: str = ""
    rest_time_text: str = ""
    focus_note: str = ""


@dataclass(frozen=True)
class Workout:
    title: str
    warmup: tuple[str, ...]
    exercises: tuple[Exercise, ...]
    cooldown: tuple[str, ...]


class IntervalKind(str, Enum):
    WORK = "work"
    REST = "rest"


@dataclass(frozen=True)
class Interval:
    kind: IntervalKind
    duration_sec: int
    exercise_name: str
    set_index: int
    total_sets: int

    @property
    def is_work(self) -> bool:
        return self.kind is IntervalKind.WORK


def total_duration_sec(intervals: tuple[Interval, ...]) -> int:
    return sum(interval.duration_sec for interval in intervals)
