"""Interval player state machine.

Everything here is pure: ``reduce`` maps a state and an event to the next
state, and ``dispatch`` additionally derives the tone/voice cues that the
new state calls for. Timing and adapter calls live in
``repcoach.core.driver``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from repcoach.workout.model import Interval, IntervalKind

ANNOUNCE_AT_SECONDS = 5
COUNTDOWN_TONE_SECONDS = frozenset({1, 2, 3})


class EmptySessionError(ValueError):
    """Raised when a player is opened on an empty interval sequence."""


class PlayerPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"
    CLOSED = "closed"


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SecondsExhausted:
    pass


@dataclass(frozen=True)
class TogglePlay:
    pass


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class ToggleMute:
    pass


@dataclass(frozen=True)
class Close:
    pass


PlayerEvent = Union[Tick, SecondsExhausted, TogglePlay, Skip, ToggleMute, Close]


@dataclass(frozen=True)
class ToneCue:
    seconds_left: int


@dataclass(frozen=True)
class VoiceCue:
    exercise_name: str


Cue = Union[ToneCue, VoiceCue]


@dataclass(frozen=True)
class PlayerState:
    intervals: tuple[Interval, ...]
    current_index: int = 0
    seconds_left: int = 0
    is_playing: bool = False
    is_muted: bool = False
    has_announced_upcoming_work: bool = False
    phase: PlayerPhase = PlayerPhase.IDLE

    @property
    def current(self) -> Interval:
        return self.intervals[self.current_index]

    @property
    def next_interval(self) -> Interval | None:
        index = self.current_index + 1
        if index < len(self.intervals):
            return self.intervals[index]
        return None

    @property
    def has_next(self) -> bool:
        return self.current_index + 1 < len(self.intervals)

    @property
    def is_ticking(self) -> bool:
        return (
            self.phase is not PlayerPhase.CLOSED
            and self.is_playing
            and self.seconds_left > 0
        )


def open_player(intervals: tuple[Interval, ...], *, muted: bool = False) -> PlayerState:
    if not intervals:
        raise EmptySessionError("No intervals to play")
    state = PlayerState(
        intervals=tuple(intervals),
        seconds_left=intervals[0].duration_sec,
        is_muted=muted,
    )
    return _exhaust(state)


def reduce(state: PlayerState, event: PlayerEvent) -> PlayerState:
    if state.phase is PlayerPhase.CLOSED:
        return state

    if isinstance(event, Tick):
        if not state.is_playing or state.seconds_left <= 0:
            return state
        ticked = replace(state, seconds_left=state.seconds_left - 1)
        if ticked.seconds_left == 0:
            return _exhaust(ticked)
        return ticked

    if isinstance(event, SecondsExhausted):
        if state.seconds_left > 0:
            return state
        return _exhaust(state)

    if isinstance(event, TogglePlay):
        if state.phase is PlayerPhase.FINISHED:
            return state
        playing = not state.is_playing
        phase = PlayerPhase.RUNNING if playing else PlayerPhase.PAUSED
        return replace(state, is_playing=playing, phase=phase)

    if isinstance(event, Skip):
        if state.has_next:
            return _exhaust(_advance(state))
        return replace(state, is_playing=False, phase=PlayerPhase.CLOSED)

    if isinstance(event, ToggleMute):
        return replace(state, is_muted=not state.is_muted)

    if isinstance(event, Close):
        return replace(state, is_playing=False, phase=PlayerPhase.CLOSED)

    raise TypeError(f"Unsupported player event: {event!r}")


def dispatch(state: PlayerState, event: PlayerEvent) -> tuple[PlayerState, tuple[Cue, ...]]:
    """Apply ``event`` and return the new state with the cues it triggers."""
    new_state = reduce(state, event)
    if new_state.phase is PlayerPhase.CLOSED or new_state.is_muted:
        return new_state, ()

    cues: list[Cue] = []
    if _should_announce(new_state):
        upcoming = new_state.next_interval
        assert upcoming is not None
        new_state = replace(new_state, has_announced_upcoming_work=True)
        cues.append(VoiceCue(exercise_name=upcoming.exercise_name))

    countdown_moved = (new_state.current_index, new_state.seconds_left) != (
        state.current_index,
        state.seconds_left,
    )
    if (
        countdown_moved
        and new_state.is_playing
        and new_state.seconds_left in COUNTDOWN_TONE_SECONDS
    ):
        cues.append(ToneCue(seconds_left=new_state.seconds_left))

    return new_state, tuple(cues)


def _advance(state: PlayerState) -> PlayerState:
    index = state.current_index + 1
    return replace(
        state,
        current_index=index,
        seconds_left=state.intervals[index].duration_sec,
        has_announced_upcoming_work=False,
    )


def _exhaust(state: PlayerState) -> PlayerState:
    # Zero-length intervals (e.g. "0 seconds" rest) are passed through.
    while state.seconds_left == 0:
        if not state.has_next:
            return replace(state, is_playing=False, phase=PlayerPhase.FINISHED)
        state = _advance(state)
    return state


def _should_announce(state: PlayerState) -> bool:
    if state.has_announced_upcoming_work or state.seconds_left != ANNOUNCE_AT_SECONDS:
        return False
    upcoming = state.next_interval
    return (
        upcoming is not None
        and state.current.kind is IntervalKind.REST
        and upcoming.kind is IntervalKind.WORK
    )
