"""Async controller used by the web UI."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from repcoach.core.adapters import ToneAdapter, VoiceAdapter
from repcoach.core.driver import PlayerDriver
from repcoach.core.player import PlayerState
from repcoach.generation.client import GenerationRequest, WorkoutGenerator
from repcoach.ui.translations import announcement
from repcoach.workout.checklist import Checklist
from repcoach.workout.intervals import build_intervals, estimated_duration_minutes
from repcoach.workout.model import Workout


class UIController:
    def __init__(
        self,
        generator: WorkoutGenerator | None = None,
        tick_interval_sec: float = 1.0,
    ) -> None:
        self._generator = generator or WorkoutGenerator()
        self._tick_interval_sec = tick_interval_sec
        self._driver: Optional[PlayerDriver] = None
        self.workout: Workout | None = None
        self.target_minutes: int | None = None
        self.checklist = Checklist()
        self.lang = "en"

    async def generate(self, request: GenerationRequest) -> Workout:
        # The OpenAI client is blocking; keep the event loop free.
        workout = await asyncio.to_thread(self._generator.generate, request)
        self.workout = workout
        self.target_minutes = request.time_minutes
        self.lang = request.language
        self.checklist.reset()
        return workout

    def clear_workout(self) -> None:
        self.close_player()
        self.workout = None
        self.target_minutes = None
        self.checklist.reset()

    def estimated_minutes(self) -> int | None:
        if self.workout is None or not self.target_minutes:
            return None
        return estimated_duration_minutes(self.workout.exercises, self.target_minutes)

    def open_player(
        self,
        *,
        tone: ToneAdapter,
        voice: VoiceAdapter,
        on_change: Callable[[PlayerState], None],
        on_close: Callable[[], None],
    ) -> PlayerState:
        """Open the interval player; raises EmptySessionError if nothing to play."""
        if self.workout is None:
            raise RuntimeError("No workout loaded")
        self.close_player()
        intervals = build_intervals(self.workout.exercises, self.target_minutes)
        lang = self.lang
        driver = PlayerDriver(
            tone=tone,
            voice=voice,
            announce_text=lambda name: announcement(name, lang),
            on_change=on_change,
            on_close=on_close,
            tick_interval_sec=self._tick_interval_sec,
        )
        state = driver.open(intervals)
        self._driver = driver
        return state

    def close_player(self) -> None:
        if self._driver is not None:
            driver = self._driver
            self._driver = None
            driver.close()

    @property
    def player(self) -> Optional[PlayerDriver]:
        return self._driver
