from __future__ import annotations

import asyncio

from repcoach.core.driver import PlayerDriver
from repcoach.core.player import PlayerPhase, PlayerState
from repcoach.workout.model import Interval, IntervalKind

TICK = 0.01


def _intervals() -> tuple[Interval, ...]:
    return (
        Interval(IntervalKind.WORK, 3, "Squat", 1, 1),
        Interval(IntervalKind.REST, 2, "Squat", 1, 1),
    )


class _Recorder:
    def __init__(self) -> None:
        self.tones = 0
        self.phrases: list[str] = []
        self.states: list[PlayerState] = []
        self.closed = 0

    def tone(self) -> None:
        self.tones += 1

    def voice(self, text: str) -> None:
        self.phrases.append(text)

    def on_change(self, state: PlayerState) -> None:
        self.states.append(state)

    def on_close(self) -> None:
        self.closed += 1

    def driver(self) -> PlayerDriver:
        return PlayerDriver(
            tone=self.tone,
            voice=self.voice,
            on_change=self.on_change,
            on_close=self.on_close,
            tick_interval_sec=TICK,
        )


def test_driver_runs_sequence_to_completion() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = rec.driver()

        driver.open(_intervals(), autoplay=True)
        assert driver.is_ticking

        await asyncio.wait_for(driver.wait_stopped(), timeout=2.0)
        await asyncio.sleep(0)

        state = driver.state
        assert state is not None
        assert state.phase is PlayerPhase.FINISHED
        assert state.current_index == 1
        assert state.is_playing is False
        assert not driver.is_ticking
        assert rec.tones == 4
        assert rec.closed == 0

    asyncio.run(_run())


def test_driver_pause_stops_ticking() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = rec.driver()
        long_work = (Interval(IntervalKind.WORK, 60, "Plank", 1, 1),)

        driver.open(long_work, autoplay=True)
        await asyncio.sleep(TICK * 4)
        driver.toggle_play()
        assert not driver.is_ticking

        state = driver.state
        assert state is not None
        frozen = state.seconds_left
        assert frozen < 60
        await asyncio.sleep(TICK * 5)
        assert driver.state == state

        driver.toggle_play()
        assert driver.is_ticking
        await asyncio.sleep(TICK * 4)
        current = driver.state
        assert current is not None
        assert current.seconds_left < frozen
        driver.close()

    asyncio.run(_run())


def test_driver_swallows_adapter_failures() -> None:
    async def _run() -> None:
        def broken_tone() -> None:
            raise RuntimeError("no audio device")

        def broken_voice(_text: str) -> None:
            raise OSError("speech engine missing")

        driver = PlayerDriver(tone=broken_tone, voice=broken_voice, tick_interval_sec=TICK)
        intervals = (
            Interval(IntervalKind.REST, 6, "Squat", 1, 2),
            Interval(IntervalKind.WORK, 3, "Squat", 2, 2),
        )

        driver.open(intervals, autoplay=True)
        await asyncio.wait_for(driver.wait_stopped(), timeout=2.0)

        state = driver.state
        assert state is not None
        assert state.phase is PlayerPhase.FINISHED
        assert state.current_index == 1

    asyncio.run(_run())


def test_driver_announces_with_formatter() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = PlayerDriver(
            tone=rec.tone,
            voice=rec.voice,
            announce_text=lambda name: f"Next up: {name}",
            tick_interval_sec=TICK,
        )
        intervals = (
            Interval(IntervalKind.REST, 6, "Squat", 1, 1),
            Interval(IntervalKind.WORK, 2, "Lunge", 1, 1),
        )

        driver.open(intervals, autoplay=True)
        await asyncio.wait_for(driver.wait_stopped(), timeout=2.0)
        await asyncio.sleep(0)

        assert rec.phrases == ["Next up: Lunge"]

    asyncio.run(_run())


def test_driver_close_cancels_timer_and_discards_state() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = rec.driver()

        driver.open(_intervals(), autoplay=True)
        await asyncio.sleep(TICK * 1.5)
        driver.close()

        assert driver.state is None
        assert not driver.is_ticking
        assert rec.closed == 1
        assert rec.states[-1].phase is PlayerPhase.CLOSED

        changes = len(rec.states)
        await asyncio.sleep(TICK * 5)
        assert len(rec.states) == changes

        driver.toggle_play()
        assert driver.state is None

    asyncio.run(_run())


def test_driver_skip_past_last_interval_closes() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = rec.driver()

        driver.open(_intervals())
        driver.skip()
        state = driver.state
        assert state is not None
        assert state.current_index == 1

        driver.skip()
        assert driver.state is None
        assert rec.closed == 1

    asyncio.run(_run())


def test_driver_skip_into_zero_rest_keeps_ticking() -> None:
    async def _run() -> None:
        rec = _Recorder()
        driver = rec.driver()
        intervals = (
            Interval(IntervalKind.WORK, 30, "Squat", 1, 1),
            Interval(IntervalKind.REST, 0, "Squat", 1, 1),
            Interval(IntervalKind.WORK, 30, "Row", 1, 1),
        )

        driver.open(intervals, autoplay=True)
        driver.skip()
        await asyncio.sleep(TICK * 5)

        state = driver.state
        assert state is not None
        assert state.current_index == 2
        assert state.seconds_left < 30
        assert driver.is_ticking
        driver.close()

    asyncio.run(_run())
