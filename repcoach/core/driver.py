"""Asyncio driver that runs the player state machine in real time."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

from repcoach.core.adapters import ToneAdapter, VoiceAdapter, invoke_adapter
from repcoach.core.player import (
    Close,
    Cue,
    PlayerEvent,
    PlayerPhase,
    PlayerState,
    Skip,
    Tick,
    ToggleMute,
    TogglePlay,
    ToneCue,
    VoiceCue,
    dispatch,
    open_player,
)
from repcoach.workout.model import Interval

StateCallback = Callable[[PlayerState], None]
CloseCallback = Callable[[], None]
AnnounceFormatter = Callable[[str], str]


def _default_announcement(exercise_name: str) -> str:
    return f"Get ready for {exercise_name}"


class PlayerDriver:
    """Owns the 1-second ticker and the adapter calls for one player.

    All methods must be called from the event loop thread. The ticker task
    exists only while the state is playing with time left on the clock.
    """

    def __init__(
        self,
        *,
        tone: ToneAdapter,
        voice: VoiceAdapter,
        announce_text: AnnounceFormatter = _default_announcement,
        on_change: Optional[StateCallback] = None,
        on_close: Optional[CloseCallback] = None,
        tick_interval_sec: float = 1.0,
    ) -> None:
        self._tone = tone
        self._voice = voice
        self._announce_text = announce_text
        self._on_change = on_change
        self._on_close = on_close
        self._tick_interval_sec = tick_interval_sec
        self._state: Optional[PlayerState] = None
        self._task: Optional[asyncio.Task[None]] = None
        self._stopped = asyncio.Event()
        self._stopped.set()

    @property
    def state(self) -> Optional[PlayerState]:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is not None

    @property
    def is_ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def open(
        self,
        intervals: tuple[Interval, ...],
        *,
        autoplay: bool = False,
        muted: bool = False,
    ) -> PlayerState:
        """Start a new session; raises EmptySessionError for no intervals."""
        state = open_player(intervals, muted=muted)
        if self._state is not None:
            self.close()
        self._state = state
        print(f"[PLAYER] opened session with {len(intervals)} intervals")
        self._notify_change(state)
        if autoplay:
            self.toggle_play()
        return state

    def toggle_play(self) -> None:
        self._dispatch(TogglePlay())

    def skip(self) -> None:
        self._dispatch(Skip())

    def toggle_mute(self) -> None:
        self._dispatch(ToggleMute())

    def close(self) -> None:
        self._dispatch(Close())

    async def wait_stopped(self) -> None:
        """Wait until the ticker is not running (paused, finished or closed)."""
        await self._stopped.wait()

    def _dispatch(self, event: PlayerEvent) -> None:
        if self._state is None:
            return
        state, cues = dispatch(self._state, event)
        closed = state.phase is PlayerPhase.CLOSED
        self._state = None if closed else state
        for cue in cues:
            self._emit(cue)
        self._sync_timer()
        self._notify_change(state)
        if closed:
            print("[PLAYER] session closed")
            if self._on_close is not None:
                self._on_close()
        elif state.phase is PlayerPhase.FINISHED and isinstance(event, Tick):
            print("[PLAYER] session finished")

    def _emit(self, cue: Cue) -> None:
        loop = asyncio.get_running_loop()
        if isinstance(cue, ToneCue):
            loop.call_soon(invoke_adapter, "AUDIO", self._tone)
        elif isinstance(cue, VoiceCue):
            text = self._announce_text(cue.exercise_name)
            loop.call_soon(invoke_adapter, "VOICE", self._voice, text)

    def _sync_timer(self) -> None:
        should_tick = self._state is not None and self._state.is_ticking
        if should_tick and self._task is None:
            self._stopped.clear()
            self._task = asyncio.get_running_loop().create_task(self._tick_loop())
            return
        if not should_tick and self._task is not None:
            task = self._task
            self._task = None
            if task is not asyncio.current_task():
                task.cancel()
        if not should_tick:
            self._stopped.set()

    async def _tick_loop(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self._tick_interval_sec)
            if self._task is not me:
                return
            self._dispatch(Tick())

    def _notify_change(self, state: PlayerState) -> None:
        if self._on_change is not None:
            self._on_change(state)
