"""Best-effort tone and voice outputs used by the player driver."""

from __future__ import annotations

import sys
from typing import Callable

ToneAdapter = Callable[[], None]
VoiceAdapter = Callable[[str], None]


def invoke_adapter(tag: str, adapter: Callable[..., None], *args: object) -> None:
    """Call an output adapter, swallowing any failure."""
    try:
        adapter(*args)
    except Exception as exc:
        print(f"[{tag}] output unavailable: {exc}")


def terminal_tone() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


def terminal_voice(text: str) -> None:
    print(f">> {text}")
