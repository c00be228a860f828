"""Per-session "done" marks for the warmup, exercise and cooldown lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Section = Literal["warmup", "exercises", "cooldown"]


@dataclass
class Checklist:
    warmup: set[int] = field(default_factory=set)
    exercises: set[int] = field(default_factory=set)
    cooldown: set[int] = field(default_factory=set)

    def toggle(self, section: Section, index: int) -> bool:
        """Flip one item and return its new checked value."""
        marks = self._section(section)
        if index in marks:
            marks.discard(index)
            return False
        marks.add(index)
        return True

    def is_checked(self, section: Section, index: int) -> bool:
        return index in self._section(section)

    def reset(self) -> None:
        self.warmup.clear()
        self.exercises.clear()
        self.cooldown.clear()

    def _section(self, section: Section) -> set[int]:
        if section == "warmup":
            return self.warmup
        if section == "exercises":
            return self.exercises
        if section == "cooldown":
            return self.cooldown
        raise ValueError(f"Unknown checklist section '{section}'")
