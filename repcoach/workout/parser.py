"""Workout payload parser (LLM response objects and JSON files)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from repcoach.workout.model import Exercise, Workout


class WorkoutParseError(ValueError):
    """Raised when a workout payload is invalid."""


def load_workout(path: str | Path) -> Workout:
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise WorkoutParseError(
            f"Unsupported workout format '{file_path.suffix}'. Use .json"
        )
    return parse_workout_text(file_path.read_text(encoding="utf-8"))


def parse_workout_text(text: str) -> Workout:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc
    return parse_workout_payload(data)


def parse_workout_payload(data: object) -> Workout:
    if not isinstance(data, dict):
        raise WorkoutParseError("Workout JSON must be an object")

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise WorkoutParseError("Workout field 'title' must be a non-empty string")

    warmup = _string_list(data.get("warmup"), field_name="warmup")
    cooldown = _string_list(data.get("cooldown"), field_name="cooldown")

    main_obj = data.get("main_workout")
    if not isinstance(main_obj, list):
        raise WorkoutParseError("Workout field 'main_workout' must be an array")

    exercises = tuple(_build_exercise(raw, index=i) for i, raw in enumerate(main_obj))

    return Workout(
        title=title.strip(),
        warmup=warmup,
        exercises=exercises,
        cooldown=cooldown,
    )


def workout_to_payload(workout: Workout) -> dict[str, Any]:
    return {
        "title": workout.title,
        "warmup": list(workout.warmup),
        "main_workout": [
            {
                "exercise": ex.name,
                "sets": ex.sets,
                "reps": ex.reps_description,
                "rest_time": ex.rest_time_text,
                "focus_note": ex.focus_note,
            }
            for ex in workout.exercises
        ],
        "cooldown": list(workout.cooldown),
    }


def _build_exercise(raw: object, *, index: int) -> Exercise:
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"Exercise {index + 1}: must be an object")

    name_obj = raw.get("exercise")
    if not isinstance(name_obj, str) or not name_obj.strip():
        raise WorkoutParseError(f"Exercise {index + 1}: invalid exercise name")

    return Exercise(
        name=name_obj.strip(),
        sets=_parse_sets(raw.get("sets"), index=index),
        reps_description=_optional_text(raw.get("reps")),
        rest_time_text=_optional_text(raw.get("rest_time")),
        focus_note=_optional_text(raw.get("focus_note")),
    )


def _parse_sets(raw: object, *, index: int) -> int:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"Exercise {index + 1}: invalid sets")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise WorkoutParseError(f"Exercise {index + 1}: invalid sets")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"Exercise {index + 1}: invalid sets") from exc


def _string_list(raw: object, *, field_name: str) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise WorkoutParseError(f"Workout field '{field_name}' must be an array")
    return tuple(str(item).strip() for item in raw if item is not None and str(item).strip())


def _optional_text(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()
