from __future__ import annotations

import json
from pathlib import Path

import pytest

from repcoach.workout.parser import (
    WorkoutParseError,
    load_workout,
    parse_workout_payload,
    workout_to_payload,
)


def _payload(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "title": "Leg Day",
        "warmup": ["Jumping jacks", "  ", "Leg swings"],
        "main_workout": [
            {
                "exercise": "Goblet Squat (高腳杯深蹲)",
                "sets": "4",
                "reps": "10",
                "rest_time": "45 seconds",
                "focus_note": "Chest up",
            },
            {"exercise": "Wall Sit", "sets": 2.0},
        ],
        "cooldown": ["Quad stretch"],
    }
    data.update(overrides)
    return data


def test_load_workout_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "legs.json"
    workout_file.write_text(json.dumps(_payload(), ensure_ascii=False), encoding="utf-8")

    workout = load_workout(workout_file)

    assert workout.title == "Leg Day"
    assert workout.warmup == ("Jumping jacks", "Leg swings")
    assert len(workout.exercises) == 2
    assert workout.exercises[0].sets == 4
    assert workout.exercises[0].rest_time_text == "45 seconds"
    assert workout.exercises[1].sets == 2
    assert workout.exercises[1].rest_time_text == ""


def test_load_workout_invalid_extension(tmp_path: Path) -> None:
    workout_file = tmp_path / "legs.csv"
    workout_file.write_text("exercise,sets\nSquat,3\n", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_workout(workout_file)


def test_load_workout_invalid_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "broken.json"
    workout_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_workout(workout_file)


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"warmup": "Jumping jacks"},
        {"main_workout": None},
        {"main_workout": ["Squat"]},
        {"main_workout": [{"sets": 3}]},
        {"main_workout": [{"exercise": "Squat", "sets": True}]},
        {"main_workout": [{"exercise": "Squat", "sets": 2.5}]},
    ],
)
def test_parse_workout_payload_rejects_invalid_fields(overrides: dict[str, object]) -> None:
    with pytest.raises(WorkoutParseError):
        parse_workout_payload(_payload(**overrides))


def test_parse_workout_payload_accepts_zero_sets() -> None:
    workout = parse_workout_payload(
        _payload(main_workout=[{"exercise": "Optional finisher", "sets": 0}])
    )

    assert workout.exercises[0].sets == 0


def test_workout_to_payload_uses_wire_names() -> None:
    workout = parse_workout_payload(_payload())

    payload = workout_to_payload(workout)

    assert payload["main_workout"][0]["exercise"] == "Goblet Squat (高腳杯深蹲)"
    assert payload["main_workout"][0]["rest_time"] == "45 seconds"
    assert parse_workout_payload(payload) == workout
