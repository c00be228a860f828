from __future__ import annotations

import pytest

from repcoach.workout.duration import DEFAULT_REST_SECONDS, parse_duration


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("30 seconds", 30),
        ("45s", 45),
        ("1 minute", 60),
        ("2 min", 120),
        ("2 Minutes", 120),
        ("2分鐘", 120),
        ("1分钟", 60),
        ("30秒", 30),
    ],
)
def test_parse_duration_units(text: str, expected: int) -> None:
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "rest as needed", "休息", None, 42])
def test_parse_duration_falls_back_to_default(text: object) -> None:
    assert parse_duration(text) == DEFAULT_REST_SECONDS == 30


def test_parse_duration_joins_all_digits() -> None:
    # Every digit is kept, separators included.
    assert parse_duration("60-90 seconds") == 6090
    assert parse_duration("-15 seconds") == 15
